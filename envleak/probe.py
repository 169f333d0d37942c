"""Environment probes - the process-global state candidates are derived from."""

import os
import socket
import subprocess
from typing import Protocol

import psutil


class EnvironmentProbe(Protocol):
    """Read-only view of the local machine.

    Every method may raise; callers treat any failure as "no value".
    """

    def getenv(self, key: str) -> str | None: ...

    def command_output(self, args: list[str]) -> str: ...

    def list_dir(self, path: str) -> list[str]: ...

    def interface_addresses(self) -> list[str]: ...


class SystemProbe:
    """Probe backed by the real OS."""

    def __init__(self, command_timeout: float = 5.0):
        """Initialize system probe.

        Args:
            command_timeout: Seconds to wait for `whoami` / `hostname`.
        """
        self.command_timeout = command_timeout

    def getenv(self, key: str) -> str | None:
        return os.environ.get(key)

    def command_output(self, args: list[str]) -> str:
        """Run a local command and return its stdout.

        Raises:
            OSError: If the executable is missing.
            subprocess.SubprocessError: On non-zero exit or timeout.
            UnicodeDecodeError: If stdout is not valid UTF-8.
        """
        result = subprocess.run(
            args,
            capture_output=True,
            timeout=self.command_timeout,
            check=True,
        )
        return result.stdout.decode("utf-8")

    def list_dir(self, path: str) -> list[str]:
        if not os.path.isdir(path):
            return []
        return os.listdir(path)

    def interface_addresses(self) -> list[str]:
        """Return every IPv4/IPv6 address bound to a local interface."""
        addresses = []
        for addrs in psutil.net_if_addrs().values():
            for addr in addrs:
                if addr.family in (socket.AF_INET, socket.AF_INET6):
                    addresses.append(addr.address)
        return addresses
