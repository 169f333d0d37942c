"""Shared fixtures."""

from pathlib import Path

import pytest


class FakeProbe:
    """Environment probe with fixed answers.

    A value of None for a command or directory makes that source fail.
    """

    def __init__(
        self,
        env: dict[str, str] | None = None,
        commands: dict[str, str | None] | None = None,
        dirs: dict[str, list[str]] | None = None,
        addresses: list[str] | None = None,
    ):
        self.env = env or {}
        self.commands = commands or {}
        self.dirs = dirs or {}
        self.addresses = addresses

    def getenv(self, key: str) -> str | None:
        return self.env.get(key)

    def command_output(self, args: list[str]) -> str:
        output = self.commands.get(args[0])
        if output is None:
            raise FileNotFoundError(args[0])
        return output

    def list_dir(self, path: str) -> list[str]:
        return self.dirs.get(path, [])

    def interface_addresses(self) -> list[str]:
        if self.addresses is None:
            raise OSError("interfaces unavailable")
        return self.addresses


@pytest.fixture
def fake_probe():
    """Return a probe for user 'alice' on host 'devbox-17'."""
    return FakeProbe(
        env={"USER": "alice", "HOME": "/home/alice", "HOSTNAME": "devbox-17"},
        commands={"whoami": "alice\n", "hostname": "devbox-17\n"},
        dirs={"/home": ["alice", "bob", ".cache"]},
        addresses=["127.0.0.1", "10.20.30.40", "fe80::1%eth0", "2001:db8::5"],
    )


@pytest.fixture
def make_tree(tmp_path):
    """Return a helper that writes {relative path: content} under tmp_path."""

    def _make(files: dict[str, str | bytes]) -> Path:
        for rel, content in files.items():
            path = tmp_path / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                path.write_bytes(content)
            else:
                path.write_text(content, encoding="utf-8")
        return tmp_path

    return _make


@pytest.fixture
def probe_factory():
    """Return the FakeProbe class for building custom environments."""
    return FakeProbe
