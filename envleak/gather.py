"""Candidate gathering - usernames, hostnames and IPs of the local machine."""

import ipaddress
import logging
import subprocess
from dataclasses import dataclass
from enum import Enum
from pathlib import PurePath
from typing import Callable, Iterable

import psutil

from envleak.probe import EnvironmentProbe, SystemProbe

logger = logging.getLogger(__name__)

USERNAME_ENV_KEYS = ["USER", "LOGNAME"]
HOSTNAME_ENV_KEYS = ["HOSTNAME", "COMPUTERNAME"]
HOME_PARENT_DIRS = ["/Users", "/home"]

# Errors a probe source may raise; anything else is a bug and propagates.
SOURCE_ERRORS = (OSError, subprocess.SubprocessError, ValueError, psutil.Error)

UNIQUE_LOCAL_V6 = ipaddress.ip_network("fc00::/7")


class CandidateKind(str, Enum):
    """Kind of environment-derived value."""

    USERNAME = "Username"
    HOSTNAME = "Hostname"
    IP = "IP"


@dataclass(frozen=True)
class Candidate:
    """A sensitive value to search for."""

    kind: CandidateKind
    value: str


def _collect(sources: Iterable[Callable[[], Iterable[str | None]]]) -> list[str]:
    """Run each source independently and merge the non-empty results.

    A failing source contributes nothing and does not stop the others.
    """
    found: set[str] = set()

    for source in sources:
        try:
            values = list(source())
        except SOURCE_ERRORS as e:
            logger.debug("Candidate source %s unavailable: %s", _source_name(source), e)
            continue

        for value in values:
            if value is None:
                continue
            value = value.strip()
            if value:
                found.add(value)

    return sorted(found)


def _source_name(source: Callable) -> str:
    return getattr(source, "__name__", repr(source))


def gather_usernames(probe: EnvironmentProbe) -> list[str]:
    """Gather usernames from env, home dir, `whoami` and home parent dirs."""

    def from_env() -> list[str | None]:
        return [probe.getenv(key) for key in USERNAME_ENV_KEYS]

    def from_home() -> list[str]:
        home = probe.getenv("HOME")
        return [PurePath(home).name] if home else []

    def from_whoami() -> list[str]:
        return [probe.command_output(["whoami"])]

    sources: list[Callable[[], Iterable[str | None]]] = [from_env, from_home, from_whoami]

    for base in HOME_PARENT_DIRS:

        def from_home_parent(base: str = base) -> list[str]:
            return [
                name
                for name in probe.list_dir(base)
                if not name.startswith(".") and len(name) > 1
            ]

        sources.append(from_home_parent)

    return _collect(sources)


def gather_hostnames(probe: EnvironmentProbe) -> list[str]:
    """Gather hostnames from env and the `hostname` command."""

    def from_env() -> list[str | None]:
        return [probe.getenv(key) for key in HOSTNAME_ENV_KEYS]

    def from_hostname() -> list[str]:
        return [probe.command_output(["hostname"])]

    return _collect([from_env, from_hostname])


def is_reportable_ip(raw: str) -> bool:
    """Check whether an interface address identifies this machine.

    Loopback and link-local addresses are excluded for both families; IPv6
    unspecified and unique-local addresses are excluded as well.
    """
    try:
        ip = ipaddress.ip_address(raw.split("%", 1)[0])
    except ValueError:
        return False

    if ip.is_loopback or ip.is_link_local:
        return False
    if isinstance(ip, ipaddress.IPv6Address):
        if ip.is_unspecified or ip in UNIQUE_LOCAL_V6:
            return False
    return True


def gather_ips(probe: EnvironmentProbe) -> list[str]:
    """Gather non-loopback, non-link-local interface addresses."""

    def from_interfaces() -> list[str]:
        return [
            str(ipaddress.ip_address(raw.split("%", 1)[0]))
            for raw in probe.interface_addresses()
            if is_reportable_ip(raw)
        ]

    return _collect([from_interfaces])


def gather_candidates(probe: EnvironmentProbe | None = None) -> list[Candidate]:
    """Gather all candidates: usernames, then hostnames, then IPs.

    Args:
        probe: Environment probe. Defaults to the real system.

    Returns:
        Candidates, sorted within each kind.
    """
    probe = probe or SystemProbe()
    candidates: list[Candidate] = []

    for kind, values in (
        (CandidateKind.USERNAME, gather_usernames(probe)),
        (CandidateKind.HOSTNAME, gather_hostnames(probe)),
        (CandidateKind.IP, gather_ips(probe)),
    ):
        candidates.extend(Candidate(kind=kind, value=value) for value in values)

    logger.info("Gathered %d candidate values", len(candidates))
    return candidates
