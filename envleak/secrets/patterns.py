"""Secret patterns - regexes and file names used by the extra scans."""

import re
from dataclasses import dataclass, field
from pathlib import PurePosixPath


@dataclass
class SecretPattern:
    """Pattern definition for secret detection."""

    name: str
    pattern: str
    description: str = ""
    regex: re.Pattern[str] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.regex = re.compile(self.pattern)


# Any of these on a line counts as one secret hit for that line.
SECRET_PATTERNS = [
    SecretPattern(
        name="Secret Keyword",
        pattern=r"(?i)\b(api|secret|token|key|password|passwd|bearer|authorization)\b",
        description="Word commonly found next to a credential",
    ),
    SecretPattern(
        name="AWS Access Key ID",
        pattern=r"AKIA[0-9A-Z]{16}",
        description="AWS Access Key ID",
    ),
    SecretPattern(
        name="GitHub Personal Access Token",
        pattern=r"ghp_[A-Za-z0-9]{36,}",
        description="GitHub Personal Access Token",
    ),
    SecretPattern(
        name="Slack Token",
        pattern=r"xox[baprs]-[A-Za-z0-9-]{10,}",
        description="Slack Bot/User/App Token",
    ),
    SecretPattern(
        name="PEM Key Header",
        pattern=r"BEGIN (RSA|DSA|EC|OPENSSH) (PRIVATE|PUBLIC) KEY",
        description="PEM encoded key block",
    ),
]

# PII terms; only checked under documentation, example and test directories.
PII_PATTERN = SecretPattern(
    name="PII Term",
    pattern=r"(?i)(email|@example|phone|address|SIN|SSN|passport|license)",
    description="Personally identifying term",
)

PII_SCOPED_DIRS = {"docs", "examples", "tests"}

# Files that commonly carry credentials and should never be committed.
LEAK_FILE_NAMES = {
    ".envrc",
    "kubeconfig",
    ".npmrc",
    ".pypirc",
    ".netrc",
    ".git-credentials",
    ".aws",
}
LEAK_FILE_PREFIXES = (".env", "id_rsa", "id_ed25519")
LEAK_FILE_SUFFIXES = (".pem", ".p12", ".crt", ".key")
LEAK_PATH_SUFFIXES = (".kube/config",)


def line_has_secret(line: str) -> bool:
    """Check a line against all secret patterns."""
    return any(p.regex.search(line) for p in SECRET_PATTERNS)


def line_has_pii(line: str) -> bool:
    return PII_PATTERN.regex.search(line) is not None


def is_leak_file(path: str) -> bool:
    """Check whether a relative path names a leak-prone file or directory.

    Args:
        path: Relative POSIX path.

    Returns:
        True for dotenv files, SSH keys, certificates, credential caches, etc.
    """
    name = PurePosixPath(path).name
    return (
        name in LEAK_FILE_NAMES
        or name.startswith(LEAK_FILE_PREFIXES)
        or name.endswith(LEAK_FILE_SUFFIXES)
        or path.endswith(LEAK_PATH_SUFFIXES)
    )


def is_pii_scoped(path: str) -> bool:
    """Check whether a relative path lies under docs/, examples/ or tests/."""
    parents = PurePosixPath(path).parts[:-1]
    return any(part.lower() in PII_SCOPED_DIRS for part in parents)
