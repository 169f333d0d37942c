"""Corpus collection - small UTF-8 text files under a project root."""

import logging
import os
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from envleak.config import ScanSettings, get_scan_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CorpusEntry:
    """A text file eligible for scanning."""

    path: str  # relative to the scan root, POSIX separators
    text: str


def iter_lines(text: str) -> Iterator[tuple[int, str]]:
    """Yield (1-based line number, line) pairs.

    Splits on newlines only and drops a trailing carriage return, so line
    numbers match what editors show for LF and CRLF files alike.
    """
    for lineno, line in enumerate(text.split("\n"), start=1):
        yield lineno, line.removesuffix("\r")


def _walk(root: Path, skip_dirs: frozenset[str]) -> Iterator[tuple[str, list[str], list[str]]]:
    """os.walk with skip-list and symlink pruning, in sorted order."""
    for dirpath, dirnames, filenames in os.walk(root, followlinks=False):
        dirnames[:] = sorted(
            d
            for d in dirnames
            if d not in skip_dirs and not os.path.islink(os.path.join(dirpath, d))
        )
        files = sorted(f for f in filenames if not os.path.islink(os.path.join(dirpath, f)))
        yield dirpath, dirnames, files


def _relative(root: Path, dirpath: str, name: str) -> str:
    """Relative display path; undecodable bytes in names become U+FFFD."""
    path = Path(dirpath, name).relative_to(root).as_posix()
    return os.fsencode(path).decode("utf-8", "replace")


def walk_entries(root: Path | str, settings: ScanSettings | None = None) -> Iterator[str]:
    """Yield every file and directory under root outside the skip-list.

    Args:
        root: Scan root.
        settings: Corpus filters. Defaults to the built-in configuration.

    Yields:
        Relative POSIX paths, directories before their contents.
    """
    root = Path(root)
    settings = settings or get_scan_settings()

    for dirpath, dirnames, filenames in _walk(root, settings.skip_dirs):
        for name in dirnames:
            yield _relative(root, dirpath, name)
        for name in filenames:
            yield _relative(root, dirpath, name)


def read_text_file(path: Path, max_size: int) -> str | None:
    """Read a file as UTF-8 text.

    Returns:
        The decoded text, or None if the file is too large, binary or unreadable.
    """
    try:
        st = path.stat()
        if not stat.S_ISREG(st.st_mode):
            return None
        if st.st_size > max_size:
            logger.debug("Skipping %s: larger than %d bytes", path, max_size)
            return None
        data = path.read_bytes()
    except OSError as e:
        logger.debug("Skipping %s: %s", path, e)
        return None

    if b"\x00" in data:
        logger.debug("Skipping %s: binary content", path)
        return None

    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        logger.debug("Skipping %s: not valid UTF-8", path)
        return None


def collect_corpus(root: Path | str, settings: ScanSettings | None = None) -> list[CorpusEntry]:
    """Collect eligible text files under root.

    Args:
        root: Scan root.
        settings: Corpus filters. Defaults to the built-in configuration.

    Returns:
        Corpus entries in sorted traversal order.
    """
    root = Path(root)
    settings = settings or get_scan_settings()
    corpus: list[CorpusEntry] = []

    for dirpath, _dirnames, filenames in _walk(root, settings.skip_dirs):
        for name in filenames:
            if Path(name).suffix.lower() not in settings.allowed_extensions:
                continue

            text = read_text_file(Path(dirpath, name), settings.max_file_size)
            if text is not None:
                corpus.append(CorpusEntry(path=_relative(root, dirpath, name), text=text))

    logger.info("Collected %d text files under %s", len(corpus), root)
    return corpus
