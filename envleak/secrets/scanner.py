"""Extra scanner - secrets, key headers, leak-prone files and scoped PII."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, Sequence

from envleak.config import ScanSettings, get_scan_settings
from envleak.corpus import CorpusEntry, iter_lines, walk_entries
from envleak.matcher import join_line_numbers
from envleak.secrets.patterns import is_leak_file, is_pii_scoped, line_has_pii, line_has_secret

logger = logging.getLogger(__name__)


@dataclass
class ExtraFinding:
    """Merged result of all extra scans."""

    locations: list[str] = field(default_factory=list)
    files: int = 0
    findings: int = 0

    @property
    def found(self) -> bool:
        return self.files > 0

    @property
    def details(self) -> str:
        if not self.found:
            return "not found"
        return f"{self.files} files, {self.findings} findings"


class ExtraScanner:
    """Scan a corpus for generic secrets, leak-prone files and PII terms."""

    def __init__(self, root: Path | str, settings: ScanSettings | None = None):
        """Initialize extra scanner.

        Args:
            root: Scan root, walked again for leak-prone file names.
            settings: Corpus filters shared with the collector.
        """
        self.root = Path(root)
        self.settings = settings or get_scan_settings()

    def scan(self, corpus: Sequence[CorpusEntry]) -> ExtraFinding:
        """Run all extra scans and merge them into one finding.

        Args:
            corpus: Text files collected from the same root.

        Returns:
            ExtraFinding with locations in discovery order: secrets, leak
            files, then PII.
        """
        result = ExtraFinding()
        issue_paths: set[str] = set()

        self._scan_lines(corpus, line_has_secret, result, issue_paths)

        for path in walk_entries(self.root, self.settings):
            if is_leak_file(path):
                issue_paths.add(path)
                result.locations.append(path)
                result.findings += 1

        scoped = [entry for entry in corpus if is_pii_scoped(entry.path)]
        self._scan_lines(scoped, line_has_pii, result, issue_paths)

        result.files = len(issue_paths)
        logger.info("Extra scans: %s", result.details)
        return result

    @staticmethod
    def _scan_lines(
        corpus: Iterable[CorpusEntry],
        matches: Callable[[str], bool],
        result: ExtraFinding,
        issue_paths: set[str],
    ) -> None:
        """Count matching lines per file and record a location per file."""
        for entry in corpus:
            line_nums: list[int] = []

            for lineno, line in iter_lines(entry.text):
                if matches(line):
                    result.findings += 1
                    if not line_nums or line_nums[-1] != lineno:
                        line_nums.append(lineno)

            if line_nums:
                issue_paths.add(entry.path)
                result.locations.append(f"{entry.path}:{join_line_numbers(line_nums)}")
