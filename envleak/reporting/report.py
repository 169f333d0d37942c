"""Report rows - the privacy/security scan result."""

import logging
from dataclasses import asdict, dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Sequence

from envleak.config import ScanSettings, get_scan_settings
from envleak.corpus import CorpusEntry, collect_corpus
from envleak.gather import Candidate, gather_candidates
from envleak.matcher import MatchResult, MultiPatternMatcher
from envleak.probe import EnvironmentProbe
from envleak.secrets.scanner import ExtraFinding, ExtraScanner

logger = logging.getLogger(__name__)

EXTRAS_CATEGORY = "Extra scans"
EXTRAS_DESCRIPTION = "secrets, PEM, leak-files, docs/examples/tests"
EXTRAS_HINT = "Run with: `envleak scan --extras`"


class Status(str, Enum):
    """Outcome of one report row."""

    FOUND = "Found"
    NOT_FOUND = "Not found"
    SKIPPED = "Skipped"
    NOT_APPLICABLE = "N/A"


@dataclass(frozen=True)
class ReportRow:
    """One line of the privacy/security report."""

    category: str
    value: str
    status: Status
    details: str
    locations: str

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["status"] = self.status.value
        return data


def format_locations(locations: Sequence[str], limit: int = 5) -> str:
    """Join location strings, collapsing everything past `limit` into a count.

    Args:
        locations: Location strings in discovery order.
        limit: Maximum number of entries shown.

    Returns:
        "a | b | c", or "a | ... | e | +N more files" when truncated.
    """
    if len(locations) <= limit:
        return " | ".join(locations)
    shown = " | ".join(locations[:limit])
    return f"{shown} | +{len(locations) - limit} more files"


def no_candidates_row() -> ReportRow:
    return ReportRow(
        category="Scan",
        value="No candidates",
        status=Status.NOT_APPLICABLE,
        details="0",
        locations="",
    )


def candidate_row(candidate: Candidate, result: MatchResult, limit: int = 5) -> ReportRow:
    """Build the row for one candidate."""
    if result.found:
        status = Status.FOUND
        details = f"{result.files_with_hits} files, {result.total_hits} hits"
    else:
        status = Status.NOT_FOUND
        details = "not found"

    return ReportRow(
        category=candidate.kind.value,
        value=candidate.value,
        status=status,
        details=details,
        locations=format_locations(result.locations, limit),
    )


def extras_row(finding: ExtraFinding | None, limit: int = 5) -> ReportRow:
    """Build the Extra scans row; None means the extra scans were not run."""
    if finding is None:
        return ReportRow(
            category=EXTRAS_CATEGORY,
            value=EXTRAS_DESCRIPTION,
            status=Status.SKIPPED,
            details=EXTRAS_HINT,
            locations="",
        )

    return ReportRow(
        category=EXTRAS_CATEGORY,
        value=EXTRAS_DESCRIPTION,
        status=Status.FOUND if finding.found else Status.NOT_FOUND,
        details=finding.details,
        locations=format_locations(finding.locations, limit),
    )


def build_report(
    candidates: Sequence[Candidate],
    results: Sequence[MatchResult] | None,
    extra: ExtraFinding | None,
    limit: int = 5,
) -> list[ReportRow]:
    """Assemble report rows.

    Args:
        candidates: Gathered candidates in gather order.
        results: Match results aligned with candidates; ignored when there
            are no candidates.
        extra: Extra scan finding, or None if the extra scans were skipped.
        limit: Maximum locations shown per row.

    Returns:
        Candidate rows (or the "No candidates" row) followed by the Extra scans row.
    """
    if not candidates:
        rows = [no_candidates_row()]
    else:
        if results is None or len(results) != len(candidates):
            raise ValueError("match results must align with candidates")
        rows = [
            candidate_row(candidate, result, limit)
            for candidate, result in zip(candidates, results)
        ]

    rows.append(extras_row(extra, limit))
    return rows


def run_privacy_scan(
    root: Path | str,
    run_extras: bool = False,
    probe: EnvironmentProbe | None = None,
    settings: ScanSettings | None = None,
    candidates: Sequence[Candidate] | None = None,
) -> list[ReportRow]:
    """Gather candidates, scan the tree under root and build the report.

    Args:
        root: Project root to scan.
        run_extras: Whether to run the extra scans.
        probe: Environment probe used for gathering.
        settings: Corpus filters and report limits.
        candidates: Pre-gathered candidates; skips gathering when given.

    Returns:
        Ordered report rows.

    Raises:
        AutomatonBuildError: If the candidate automaton cannot be built.
    """
    settings = settings or get_scan_settings()
    if candidates is None:
        candidates = gather_candidates(probe)
    corpus: list[CorpusEntry] = collect_corpus(root, settings)

    results = None
    if candidates:
        matcher = MultiPatternMatcher([c.value for c in candidates])
        results = matcher.scan(corpus)
    else:
        logger.warning("No usernames, hostnames or IPs could be gathered")

    extra = ExtraScanner(root, settings).scan(corpus) if run_extras else None

    return build_report(candidates, results, extra, settings.max_locations)
