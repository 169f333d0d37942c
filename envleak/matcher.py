"""Multi-pattern matching - one Aho-Corasick pass over the whole corpus."""

import logging
from dataclasses import dataclass, field
from typing import Sequence

import ahocorasick

from envleak.corpus import CorpusEntry, iter_lines

logger = logging.getLogger(__name__)


class AutomatonBuildError(RuntimeError):
    """The candidate automaton could not be built."""


@dataclass
class MatchResult:
    """Occurrences of one candidate across the corpus."""

    files_with_hits: int = 0
    total_hits: int = 0
    locations: list[str] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.total_hits > 0


def join_line_numbers(lines: Sequence[int]) -> str:
    return ",".join(str(n) for n in lines)


class MultiPatternMatcher:
    """Exact, case-sensitive search for many fixed strings at once."""

    def __init__(self, values: Sequence[str]):
        """Build the automaton.

        Args:
            values: Candidate values. The same value may appear more than once
                (e.g. a host named after its user); each copy is counted.

        Raises:
            AutomatonBuildError: If values is empty or contains an empty string.
        """
        if not values:
            raise AutomatonBuildError("no candidate values to search for")

        self.values = list(values)

        # value -> indices of every candidate carrying that value
        indices_by_value: dict[str, list[int]] = {}
        for idx, value in enumerate(self.values):
            if not value:
                raise AutomatonBuildError(f"candidate #{idx} is an empty string")
            indices_by_value.setdefault(value, []).append(idx)

        self._automaton = ahocorasick.Automaton()
        for value, indices in indices_by_value.items():
            self._automaton.add_word(value, (len(value), tuple(indices)))
        self._automaton.make_automaton()

    def scan(self, corpus: Sequence[CorpusEntry]) -> list[MatchResult]:
        """Scan the corpus once.

        Args:
            corpus: Text files to search.

        Returns:
            One MatchResult per value, in the order the values were given.
        """
        results = [MatchResult() for _ in self.values]

        for entry in corpus:
            # candidate index -> ascending line numbers in this file
            line_hits: dict[int, list[int]] = {}

            for lineno, line in iter_lines(entry.text):
                # Occurrences of one value never overlap: "aa" in "aaaa" is two hits.
                last_end: dict[tuple[int, ...], int] = {}

                for end, (length, indices) in self._automaton.iter(line):
                    if end - length < last_end.get(indices, -1):
                        continue
                    last_end[indices] = end

                    for idx in indices:
                        results[idx].total_hits += 1
                        lines = line_hits.setdefault(idx, [])
                        if not lines or lines[-1] != lineno:
                            lines.append(lineno)

            for idx in sorted(line_hits):
                results[idx].files_with_hits += 1
                results[idx].locations.append(
                    f"{entry.path}:{join_line_numbers(line_hits[idx])}"
                )

        logger.info(
            "Matched %d of %d candidates across %d files",
            sum(1 for r in results if r.found),
            len(results),
            len(corpus),
        )
        return results
