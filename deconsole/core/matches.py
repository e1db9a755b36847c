"""
StatementMatch and the deduplicator that collapses repeated discoveries.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StatementMatch:
    """Byte range of an expression statement that is exactly a target call."""

    start: int
    end: int
    slot: bool = field(default=False, compare=False)
    line: int = field(default=0, compare=False)

    @property
    def key(self) -> Tuple[int, int]:
        return (self.start, self.end)

    def contains(self, other: "StatementMatch") -> bool:
        return self.start <= other.start and other.end <= self.end and self.key != other.key


class MatchDeduplicator:
    """
    Collect matches and skipped sites, keeping one match per statement range.

    The same statement can be reached more than once (several query patterns
    matching one call, or a target call nested in the arguments of another).
    Matches are keyed by their exact ``(start, end)``; the first one wins.
    """

    def __init__(self):
        self._matches: Dict[Tuple[int, int], StatementMatch] = {}
        # statement range (or None) of every skipped call site
        self._skipped: List[Optional[Tuple[int, int]]] = []

    def add(self, match: StatementMatch) -> bool:
        """
        Record a match.

        Returns:
            True if the match was new, False if its range was already recorded.
        """
        if match.key in self._matches:
            logger.debug(f"Duplicate match at {match.start}:{match.end} ignored")
            return False
        self._matches[match.key] = match
        return True

    def skip(self, statement_key: Optional[Tuple[int, int]]) -> None:
        """Record a call site that is not a standalone statement."""
        self._skipped.append(statement_key)

    def matches(self) -> List[StatementMatch]:
        """
        Unique matches in source order.

        A match lying inside another match is dropped, since rewriting the
        outer statement already covers it.
        """
        ordered = sorted(self._matches.values(), key=lambda m: (m.start, -m.end))
        result: List[StatementMatch] = []
        for match in ordered:
            if result and result[-1].contains(match):
                logger.debug(f"Match at {match.start}:{match.end} is nested in another match")
                continue
            result.append(match)
        return result

    @property
    def skipped_count(self) -> int:
        """Skipped sites, excluding those inside a statement that is being rewritten."""
        kept = self.matches()

        def absorbed(key):
            return key is not None and any(m.start <= key[0] and key[1] <= m.end for m in kept)

        return sum(1 for key in self._skipped if not absorbed(key))

    def __len__(self) -> int:
        return len(self.matches())
