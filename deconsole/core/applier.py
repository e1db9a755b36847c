"""
Range-rewrite engine.

Applies planned edits to the original bytes. Knows nothing about syntax: an
edit is a half-open ``[start, end)`` range plus replacement bytes.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Tuple

logger = logging.getLogger(__name__)


class EditKind(Enum):
    COMMENT = "comment"
    REMOVE = "remove"
    REPLACE = "replace"


class OverlappingEditError(ValueError):
    """Raised when two edits that both insert text claim the same bytes."""


@dataclass(frozen=True)
class EditOperation:
    """A single planned edit against the original source."""

    kind: EditKind
    start: int
    end: int
    text: bytes = b""

    @classmethod
    def comment(cls, start: int, end: int, text: bytes) -> "EditOperation":
        return cls(EditKind.COMMENT, start, end, text)

    @classmethod
    def remove(cls, start: int, end: int) -> "EditOperation":
        return cls(EditKind.REMOVE, start, end)

    @classmethod
    def replace(cls, start: int, end: int, text: bytes) -> "EditOperation":
        return cls(EditKind.REPLACE, start, end, text)

    def __str__(self) -> str:
        return f"{self.kind.value}[{self.start}:{self.end}]"


def apply_edits(source: bytes, edits: Iterable[EditOperation]) -> Tuple[bytes, int]:
    """
    Apply edits from the highest start offset down.

    Working backwards keeps the offsets of the edits still pending valid. A
    removal that runs into bytes an already-applied edit covers is clamped to
    where that edit starts (e.g. two expansions both claiming the same line
    break). Any other overlap is an error.

    Args:
        source: Original bytes
        edits: Edits with offsets into ``source``

    Returns:
        Tuple of (rewritten bytes, number of edits applied)

    Raises:
        ValueError: If an edit lies outside ``source``
        OverlappingEditError: If text-inserting edits overlap
    """
    ordered = sorted(edits, key=lambda edit: (edit.start, edit.end), reverse=True)
    result = source
    limit = len(source)
    applied = 0

    for edit in ordered:
        if not 0 <= edit.start <= edit.end <= len(source):
            raise ValueError(f"Edit {edit} is outside the source (length {len(source)})")

        end = edit.end
        if end > limit:
            if edit.kind is not EditKind.REMOVE:
                raise OverlappingEditError(f"Edit {edit} overlaps an edit starting at {limit}")
            logger.debug(f"Clamping {edit} to end at {limit}")
            end = limit

        result = result[: edit.start] + edit.text + result[end:]
        limit = edit.start
        applied += 1

    return result, applied
