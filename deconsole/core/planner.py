"""
Edit planning: turn statement matches into comment or removal edits.

Everything here works on the UTF-8 bytes of the source, since tree-sitter
reports byte offsets.
"""

import logging
import re
from typing import Iterable, List, Tuple

from .applier import EditOperation
from .matches import StatementMatch

logger = logging.getLogger(__name__)

NEWLINE_RE = re.compile(rb"\r?\n")
TRAILING_BREAK_RE = re.compile(rb"[ \t]*\r?\n")
HORIZONTAL_WS = b" \t"

COMMENT_PREFIX = b"// "
EMPTY_STATEMENT = b";"


def detect_newline(text: bytes, default: bytes = b"\n") -> bytes:
    """Return the first line break style used in ``text``."""
    index = text.find(b"\n")
    if index == -1:
        return default
    if index > 0 and text[index - 1 : index] == b"\r":
        return b"\r\n"
    return b"\n"


def comment_out(snippet: bytes) -> bytes:
    """
    Prefix every non-blank line of ``snippet`` with ``// ``.

    The prefix goes right after each line's leading whitespace so indentation
    is kept. Blank lines pass through unchanged and lines are rejoined with the
    first newline style found in the snippet.
    """
    newline = detect_newline(snippet)
    lines = []
    for line in NEWLINE_RE.split(snippet):
        if not line.strip():
            lines.append(line)
            continue
        content = line.lstrip()
        indent = line[: len(line) - len(content)]
        lines.append(indent + COMMENT_PREFIX + content)
    return newline.join(lines)


def _line_start(source: bytes, offset: int) -> int:
    return source.rfind(b"\n", 0, offset) + 1


def _line_end(source: bytes, offset: int) -> int:
    index = source.find(b"\n", offset)
    return len(source) if index == -1 else index


def expand_removal_range(source: bytes, start: int, end: int) -> Tuple[int, int]:
    """
    Widen a statement's range so removing it leaves no blank line behind.

    1. If only horizontal whitespace separates the end from a line break,
       swallow through the break. When the statement also starts its line,
       swallow its indentation too.
    2. Otherwise, if only horizontal whitespace separates the start from a
       preceding line break, swallow backwards through that break.

    Only one line break is ever consumed.
    """
    trailing = TRAILING_BREAK_RE.match(source, end)
    if trailing:
        line_start = _line_start(source, start)
        if not source[line_start:start].strip(HORIZONTAL_WS):
            start = line_start
        return start, trailing.end()

    index = start
    while index > 0 and source[index - 1] in HORIZONTAL_WS:
        index -= 1
    if index > 0 and source[index - 1 : index] == b"\n":
        index -= 1
        if index > 0 and source[index - 1 : index] == b"\r":
            index -= 1
        return index, end

    return start, end


def plan_comment(source: bytes, match: StatementMatch) -> EditOperation:
    """Plan the comment-rewrite of one statement."""
    start, end = match.start, match.end
    text = comment_out(source[start:end])
    if match.slot:
        text = EMPTY_STATEMENT + b" " + text

    # Live code after the statement on its last line would end up inside the
    # comment; move it to its own line at the statement's indentation.
    line_end = _line_end(source, end)
    rest = source[end:line_end].rstrip(b"\r")
    stripped = rest.strip()
    if stripped and not stripped.startswith(b"//"):
        line_start = _line_start(source, start)
        indent = source[line_start:start]
        indent = indent[: len(indent) - len(indent.lstrip(HORIZONTAL_WS))]
        if line_end < len(source):
            newline = b"\r\n" if source[line_end - 1 : line_end] == b"\r" else b"\n"
        else:
            newline = detect_newline(source)
        gap = len(rest) - len(rest.lstrip(HORIZONTAL_WS))
        logger.debug(f"Line {match.line}: splitting trailing code onto its own line")
        return EditOperation.comment(start, end + gap, text + newline + indent)

    return EditOperation.comment(start, end, text)


def plan_removal(source: bytes, match: StatementMatch) -> EditOperation:
    """Plan the removal of one statement."""
    if match.slot:
        # An un-braced if/else/loop body must keep a statement in place
        return EditOperation.replace(match.start, match.end, EMPTY_STATEMENT)

    start, end = expand_removal_range(source, match.start, match.end)
    return EditOperation.remove(start, end)


def plan_edits(source: bytes, matches: Iterable[StatementMatch], comment: bool = False) -> List[EditOperation]:
    """
    Plan one edit per match.

    Args:
        source: Original source bytes
        matches: Deduplicated statement matches
        comment: Comment statements out instead of removing them

    Returns:
        Edits sorted by descending start offset
    """
    plan = plan_comment if comment else plan_removal
    edits = [plan(source, match) for match in matches]
    edits.sort(key=lambda edit: edit.start, reverse=True)
    return edits
