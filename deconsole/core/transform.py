"""
Per-file transformation: parse, locate target statements, plan and apply edits.
"""

import logging
from dataclasses import dataclass

from ..languages import ParseFailure, get_language, parse_source
from .applier import apply_edits
from .invocation import DEFAULT_TARGET, find_invocations
from .matches import MatchDeduplicator, StatementMatch
from .planner import plan_edits
from .statements import resolve_statement

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransformResult:
    """Outcome of transforming one file's text."""

    code: str
    statements_changed: int = 0
    skipped_count: int = 0
    changed: bool = False


def locate_matches(source: bytes, filename: str = "<source>", target: str = DEFAULT_TARGET) -> MatchDeduplicator:
    """
    Find the standalone target statements in ``source``.

    Raises:
        ParseFailure: If the source does not parse
    """
    tree = parse_source(source, filename)
    language = get_language(filename)
    dedup = MatchDeduplicator()

    for invocation in find_invocations(tree.root_node, language, target):
        boundary = resolve_statement(invocation)
        if not boundary.eligible:
            dedup.skip(boundary.key)
            continue
        statement = boundary.statement
        dedup.add(
            StatementMatch(
                start=statement.start_byte,
                end=statement.end_byte,
                slot=boundary.slot,
                line=statement.start_point.row + 1,
            )
        )

    return dedup


def transform_source(
    code: str,
    filename: str = "<source>",
    comment: bool = False,
    target: str = DEFAULT_TARGET,
) -> TransformResult:
    """
    Remove or comment out standalone target calls in ``code``.

    Args:
        code: Source text
        filename: File name, used to choose the grammar and in warnings
        comment: Comment statements out instead of deleting them
        target: Name of the global object whose calls are rewritten

    Returns:
        TransformResult. A file that fails to parse is returned unchanged.
    """
    source = code.encode("utf8")

    try:
        dedup = locate_matches(source, filename, target)
    except ParseFailure as e:
        logger.warning(f"Skipping {filename}: failed to parse ({e}).")
        return TransformResult(code=code)

    matches = dedup.matches()
    skipped = dedup.skipped_count
    if not matches:
        return TransformResult(code=code, skipped_count=skipped)

    edits = plan_edits(source, matches, comment=comment)
    rewritten, applied = apply_edits(source, edits)

    for match in matches:
        action = "commented" if comment else "removed"
        logger.debug(f"{filename}:{match.line}: {action} {target} statement")

    return TransformResult(
        code=rewritten.decode("utf8"),
        statements_changed=len(matches),
        skipped_count=skipped,
        changed=applied > 0,
    )
