"""
Invocation discovery and classification.

Finds call expressions whose callee is a member of the target object
(``console.log(...)``, ``console?.warn(...)``, ``console.info?.(...)``,
``console["debug"](...)``) and decides whether the target identifier refers
to the global object rather than a local binding.
"""

import logging
import re
from dataclasses import dataclass
from typing import List, Optional

from tree_sitter import Language, Node, Query, QueryCursor

from ..languages.utils import node_text, unwrap_parentheses
from .scope import scope_has_binding

logger = logging.getLogger(__name__)

DEFAULT_TARGET = "console"

MEMBER_TYPES = ("member_expression", "subscript_expression")

IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


@dataclass(frozen=True, eq=False)
class Invocation:
    """A call expression, ordinary or null-safe, with its callee resolved."""

    call: Node
    callee: Node
    object: Optional[Node]
    callee_is_optional: bool = False

    @classmethod
    def from_call(cls, call: Node) -> Optional["Invocation"]:
        """
        Build an Invocation from a ``call_expression`` node.

        Returns None for nodes that are not calls or have no callee.
        """
        if call.type != "call_expression":
            return None

        callee = unwrap_parentheses(call.child_by_field_name("function"))
        if callee is None:
            return None

        optional = call.child_by_field_name("optional_chain") is not None
        target = None
        if callee.type in MEMBER_TYPES:
            target = callee.child_by_field_name("object")
            optional = optional or callee.child_by_field_name("optional_chain") is not None

        return cls(call=call, callee=callee, object=target, callee_is_optional=optional)

    @property
    def start(self) -> int:
        return self.call.start_byte

    @property
    def end(self) -> int:
        return self.call.end_byte

    @property
    def line(self) -> int:
        return self.call.start_point.row + 1


def is_target_invocation(invocation: Invocation, target: str = DEFAULT_TARGET, scope_cache=None) -> bool:
    """
    Decide whether an invocation calls a method of the global target object.

    The callee must be a (possibly optional or computed) member access whose
    object is the bare identifier ``target``, and no enclosing scope may bind
    that identifier.
    """
    if invocation.callee.type not in MEMBER_TYPES:
        return False

    obj = invocation.object
    if obj is None or obj.type != "identifier" or node_text(obj) != target:
        return False

    if scope_has_binding(target, obj, scope_cache):
        logger.debug(f"Line {invocation.line}: '{target}' is shadowed by a local binding")
        return False

    return True


def _call_query(language: Language, target: str) -> Query:
    """Query matching calls whose callee might be a member of ``target``."""
    if not IDENTIFIER_RE.match(target):
        raise ValueError(f"Invalid target identifier: {target!r}")

    query_text = f"""
    (call_expression
      function: (member_expression
        object: (identifier) @object (#eq? @object "{target}"))) @call

    (call_expression
      function: (subscript_expression
        object: (identifier) @object (#eq? @object "{target}"))) @call

    (call_expression
      function: (parenthesized_expression) @callee) @call
    """
    return Query(language, query_text)


def find_invocations(root: Node, language: Language, target: str = DEFAULT_TARGET) -> List[Invocation]:
    """
    Find every call of the global target object under ``root``.

    Args:
        root: Root node to search
        language: Grammar the tree was parsed with
        target: Name of the target object

    Returns:
        Eligible invocations in source order. A call may appear more than once
        when several patterns match it; the match deduplicator collapses those.
    """
    cursor = QueryCursor(_call_query(language, target))
    scope_cache = {}
    found = []

    for _, captures in cursor.matches(root):
        for call in captures.get("call", []):
            invocation = Invocation.from_call(call)
            if invocation is not None and is_target_invocation(invocation, target, scope_cache):
                found.append(invocation)

    found.sort(key=lambda inv: (inv.start, inv.end))
    logger.debug(f"Found {len(found)} '{target}' invocation(s)")
    return found
