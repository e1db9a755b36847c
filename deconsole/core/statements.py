"""
Statement boundary resolution.

A target call is only safe to rewrite when it *is* its statement. When the
call's value is used by a larger expression (assignment, condition, argument,
template, return value, arrow body...) the call is skipped instead.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from tree_sitter import Node

from ..languages.utils import first_named_child, unwrap_parentheses
from .invocation import Invocation

logger = logging.getLogger(__name__)

STATEMENT_TYPES = {
    "expression_statement",
    "lexical_declaration",
    "variable_declaration",
    "return_statement",
    "throw_statement",
    "if_statement",
    "for_statement",
    "for_in_statement",
    "while_statement",
    "do_statement",
    "switch_statement",
    "try_statement",
    "labeled_statement",
    "with_statement",
    "break_statement",
    "continue_statement",
    "debugger_statement",
    "empty_statement",
    "statement_block",
    "import_statement",
    "export_statement",
    "function_declaration",
    "generator_function_declaration",
    "class_declaration",
    "abstract_class_declaration",
    # TypeScript
    "type_alias_declaration",
    "interface_declaration",
    "enum_declaration",
    "ambient_declaration",
    "import_alias",
}

# Containers holding a list of statements. An expression statement anywhere
# else is the un-braced body of a control construct.
STATEMENT_LISTS = {"program", "statement_block", "switch_case", "switch_default"}


@dataclass(frozen=True)
class Boundary:
    """Where an invocation sits relative to its enclosing statement."""

    statement: Optional[Node]
    eligible: bool
    slot: bool = False

    @property
    def key(self):
        if self.statement is None:
            return None
        return (self.statement.start_byte, self.statement.end_byte)


def statement_parent(node: Node) -> Optional[Node]:
    """Nearest ancestor of ``node`` that is a statement, or None at the top level."""
    current = node.parent
    while current is not None:
        if current.type in STATEMENT_TYPES:
            return current
        current = current.parent
    return None


def is_slot_statement(statement: Node) -> bool:
    """True if ``statement`` is the sole un-braced body of if/else/loop/label."""
    parent = statement.parent
    return parent is not None and parent.type not in STATEMENT_LISTS


def resolve_statement(invocation: Invocation) -> Boundary:
    """
    Find the statement enclosing an invocation and decide if it can be rewritten.

    Args:
        invocation: A classified target invocation

    Returns:
        Boundary with ``eligible`` set only when the statement is an expression
        statement whose expression, minus redundant parentheses, is the call.
    """
    statement = statement_parent(invocation.call)
    if statement is None:
        return Boundary(statement=None, eligible=False)

    if statement.type != "expression_statement":
        logger.debug(f"Line {invocation.line}: call is part of a {statement.type}, skipping")
        return Boundary(statement=statement, eligible=False)

    expression = unwrap_parentheses(first_named_child(statement))
    if expression is None or expression != invocation.call:
        logger.debug(f"Line {invocation.line}: call is nested inside a larger expression, skipping")
        return Boundary(statement=statement, eligible=False)

    return Boundary(statement=statement, eligible=True, slot=is_slot_statement(statement))
