"""
Utility functions for walking tree-sitter nodes.
"""

from typing import Optional

from tree_sitter import Node


def node_text(node: Node) -> str:
    """
    Get node text as a decoded string.

    Args:
        node: A tree-sitter Node

    Returns:
        The node's text content as a string, or empty string if text is None.
    """
    return node.text.decode("utf8") if node.text else ""


def unwrap_parentheses(node: Optional[Node]) -> Optional[Node]:
    """Return the expression inside any number of redundant parentheses."""
    while node is not None and node.type == "parenthesized_expression":
        inner = [child for child in node.named_children if child.type != "comment"]
        if len(inner) != 1:
            break
        node = inner[0]
    return node


def first_named_child(node: Node) -> Optional[Node]:
    """First named child that is not a comment."""
    for child in node.named_children:
        if child.type != "comment":
            return child
    return None
