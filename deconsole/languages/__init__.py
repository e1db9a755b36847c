"""
Tree-sitter grammars for the source files deconsole rewrites.
"""

import logging
from pathlib import Path

import tree_sitter_javascript as tsjs
import tree_sitter_typescript as tsts
from tree_sitter import Language, Parser, Tree

logger = logging.getLogger(__name__)

JAVASCRIPT = Language(tsjs.language())
TYPESCRIPT = Language(tsts.language_typescript())
TSX = Language(tsts.language_tsx())

LANGUAGES = {
    "javascript": JAVASCRIPT,
    "typescript": TYPESCRIPT,
    "tsx": TSX,
}

# Map file extensions to grammar names
EXTENSIONS = {
    ".js": "javascript",
    ".jsx": "javascript",  # The JavaScript grammar parses JSX natively
    ".cjs": "javascript",
    ".mjs": "javascript",
    ".ts": "typescript",
    ".cts": "typescript",
    ".mts": "typescript",
    ".tsx": "tsx",
}


class ParseFailure(ValueError):
    """Raised when a source file does not parse cleanly."""

    def __init__(self, filename: str, line: int, column: int):
        self.filename = filename
        self.line = line
        self.column = column
        super().__init__(f"syntax error at line {line}, column {column}")


def get_language(filename) -> Language:
    """
    Get the grammar for a file based on its extension.

    Unknown extensions fall back to TSX, which covers JSX and type annotations.

    Args:
        filename: File name or path

    Returns:
        A tree-sitter Language
    """
    suffix = Path(str(filename)).suffix.lower()
    if suffix not in EXTENSIONS:
        logger.debug(f"No grammar registered for '{suffix}', using TSX")
        return TSX
    return LANGUAGES[EXTENSIONS[suffix]]


def _first_error(node):
    """Depth-first search for the first ERROR or MISSING node."""
    stack = [node]
    while stack:
        current = stack.pop()
        if current.is_error or current.is_missing:
            return current
        stack.extend(child for child in reversed(current.children) if child.has_error)
    return None


def parse_source(source: bytes, filename="<source>") -> Tree:
    """
    Parse source bytes with the grammar matching ``filename``.

    Args:
        source: UTF-8 encoded source text
        filename: Used to pick the grammar and in error messages

    Returns:
        The parsed tree

    Raises:
        ParseFailure: If the tree contains syntax errors
    """
    parser = Parser(get_language(filename))
    tree = parser.parse(source)

    if tree.root_node.has_error:
        error = _first_error(tree.root_node) or tree.root_node
        row, column = error.start_point
        raise ParseFailure(str(filename), row + 1, column + 1)

    return tree


__all__ = ["EXTENSIONS", "LANGUAGES", "ParseFailure", "get_language", "parse_source"]
