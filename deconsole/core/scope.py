"""
Lexical scope lookup over tree-sitter JavaScript / TypeScript trees.

Answers one question: is a name bound by a declaration in any scope enclosing
a node? Used to tell the ambient ``console`` apart from a local that happens
to share its name.
"""

import logging
from typing import Dict, Iterator, Optional, Set

from tree_sitter import Node

from ..languages.utils import node_text

logger = logging.getLogger(__name__)

FUNCTION_TYPES = {
    "function_declaration",
    "function_expression",
    "function",
    "generator_function",
    "generator_function_declaration",
    "arrow_function",
    "method_definition",
}

CLASS_TYPES = {"class", "class_declaration", "abstract_class_declaration"}

# Declarations that bind their `name` field in the enclosing block
NAMED_DECLARATIONS = {
    "function_declaration",
    "generator_function_declaration",
    "class_declaration",
    "abstract_class_declaration",
    "enum_declaration",
    "internal_module",
    "module",
}

VARIABLE_DECLARATIONS = {"lexical_declaration", "variable_declaration"}


def pattern_names(node: Optional[Node]) -> Iterator[str]:
    """
    Yield every identifier bound by a binding pattern.

    Handles plain identifiers, object/array destructuring, defaults, rest
    elements and TypeScript parameter wrappers.
    """
    stack = [node]
    while stack:
        current = stack.pop()
        if current is None:
            continue

        kind = current.type
        if kind in ("identifier", "shorthand_property_identifier_pattern"):
            yield node_text(current)
        elif kind == "pair_pattern":
            stack.append(current.child_by_field_name("value"))
        elif kind in ("assignment_pattern", "object_assignment_pattern"):
            stack.append(current.child_by_field_name("left"))
        elif kind in ("required_parameter", "optional_parameter"):
            stack.append(current.child_by_field_name("pattern"))
        elif kind in ("object_pattern", "array_pattern", "rest_pattern", "formal_parameters"):
            stack.extend(reversed(current.named_children))


def _declaration_names(node: Node) -> Iterator[str]:
    """Names a single statement declares in the block that contains it."""
    kind = node.type

    if kind in VARIABLE_DECLARATIONS:
        for declarator in node.named_children:
            if declarator.type == "variable_declarator":
                yield from pattern_names(declarator.child_by_field_name("name"))

    elif kind in NAMED_DECLARATIONS:
        name = node.child_by_field_name("name")
        if name is not None and name.type in ("identifier", "type_identifier"):
            yield node_text(name)

    elif kind == "import_statement":
        for child in node.named_children:
            if child.type in ("import_clause", "import_require_clause"):
                yield from _import_names(child)

    elif kind == "import_alias":
        for child in node.named_children:
            if child.type == "identifier":
                yield node_text(child)
                break

    elif kind == "export_statement":
        declaration = node.child_by_field_name("declaration")
        if declaration is not None:
            yield from _declaration_names(declaration)

    elif kind == "ambient_declaration":
        for child in node.named_children:
            yield from _declaration_names(child)


def _import_names(clause: Node) -> Iterator[str]:
    """Local names introduced by an import clause."""
    for child in clause.named_children:
        if child.type == "identifier":
            # default import, or `import x = require(...)`
            yield node_text(child)
            if clause.type == "import_require_clause":
                return
        elif child.type == "namespace_import":
            for inner in child.named_children:
                if inner.type == "identifier":
                    yield node_text(inner)
        elif child.type == "named_imports":
            for specifier in child.named_children:
                if specifier.type != "import_specifier":
                    continue
                local = specifier.child_by_field_name("alias") or specifier.child_by_field_name("name")
                if local is not None:
                    yield node_text(local)


def _is_var_loop(node: Node) -> bool:
    """True for ``for (var x in/of ...)``, whose binding hoists like any ``var``."""
    if node.type != "for_in_statement":
        return False
    kind = node.child_by_field_name("kind")
    return kind is not None and node_text(kind) == "var"


def _hoisted_var_names(node: Node) -> Iterator[str]:
    """`var` declarations anywhere below ``node`` that hoist to its function scope."""
    # Explicit stack: generated code can nest expressions far deeper than the recursion limit
    stack = list(reversed(node.named_children))
    while stack:
        child = stack.pop()
        if child.type == "variable_declaration":
            yield from _declaration_names(child)
            continue
        if child.type in FUNCTION_TYPES or child.type in CLASS_TYPES:
            continue
        if _is_var_loop(child):
            yield from pattern_names(child.child_by_field_name("left"))
        stack.extend(reversed(child.named_children))


def declared_names(scope: Node) -> Set[str]:
    """
    Collect the names a scope-creating node binds for its descendants.

    Nodes that do not create a scope return an empty set.
    """
    kind = scope.type
    names: Set[str] = set()

    if kind in ("program", "statement_block", "class_static_block"):
        for child in scope.named_children:
            names.update(_declaration_names(child))
        if kind == "program":
            names.update(_hoisted_var_names(scope))

    elif kind in ("switch_case", "switch_default"):
        # Lexical declarations in a case clause are visible to the whole switch body,
        # so look at the sibling clauses as well.
        parent = scope.parent
        clauses = parent.named_children if parent is not None else [scope]
        for clause in clauses:
            for child in clause.named_children:
                names.update(_declaration_names(child))

    elif kind in FUNCTION_TYPES:
        names.update(pattern_names(scope.child_by_field_name("parameters")))
        names.update(pattern_names(scope.child_by_field_name("parameter")))
        if kind not in ("function_declaration", "generator_function_declaration", "method_definition"):
            # Named function expressions see their own name
            name = scope.child_by_field_name("name")
            if name is not None and name.type == "identifier":
                names.add(node_text(name))
        body = scope.child_by_field_name("body")
        if body is not None:
            names.update(_hoisted_var_names(body))

    elif kind in CLASS_TYPES:
        name = scope.child_by_field_name("name")
        if name is not None and name.type in ("identifier", "type_identifier"):
            names.add(node_text(name))

    elif kind == "for_statement":
        initializer = scope.child_by_field_name("initializer")
        if initializer is not None:
            names.update(_declaration_names(initializer))

    elif kind == "for_in_statement":
        if scope.child_by_field_name("kind") is not None:
            names.update(pattern_names(scope.child_by_field_name("left")))

    elif kind == "catch_clause":
        names.update(pattern_names(scope.child_by_field_name("parameter")))

    return names


def scope_has_binding(name: str, node: Node, cache: Optional[Dict[int, Set[str]]] = None) -> bool:
    """
    Check whether ``name`` is declared in any scope enclosing ``node``.

    Args:
        name: Identifier to look up
        node: Position to look up from (usually the identifier itself)
        cache: Optional dict reused across lookups in the same tree, keyed by node id

    Returns:
        True if a parameter, variable, function, class or import in an
        enclosing scope binds ``name``; False if it resolves to the global.
    """
    current = node.parent
    while current is not None:
        if cache is None:
            names = declared_names(current)
        else:
            names = cache.get(current.id)
            if names is None:
                names = cache[current.id] = declared_names(current)
        if name in names:
            logger.debug(f"'{name}' is bound by {current.type} at line {current.start_point.row + 1}")
            return True
        current = current.parent
    return False
