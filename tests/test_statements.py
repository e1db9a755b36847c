"""Tests for statement boundary resolution."""

import pytest

from deconsole.core.invocation import find_invocations
from deconsole.core.statements import resolve_statement
from deconsole.languages import get_language, parse_source


def boundaries(code: str, filename: str = "test.js"):
    tree = parse_source(code.encode("utf8"), filename)
    return [resolve_statement(inv) for inv in find_invocations(tree.root_node, get_language(filename))]


class TestResolveStatement:
    """Only calls that are their whole statement are eligible."""

    @pytest.mark.parametrize(
        "code",
        [
            "console.log(1);",
            "console.log(1)",
            "(console.log(1));",
            "function f() {\n  console.warn('x');\n}",
            "switch (x) {\n  case 1:\n    console.log(x);\n    break;\n}",
            "items.forEach((item) => {\n  console.log(item);\n});",
        ],
    )
    def test_eligible(self, code):
        (boundary,) = boundaries(code)
        assert boundary.eligible is True
        assert boundary.slot is False
        assert boundary.statement.type == "expression_statement"

    @pytest.mark.parametrize(
        "code",
        [
            'const r = console.log("x");',
            "result = console.log(1);",
            "foo(console.log(1));",
            "if (console.log(1)) {}",
            "function f() { return console.log(1); }",
            "`${console.log(1)}`;",
            "debug && console.log(1);",
            "items.forEach((item) => console.log(item));",
            "console.log(1), console.log(2);",
            "class A { field = console.log(1); }",
            "export default console.log(1);",
            "void console.log(1);",
        ],
    )
    def test_skipped(self, code):
        for boundary in boundaries(code):
            assert boundary.eligible is False

    def test_skipped_keeps_statement(self):
        (boundary,) = boundaries('const r = console.log("x");')
        assert boundary.statement.type == "lexical_declaration"
        assert boundary.key == (0, 27)

    @pytest.mark.parametrize(
        "code",
        [
            "if (debug) console.log(1);",
            "if (a) {} else console.log(1);",
            "for (const x of xs) console.log(x);",
            "while (next()) console.log(1);",
            "label: console.log(1);",
        ],
    )
    def test_unbraced_body_is_slot(self, code):
        (boundary,) = boundaries(code)
        assert boundary.eligible is True
        assert boundary.slot is True

    def test_braced_body_is_not_slot(self):
        (boundary,) = boundaries("if (debug) { console.log(1); }")
        assert boundary.eligible is True
        assert boundary.slot is False
