"""Tests for the full per-file transformation."""

import logging
from pathlib import Path

from deconsole.core.transform import locate_matches, transform_source

# Get fixtures directory
FIXTURES_DIR = Path(__file__).parent / "fixtures"


class TestScenarios:
    """End-to-end behaviour on small sources."""

    def test_remove_single_statement(self):
        result = transform_source('console.log("hi");\n')
        assert result.code == ""
        assert result.statements_changed == 1
        assert result.skipped_count == 0
        assert result.changed is True

    def test_comment_single_statement(self):
        result = transform_source('console.log("hi");\n', comment=True)
        assert result.code == '// console.log("hi");\n'
        assert result.statements_changed == 1

    def test_assigned_call_skipped(self):
        source = 'const r = console.log("x");\n'
        result = transform_source(source)
        assert result.code == source
        assert result.skipped_count == 1
        assert result.statements_changed == 0
        assert result.changed is False

    def test_comment_multiline_statement(self):
        source = 'console.error(\n  "oops"\n);\n'
        result = transform_source(source, comment=True)
        assert result.code == '// console.error(\n  // "oops"\n// );\n'
        assert result.code.count("\n") == source.count("\n")


class TestRemoval:
    """Removal leaves the rest of the file byte-identical."""

    def test_removes_whole_lines(self):
        source = (
            "function run() {\n"
            '  console.log("start");\n'
            "  const value = compute();\n"
            "  console.debug?.(value);\n"
            "  return value;\n"
            "}\n"
        )
        expected = "function run() {\n  const value = compute();\n  return value;\n}\n"
        result = transform_source(source, "run.js")
        assert result.code == expected
        assert result.statements_changed == 2

    def test_crlf_preserved(self):
        result = transform_source("a();\r\nconsole.log(1);\r\nb();\r\n", "a.js")
        assert result.code == "a();\r\nb();\r\n"

    def test_last_line_without_newline(self):
        result = transform_source("a();\nconsole.log(1);", "a.js")
        assert result.code == "a();"

    def test_consecutive_statements_at_end_of_file(self):
        result = transform_source("a();\nconsole.log(1);\nconsole.log(2);", "a.js")
        assert result.code == "a();\n"
        assert result.statements_changed == 2

    def test_multibyte_text(self):
        result = transform_source('const s = "héllo ✓";\nconsole.log(s);\nnext();\n', "a.js")
        assert result.code == 'const s = "héllo ✓";\nnext();\n'

    def test_unbraced_body_keeps_empty_statement(self):
        result = transform_source("if (debug) console.log(1);\nrun();\n", "a.js")
        assert result.code == "if (debug) ;\nrun();\n"

    def test_comment_unbraced_body(self):
        result = transform_source("if (debug) console.log(1);\nrun();\n", "a.js", comment=True)
        assert result.code == "if (debug) ; // console.log(1);\nrun();\n"

    def test_mixed_skip_and_remove(self):
        source = 'const r = console.log("x");\nconsole.log(2);\n'
        result = transform_source(source, "a.js")
        assert result.code == 'const r = console.log("x");\n'
        assert result.statements_changed == 1
        assert result.skipped_count == 1

    def test_custom_target(self):
        result = transform_source("logger.info(1);\nconsole.log(2);\n", "a.js", target="logger")
        assert result.code == "console.log(2);\n"

    def test_typescript(self):
        source = "function f(x: number): void {\n  console.log(x);\n}\n"
        result = transform_source(source, "f.ts")
        assert result.code == "function f(x: number): void {\n}\n"

    def test_tsx(self):
        source = "const App = () => {\n  console.log('render');\n  return <div />;\n};\n"
        result = transform_source(source, "App.tsx")
        assert result.code == "const App = () => {\n  return <div />;\n};\n"


class TestProperties:
    """Properties that must hold for any input."""

    def test_removal_is_idempotent(self):
        source = "console.log(1);\nfoo();\nif (x) {\n  console.warn(2);\n}\nconst y = console.log(3);\n"
        first = transform_source(source, "a.js")
        second = transform_source(first.code, "a.js")
        assert second.code == first.code
        assert second.statements_changed == 0

    def test_skipped_calls_untouched(self):
        source = "foo(console.log(1));\nconst t = `${console.log(2)}`;\nif (console.log(3)) {}\n"
        result = transform_source(source, "a.js")
        assert result.code == source
        assert result.skipped_count == 3
        assert result.statements_changed == 0

    def test_shadowed_name_untouched(self):
        source = "function f(console) {\n  console.log(1);\n}\n"
        result = transform_source(source, "a.js")
        assert result.code == source
        assert result.statements_changed == 0
        assert result.skipped_count == 0

    def test_nested_call_single_edit(self):
        """A call inside another call's arguments resolves to the same statement."""
        result = transform_source("console.log(console.log(1));\n", "a.js")
        assert result.code == ""
        assert result.statements_changed == 1
        assert result.skipped_count == 0

    def test_call_in_removed_callback(self):
        source = "console.log(() => {\n  console.log(1);\n});\n"
        result = transform_source(source, "a.js")
        assert result.code == ""
        assert result.statements_changed == 1

    def test_comment_output_has_no_live_calls(self):
        source = "console.log(1);\nfunction f() {\n  console.error(\n    'x'\n  );\n}\n"
        result = transform_source(source, "a.js", comment=True)
        assert result.statements_changed == 2
        assert locate_matches(result.code.encode("utf8"), "a.js").matches() == []

    def test_comment_splits_trailing_code(self):
        result = transform_source("console.log(1); run();\n", "a.js", comment=True)
        assert result.code == "// console.log(1);\nrun();\n"


class TestParseFailure:
    def test_malformed_source_unchanged(self, caplog):
        source = "console.log(1;\nfunction {\n"
        with caplog.at_level(logging.WARNING):
            result = transform_source(source, "broken.js")
        assert result.code == source
        assert result.statements_changed == 0
        assert result.skipped_count == 0
        assert "failed to parse" in caplog.text


class TestFixtures:
    """Whole-file rewrites compared against expected output."""

    def test_remove_fixture(self):
        source = (FIXTURES_DIR / "sample.js").read_text()
        result = transform_source(source, "sample.js")
        assert result.code == (FIXTURES_DIR / "sample.removed.js").read_text()
        assert result.statements_changed == 5
        assert result.skipped_count == 1

    def test_comment_fixture(self):
        source = (FIXTURES_DIR / "sample.js").read_text()
        result = transform_source(source, "sample.js", comment=True)
        assert result.code == (FIXTURES_DIR / "sample.commented.js").read_text()
        assert result.statements_changed == 5
