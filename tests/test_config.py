"""Tests for run configuration."""

import pytest

from deconsole.config import DEFAULT_IGNORES, DEFAULT_PATTERNS, RunOptions, normalize_list


class TestNormalizeList:
    def test_empty_falls_back(self):
        assert normalize_list(None, ("x",)) == ("x",)
        assert normalize_list((), ("x",)) == ("x",)

    def test_comma_separated(self):
        assert normalize_list(["a, b", "c"], ()) == ("a", "b", "c")

    def test_single_string(self):
        assert normalize_list("a,b", ()) == ("a", "b")

    def test_only_blanks_falls_back(self):
        assert normalize_list([" , "], ("x",)) == ("x",)


class TestRunOptions:
    def test_defaults(self, tmp_path):
        options = RunOptions.create(cwd=tmp_path)
        assert options.cwd == tmp_path.resolve()
        assert options.patterns == DEFAULT_PATTERNS
        assert options.ignore == DEFAULT_IGNORES
        assert options.target == "console"
        assert options.action == "removed"

    def test_comment_action(self, tmp_path):
        assert RunOptions.create(cwd=tmp_path, comment=True).action == "commented"

    def test_immutable(self, tmp_path):
        options = RunOptions.create(cwd=tmp_path)
        with pytest.raises(AttributeError):
            options.comment = True

    def test_missing_directory(self, tmp_path):
        with pytest.raises(ValueError, match="does not exist"):
            RunOptions.create(cwd=tmp_path / "missing")

    def test_invalid_target(self, tmp_path):
        with pytest.raises(ValueError, match="identifier"):
            RunOptions.create(cwd=tmp_path, target="window.console")

    def test_invalid_jobs(self, tmp_path):
        with pytest.raises(ValueError, match="Jobs"):
            RunOptions.create(cwd=tmp_path, jobs=0)
