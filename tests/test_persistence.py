"""Tests for reading and writing source files."""

from deconsole.core.persistence import backup_path, read_source, write_backup, write_source


class TestPersistence:
    def test_read_keeps_crlf(self, tmp_path):
        path = tmp_path / "a.js"
        path.write_bytes(b"a();\r\nb();\r\n")
        assert read_source(path) == "a();\r\nb();\r\n"

    def test_write_round_trip(self, tmp_path):
        path = tmp_path / "a.js"
        path.write_bytes(b"old")
        write_source(path, "x();\r\ny();\n")
        assert path.read_bytes() == b"x();\r\ny();\n"

    def test_write_leaves_no_temp_files(self, tmp_path):
        path = tmp_path / "a.js"
        path.write_text("old")
        write_source(path, "new")
        assert sorted(p.name for p in tmp_path.iterdir()) == ["a.js"]

    def test_backup_path(self, tmp_path):
        assert backup_path(tmp_path / "app.js") == tmp_path / "app.js.bak"

    def test_write_backup(self, tmp_path):
        path = tmp_path / "app.js"
        path.write_text("console.log(1);\n")
        target = write_backup(path, "console.log(1);\n")
        assert target.read_text() == "console.log(1);\n"
        assert target.name == "app.js.bak"

    def test_backup_keeps_file_mode(self, tmp_path):
        path = tmp_path / "app.js"
        path.write_text("console.log(1);\n")
        path.chmod(0o644)
        target = write_backup(path, "console.log(1);\n")
        assert target.stat().st_mode & 0o777 == 0o644
