# tests/test_source.py
"""Tests for repochat.ingest.source."""

import pytest

from repochat.exceptions import FileReadError
from repochat.ingest.source import InMemorySourceFile, LocalSourceFile, SourceFile, scan_directory


@pytest.fixture
def tree(tmp_path):
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "app.py").write_text("print('hi')\n", encoding="utf-8")
    (tmp_path / "src" / "util.py").write_text("X = 1\n", encoding="utf-8")
    (tmp_path / "node_modules" / "pkg").mkdir(parents=True)
    (tmp_path / "node_modules" / "pkg" / "index.js").write_text("module.exports = {}", encoding="utf-8")
    (tmp_path / "README.md").write_text("# Demo\n", encoding="utf-8")
    return tmp_path


class TestScanDirectory:
    def test_lists_relative_posix_paths_sorted(self, tree):
        paths = [f.path for f in scan_directory(tree)]

        assert paths == [
            "README.md",
            "node_modules/pkg/index.js",
            "src/app.py",
            "src/util.py",
        ]

    def test_does_not_filter(self, tree):
        assert any(f.path.startswith("node_modules/") for f in scan_directory(tree))

    def test_single_file(self, tree):
        files = scan_directory(tree / "README.md")

        assert [f.path for f in files] == ["README.md"]
        assert files[0].read() == "# Demo\n"

    def test_missing_path_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            scan_directory(tmp_path / "nope")

    def test_empty_directory(self, tmp_path):
        assert scan_directory(tmp_path) == []


class TestLocalSourceFile:
    def test_reads_text(self, tree):
        f = LocalSourceFile(root=tree, path="src/app.py")
        assert f.read() == "print('hi')\n"

    def test_line_endings_preserved(self, tmp_path):
        (tmp_path / "win.txt").write_bytes(b"one\r\ntwo\r\n")

        assert LocalSourceFile(root=tmp_path, path="win.txt").read() == "one\r\ntwo\r\n"

    def test_binary_content_raises_file_read_error(self, tmp_path):
        (tmp_path / "logo.png").write_bytes(b"\x89PNG\r\n\x1a\n\xff\xfe\x00")

        with pytest.raises(FileReadError) as exc_info:
            LocalSourceFile(root=tmp_path, path="logo.png").read()

        assert exc_info.value.path == "logo.png"
        assert "utf-8" in exc_info.value.reason

    def test_vanished_file_raises_file_read_error(self, tmp_path):
        with pytest.raises(FileReadError):
            LocalSourceFile(root=tmp_path, path="gone.py").read()

    def test_satisfies_protocol(self, tmp_path):
        assert isinstance(LocalSourceFile(root=tmp_path, path="a"), SourceFile)
        assert isinstance(InMemorySourceFile(path="a", content=""), SourceFile)
