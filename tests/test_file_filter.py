# tests/test_file_filter.py
"""Tests for repochat.ingest.filter.FileSetFilter."""

import pytest

from repochat.ingest.filter import FileSetFilter
from repochat.ingest.source import InMemorySourceFile


def _files(*paths):
    return [InMemorySourceFile(path=p, content="") for p in paths]


class TestIsExcluded:
    @pytest.mark.parametrize(
        "path",
        [
            "node_modules/react/index.js",
            "packages/app/node_modules/x.js",
            ".git/HEAD",
            "src/.vscode/settings.json",
            "dist/bundle.js",
            "build/out.o",
            "server.log",
            "yarn.lock",
            "logs/debug.LOG",
            "Node_Modules/pkg/a.js",
            "src\\build\\gen.py",
            "./dist/app.js",
        ],
    )
    def test_excluded(self, path):
        assert FileSetFilter().is_excluded(path)

    @pytest.mark.parametrize(
        "path",
        [
            "src/app.py",
            "README.md",
            "builder/main.go",
            "docs/distribution.md",
            "build.gradle",
            "lockfile.txt",
            "src/dist",
            ".gitignore",
        ],
    )
    def test_kept(self, path):
        assert not FileSetFilter().is_excluded(path)

    def test_custom_rules_replace_defaults(self):
        f = FileSetFilter(exclude_segments=["vendor"], exclude_suffixes=[".min.js"])

        assert f.is_excluded("vendor/lib.go")
        assert f.is_excluded("static/app.min.js")
        assert not f.is_excluded("node_modules/a.js")

    def test_empty_rules_keep_everything(self):
        f = FileSetFilter(exclude_segments=[], exclude_suffixes=[])

        assert not f.is_excluded("node_modules/a.js")
        assert not f.is_excluded("app.log")


class TestFilter:
    def test_preserves_order(self):
        files = _files("b.py", "node_modules/x.js", "a.py", "app.log", "c/d.py")

        kept = FileSetFilter().filter(files)

        assert [f.path for f in kept] == ["b.py", "a.py", "c/d.py"]

    def test_all_excluded_returns_empty(self):
        assert FileSetFilter().filter(_files(".git/config", "dist/a.js")) == []

    def test_accepts_generator(self):
        kept = FileSetFilter().filter(f for f in _files("a.py", "build/a.py"))
        assert [f.path for f in kept] == ["a.py"]
