"""Tests for Go file discovery."""

from __future__ import annotations

from gotrim.scanner import GoFileScanner
from tests._fixtures.go_tree import GoTree


def test_scanner_walks_directories_and_skips_tool_dirs(go_tree: GoTree) -> None:
    go_tree.write(
        {
            "main.go": "package main\n",
            "internal/util/util.go": "package util\n",
            "vendor/dep/dep.go": "package dep\n",
            "testdata/broken.go": "package\n",
            ".cache/x.go": "package x\n",
            "_scratch/y.go": "package y\n",
            "notes.txt": "hello\n",
        }
    )

    files = GoFileScanner().expand([go_tree.path()])

    assert files == [go_tree.path("main.go"), go_tree.path("internal/util/util.go")]


def test_scanner_applies_exclude_patterns(go_tree: GoTree) -> None:
    go_tree.write(
        {
            "a.go": "package a\n",
            "kind_string.go": "package a\n",
            "gen/models.go": "package gen\n",
        }
    )

    files = GoFileScanner(["gen/", "*_string.go"]).expand([go_tree.path()])

    assert files == [go_tree.path("a.go")]


def test_scanner_passes_explicit_files_through_once(go_tree: GoTree) -> None:
    (path,) = go_tree.write({"kind_string.go": "package a\n"})

    files = GoFileScanner(["*_string.go"]).expand([path, path])

    assert files == [path]
