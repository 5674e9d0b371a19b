"""Tests for gotrim.orchestrator."""

from __future__ import annotations

import io
from pathlib import Path
from typing import TextIO

import pytest

from gotrim.config import GoTrimConfig, ImportsConfig
from gotrim.orchestrator import Orchestrator, ReadError, WriteError
from gotrim.syntax import ParseError
from tests._fixtures.go_tree import GoTree

MESSY = (
    "package main\n\n"
    'import (\n\t"fmt"\n\n\t"os"\n\n\t"strings"\n)\n\n'
    "func main() {\n\n\n"
    "\tif len(os.Args) > 1 {\n\n"
    "\t\tfmt.Println(strings.Join(os.Args[1:], \" \"))\n\n"
    "\t}\n\n"
    "\tfmt.Println(\"done\")\n\n"
    "}\n"
)

TIDY = (
    "package main\n\n"
    'import (\n\t"fmt"\n\t"os"\n\t"strings"\n)\n\n'
    "func main() {\n"
    "\tif len(os.Args) > 1 {\n"
    "\t\tfmt.Println(strings.Join(os.Args[1:], \" \"))\n"
    "\t}\n\n"
    "\tfmt.Println(\"done\")\n"
    "}\n"
)

BROKEN = "package main\n\nfunc main() {\n\tif {\n"


def _orchestrator(tmp_path: Path, out: TextIO, **imports: object) -> Orchestrator:
    config = GoTrimConfig(root=tmp_path, imports=ImportsConfig(**imports))  # type: ignore[arg-type]
    return Orchestrator(config=config, stdout=out)


def test_format_source_trims_blocks_and_imports(tmp_path: Path) -> None:
    orchestrator = _orchestrator(tmp_path, io.StringIO())
    assert orchestrator.format_source(MESSY.encode("utf-8"), "main.go").decode("utf-8") == TIDY


def test_format_source_is_idempotent(tmp_path: Path) -> None:
    orchestrator = _orchestrator(tmp_path, io.StringIO())
    once = orchestrator.format_source(MESSY.encode("utf-8"), "main.go")
    assert orchestrator.format_source(once, "main.go") == once


def test_format_source_respects_disabled_passes(tmp_path: Path) -> None:
    config = GoTrimConfig(
        root=tmp_path,
        blocks=False,
        imports=ImportsConfig(collapse=False, organize=False),
    )
    orchestrator = Orchestrator(config=config, stdout=io.StringIO())
    # Only the printer's own cap on blank-line runs applies.
    expected = MESSY.replace("func main() {\n\n\n", "func main() {\n\n")
    assert orchestrator.format_source(MESSY.encode("utf-8")).decode("utf-8") == expected


def test_run_prints_files_by_default(go_tree: GoTree, tmp_path: Path) -> None:
    (path,) = go_tree.write({"main.go": MESSY})
    out = io.StringIO()

    batch = _orchestrator(tmp_path, out).run([path])

    assert batch.ok
    assert out.getvalue() == f"// File: {path}\n{TIDY}"
    assert go_tree.read("main.go") == MESSY


def test_run_writes_changed_files(go_tree: GoTree, tmp_path: Path) -> None:
    messy, tidy = go_tree.write({"a.go": MESSY, "b.go": TIDY})
    out = io.StringIO()

    batch = _orchestrator(tmp_path, out).run([messy, tidy], write=True)

    assert batch.ok
    assert batch.written == [messy]
    assert go_tree.read("a.go") == TIDY
    assert out.getvalue() == ""


def test_run_walks_directories(go_tree: GoTree, tmp_path: Path) -> None:
    go_tree.write({"cmd/app/main.go": MESSY, "vendor/x/x.go": MESSY, "README.md": "docs\n"})
    out = io.StringIO()

    batch = _orchestrator(tmp_path, out).run([go_tree.path()], list_only=True)

    assert [result.path for result in batch.results] == [go_tree.path("cmd/app/main.go")]
    assert out.getvalue() == f"{go_tree.path('cmd/app/main.go')}\n"


def test_run_shows_diffs(go_tree: GoTree, tmp_path: Path) -> None:
    messy, tidy = go_tree.write({"a.go": MESSY, "b.go": TIDY})
    out = io.StringIO()

    batch = _orchestrator(tmp_path, out).run([messy, tidy], diff=True)

    assert batch.ok
    output = out.getvalue()
    assert f"--- {messy} (original)" in output
    assert str(tidy) not in output
    assert go_tree.read("a.go") == MESSY


@pytest.mark.parametrize("write", [True, False])
def test_parse_failure_blocks_the_whole_batch(go_tree: GoTree, tmp_path: Path, write: bool) -> None:
    good, bad = go_tree.write({"good.go": MESSY, "bad.go": BROKEN})
    out = io.StringIO()

    batch = _orchestrator(tmp_path, out).run([good, bad], write=write)

    assert not batch.ok
    assert len(batch.errors) == 1
    assert isinstance(batch.errors[0], ParseError)
    assert str(batch.errors[0]).startswith(str(bad))
    assert batch.written == []
    assert out.getvalue() == ""
    assert go_tree.read("good.go") == MESSY


def test_missing_files_are_collected_as_read_errors(go_tree: GoTree, tmp_path: Path) -> None:
    (good,) = go_tree.write({"good.go": MESSY})
    out = io.StringIO()

    batch = _orchestrator(tmp_path, out).run([good, go_tree.path("missing.go")], write=True)

    assert len(batch.errors) == 1
    assert isinstance(batch.errors[0], ReadError)
    assert go_tree.read("good.go") == MESSY


def test_write_failures_are_collected_per_file(
    go_tree: GoTree, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    first, second = go_tree.write({"a.go": MESSY, "b.go": MESSY})
    original_write = Path.write_bytes

    def flaky_write(self: Path, data: bytes) -> int:
        if self.name == "a.go":
            raise PermissionError(13, "Permission denied")
        return original_write(self, data)

    monkeypatch.setattr(Path, "write_bytes", flaky_write)

    batch = _orchestrator(tmp_path, io.StringIO()).run([first, second], write=True)

    assert len(batch.errors) == 1
    assert isinstance(batch.errors[0], WriteError)
    assert "Permission denied" in str(batch.errors[0])
    assert batch.written == [second]
    assert go_tree.read("b.go") == TIDY


def test_run_prints_non_utf8_bytes_unchanged(go_tree: GoTree, tmp_path: Path) -> None:
    path = go_tree.path("latin1.go")
    path.write_bytes(b"package p\n\n// caf\xe9\nfunc f() {\n\n\tx()\n}\n")
    buffer = io.BytesIO()
    out = io.TextIOWrapper(buffer, encoding="utf-8")

    batch = _orchestrator(tmp_path, out).run([path])

    assert batch.ok
    out.flush()
    assert buffer.getvalue() == (
        f"// File: {path}\n".encode("utf-8") + b"package p\n\n// caf\xe9\nfunc f() {\n\tx()\n}\n"
    )
