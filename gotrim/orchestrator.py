"""Pipeline orchestration: parse, normalize, render, organize imports, commit."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Sequence, TextIO

from .config import GoTrimConfig
from .logging import get_logger
from .models import BatchResult, FormatResult
from .normalize import collapse_imports, normalize_blocks
from .postproc.diff import render_diff
from .postproc.organizer import ImportOrganizer, OrganizeError
from .printer import Printer
from .scanner import GoFileScanner
from .syntax.parser import GoParser, ParseError
from .syntax.tokens import TokenStream


class ReadError(RuntimeError):
    """Raised when a source file cannot be read."""


class WriteError(RuntimeError):
    """Raised when a formatted file cannot be written back."""


class Orchestrator:
    """Formats Go files with all-or-nothing batch semantics.

    Every file is read and formatted in memory first. Output is only
    written or printed once the whole batch has succeeded.
    """

    def __init__(
        self,
        config: GoTrimConfig | None = None,
        parser: GoParser | None = None,
        printer: Printer | None = None,
        organizer: ImportOrganizer | None = None,
        scanner: GoFileScanner | None = None,
        stdout: TextIO | None = None,
    ) -> None:
        self.config = config or GoTrimConfig(root=Path.cwd())
        self.parser = parser or GoParser()
        self.printer = printer or Printer()
        self.organizer = organizer or ImportOrganizer(self.config.imports, parser=self.parser)
        self.scanner = scanner or GoFileScanner(self.config.exclude_paths)
        self._stdout = stdout
        self.logger = get_logger("orchestrator")

    @property
    def stdout(self) -> TextIO:
        return self._stdout if self._stdout is not None else sys.stdout

    def format_source(self, source: bytes, path: str | Path = "<input>") -> bytes:
        """Return ``source`` with blank lines trimmed and imports organized."""
        source_file = self.parser.parse(source, path)
        tokens = TokenStream(source_file)
        if self.config.blocks:
            normalize_blocks(source_file, tokens)
        if self.config.imports.collapse:
            collapse_imports(source_file, tokens)
        self.logger.debug("%s: merged %d line(s)", path, source_file.lines.merged)

        rendered = self.printer.render(source_file, tokens)
        if not self.config.imports.organize:
            return rendered
        return self.organizer.organize(rendered, path)

    def format_file(self, path: Path) -> FormatResult:
        try:
            original = path.read_bytes()
        except OSError as exc:
            raise ReadError(f"{path}: {exc.strerror or exc}") from exc
        formatted = self.format_source(original, path)
        return FormatResult(path=path, original=original, formatted=formatted)

    def run(
        self,
        paths: Sequence[str | Path],
        *,
        write: bool = False,
        diff: bool = False,
        list_only: bool = False,
    ) -> BatchResult:
        """Format every file under ``paths`` and commit only if all succeeded."""
        files = self.scanner.expand(paths)
        self.logger.info("Formatting %d file(s)", len(files))

        batch = BatchResult()
        for path in files:
            try:
                batch.results.append(self.format_file(path))
            except (ParseError, OrganizeError, ReadError) as exc:
                self.logger.debug("Failed to format %s: %s", path, exc)
                batch.errors.append(exc)

        if batch.errors:
            self.logger.info("%d file(s) failed; nothing written", len(batch.errors))
            return batch

        self._commit(batch, write=write, diff=diff, list_only=list_only)
        return batch

    def _commit(self, batch: BatchResult, *, write: bool, diff: bool, list_only: bool) -> None:
        out = self.stdout
        for result in batch.results:
            if list_only and result.changed:
                out.write(f"{result.path}\n")
            if diff and result.changed:
                out.write(render_diff(result.original, result.formatted, str(result.path)))
            if write:
                if not result.changed:
                    continue
                try:
                    self._write(result)
                except WriteError as exc:
                    batch.errors.append(exc)
                else:
                    batch.written.append(result.path)
            elif not (diff or list_only):
                out.write(f"// File: {result.path}\n")
                self._emit(out, result.formatted)
        if write:
            self.logger.info("Rewrote %d file(s)", len(batch.written))

    @staticmethod
    def _emit(out: TextIO, data: bytes) -> None:
        """Write source bytes unchanged when ``out`` exposes a binary buffer.

        Text-only streams get a lossy UTF-8 decode instead.
        """
        buffer = getattr(out, "buffer", None)
        if buffer is None:
            out.write(data.decode("utf-8", errors="replace"))
            return
        out.flush()
        buffer.write(data)
        buffer.flush()

    def _write(self, result: FormatResult) -> None:
        try:
            result.path.write_bytes(result.formatted)
        except OSError as exc:
            self.logger.debug("Write failed for %s: %s", result.path, exc)
            raise WriteError(f"{result.path}: {exc.strerror or exc}") from exc


__all__ = ["Orchestrator", "ReadError", "WriteError"]
