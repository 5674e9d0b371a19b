"""Renders a parsed Go file back to text, taking vertical spacing from its line table."""

from __future__ import annotations

from typing import List, Optional

from .syntax.parser import SourceFile
from .syntax.tokens import TokenStream


class Printer:
    """Emits tokens in source order with their original text.

    Horizontal whitespace on a line is kept as written. Where two tokens
    are separated by line breaks, the logical lines in the table decide
    the spacing: two or more lines apart gives one blank line, anything
    closer gives a plain line break. Real line breaks are never dropped,
    so automatic semicolons survive any number of merges.
    """

    def render(self, source_file: SourceFile, tokens: Optional[TokenStream] = None) -> bytes:
        stream = tokens if tokens is not None else TokenStream(source_file)
        source = source_file.source
        lines = source_file.lines
        chunks: List[bytes] = []
        previous_end: Optional[int] = None

        for token in stream:
            if previous_end is not None:
                distance = lines.line(token.start) - lines.line(previous_end)
                chunks.append(self._gap(source, previous_end, token.start, distance))
            text = source[token.start : token.end]
            if token.is_comment:
                # Comment tokens keep the "\r" of CRLF line endings.
                text = text.replace(b"\r", b"")
            chunks.append(text)
            previous_end = token.end

        if previous_end is None:
            return b""
        chunks.append(b"\n")
        return b"".join(chunks)

    @staticmethod
    def _gap(source: bytes, start: int, end: int, distance: int) -> bytes:
        raw = source[start:end]
        if raw.strip():
            # Text not covered by any token; leave it exactly as written.
            return raw
        if b"\n" not in raw:
            return raw.replace(b"\r", b"")
        indent = raw.rsplit(b"\n", 1)[1].replace(b"\r", b"")
        breaks = b"\n\n" if distance >= 2 else b"\n"
        return breaks + indent


def render(source_file: SourceFile, tokens: Optional[TokenStream] = None) -> bytes:
    """Render ``source_file`` with the default printer."""
    return Printer().render(source_file, tokens)


__all__ = ["Printer", "render"]
