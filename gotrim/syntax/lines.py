"""Byte offset to logical line mapping used by the printer for vertical spacing."""

from __future__ import annotations

from bisect import bisect_right
from typing import List


class LineTableError(ValueError):
    """Raised when a merge targets a line that does not exist."""


class LineTable:
    """Maps byte offsets of one source file to 1-based logical line numbers.

    The table starts out with one entry per physical line. ``merge`` drops
    the start of a line so the printer sees two physical lines as one
    logical line, without touching the source bytes or any token offset.
    """

    def __init__(self, source: bytes) -> None:
        starts = [0]
        index = source.find(b"\n")
        while index != -1:
            starts.append(index + 1)
            index = source.find(b"\n", index + 1)
        self._starts: List[int] = starts
        self._size = len(source)
        self._merged = 0

    @property
    def line_count(self) -> int:
        return len(self._starts)

    @property
    def merged(self) -> int:
        """Number of merges applied since the table was built."""
        return self._merged

    @property
    def size(self) -> int:
        return self._size

    def line(self, offset: int) -> int:
        """Return the logical line holding ``offset``."""
        if offset < 0 or offset > self._size:
            raise LineTableError(f"offset {offset} outside of source (size {self._size})")
        return bisect_right(self._starts, offset)

    def line_start(self, line: int) -> int:
        """Return the byte offset where logical ``line`` begins."""
        if line < 1 or line > len(self._starts):
            raise LineTableError(f"invalid line number {line} (1..{len(self._starts)})")
        return self._starts[line - 1]

    def merge(self, line: int) -> None:
        """Merge ``line`` with the following line.

        All later lines shift down by one. Raises ``LineTableError`` when
        ``line`` is the last line or out of range.
        """
        if line < 1 or line >= len(self._starts):
            raise LineTableError(f"invalid line number {line} (1..{len(self._starts) - 1})")
        del self._starts[line]
        self._merged += 1

    def collapse(self, start: int, end: int) -> int:
        """Merge lines until ``end`` sits at most one logical line below ``start``.

        Any number of blank lines between the two offsets disappear. A
        boundary that is already tight is left as is, so collapsing the
        same pair twice changes nothing the second time.
        """
        if end < start:
            raise LineTableError(f"collapse range is reversed ({start} > {end})")
        first = self.line(start)
        merges = 0
        while self.line(end) - first > 1:
            self.merge(first)
            merges += 1
        return merges

    def __repr__(self) -> str:
        return f"LineTable(lines={len(self._starts)}, merged={self._merged})"


__all__ = ["LineTable", "LineTableError"]
