"""Removes blank lines just inside the braces of block statements."""

from __future__ import annotations

from typing import Optional

from tree_sitter import Node

from ..syntax.parser import SourceFile
from ..syntax.tokens import TokenStream, child_of_type, walk

# Statements whose brace-delimited body is a block in Go's own AST.
_BRACED_BODIES = frozenset(
    {
        "block",
        "expression_switch_statement",
        "type_switch_statement",
        "select_statement",
    }
)


def normalize_blocks(
    source_file: SourceFile,
    tokens: Optional[TokenStream] = None,
    *,
    order: str = "preorder",
) -> None:
    """Merge lines in ``source_file.lines`` so no block starts or ends with a blank line.

    Only the line table changes. Lines between statements in the middle
    of a block are left alone.
    """
    stream = tokens if tokens is not None else TokenStream(source_file)
    for node in walk(source_file.root, order):
        if node.type in _BRACED_BODIES:
            _tighten_braces(source_file, node, stream)


def _tighten_braces(source_file: SourceFile, node: Node, tokens: TokenStream) -> None:
    lbrace = child_of_type(node, "{")
    rbrace = child_of_type(node, "}", last=True)
    if lbrace is None or rbrace is None:
        return
    lines = source_file.lines

    anchor = lbrace.end_byte
    following = tokens.first_at_or_after(anchor)
    # Comments trailing "{" on its own line belong to the opening line.
    while (
        following is not None
        and following.is_comment
        and following.start < rbrace.start_byte
        and _same_line(source_file.source, anchor, following.start)
    ):
        anchor = following.end
        following = tokens.first_at_or_after(anchor)
    if following is not None:
        lines.collapse(anchor, following.start)

    preceding = tokens.last_at_or_before(rbrace.start_byte)
    if preceding is not None and preceding.end >= lbrace.end_byte:
        lines.collapse(preceding.end, rbrace.start_byte)


def _same_line(source: bytes, start: int, end: int) -> bool:
    return b"\n" not in source[start:end]


__all__ = ["normalize_blocks"]
