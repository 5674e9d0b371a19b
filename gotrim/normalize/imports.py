"""Collapses blank lines between the entries of parenthesized import groups."""

from __future__ import annotations

from typing import Optional

from tree_sitter import Node

from ..syntax.parser import SourceFile
from ..syntax.tokens import TokenStream, child_of_type


def collapse_imports(source_file: SourceFile, tokens: Optional[TokenStream] = None) -> None:
    """Merge lines so every ``import (...)`` group renders without blank lines.

    Each group is handled on its own; nothing is merged past its closing
    parenthesis, and single ``import "x"`` declarations are not touched.
    """
    stream = tokens if tokens is not None else TokenStream(source_file)
    for declaration in source_file.root.children:
        if declaration.type != "import_declaration":
            continue
        group = child_of_type(declaration, "import_spec_list")
        if group is not None:
            _collapse_group(source_file, group, stream)


def _collapse_group(source_file: SourceFile, group: Node, tokens: TokenStream) -> None:
    lparen = child_of_type(group, "(")
    rparen = child_of_type(group, ")", last=True)
    if lparen is None or rparen is None:
        return

    anchors = [lparen.end_byte]
    anchors.extend(spec.end_byte for spec in group.children if spec.type == "import_spec")
    for anchor in anchors:
        following = tokens.first_at_or_after(anchor)
        # A comment trailing the entry on the same line stays with it.
        while (
            following is not None
            and following.is_comment
            and following.start < rparen.start_byte
            and b"\n" not in source_file.source[anchor : following.start]
        ):
            anchor = following.end
            following = tokens.first_at_or_after(anchor)
        if following is None or following.start > rparen.start_byte:
            continue
        source_file.lines.collapse(anchor, following.start)


__all__ = ["collapse_imports"]
