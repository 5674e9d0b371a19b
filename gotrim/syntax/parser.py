"""Tree-sitter powered Go parser producing a syntax tree plus a line table."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import tree_sitter_go
from tree_sitter import Language, Node, Parser, Tree

from .lines import LineTable

GO_LANGUAGE = Language(tree_sitter_go.language())

_SNIPPET_LIMIT = 20


class ParseError(RuntimeError):
    """Raised when Go source text cannot be parsed."""

    def __init__(self, path: str, line: int, column: int, message: str) -> None:
        super().__init__(f"{path}:{line}:{column}: {message}")
        self.path = path
        self.line = line
        self.column = column
        self.message = message


@dataclass
class SourceFile:
    """One parsed compilation unit: source bytes, tree and mutable line table."""

    path: str
    source: bytes
    tree: Tree
    lines: LineTable

    @property
    def root(self) -> Node:
        return self.tree.root_node

    def text(self, node: Node) -> str:
        return self.source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


class GoParser:
    """Parses Go source into a ``SourceFile``; comments are kept as tree nodes."""

    def __init__(self) -> None:
        self._parser: Optional[Parser] = None

    def parse(self, source: bytes, path: Union[str, Path] = "<input>") -> SourceFile:
        parser = self._get_parser()
        tree = parser.parse(source)
        name = str(path)
        if tree.root_node.has_error:
            raise self._error_for(tree.root_node, source, name)
        return SourceFile(path=name, source=source, tree=tree, lines=LineTable(source))

    def _get_parser(self) -> Parser:
        if self._parser is None:
            self._parser = Parser(GO_LANGUAGE)
        return self._parser

    @staticmethod
    def _error_for(root: Node, source: bytes, path: str) -> ParseError:
        node = _first_error_node(root) or root
        line = node.start_point[0] + 1
        column = node.start_point[1] + 1
        if node.is_missing:
            message = f'missing "{node.type}"'
        else:
            snippet = source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")
            snippet = snippet.strip().split("\n", 1)[0]
            if len(snippet) > _SNIPPET_LIMIT:
                snippet = snippet[:_SNIPPET_LIMIT] + "..."
            message = f'syntax error near "{snippet}"' if snippet else "syntax error"
        return ParseError(path, line, column, message)


def _first_error_node(node: Node) -> Optional[Node]:
    if node.type == "ERROR" or node.is_missing:
        return node
    for child in node.children:
        if not (child.has_error or child.is_missing):
            continue
        found = _first_error_node(child)
        if found is not None:
            return found
    return None


__all__ = ["GO_LANGUAGE", "GoParser", "ParseError", "SourceFile"]
