"""Token stream and tree traversal helpers over tree-sitter nodes."""

from __future__ import annotations

from bisect import bisect_left, bisect_right
from collections import deque
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence

from tree_sitter import Node

from .parser import SourceFile

# Nodes emitted as a single token even when the grammar gives them children.
ATOMIC_TYPES = frozenset(
    {
        "comment",
        "interpreted_string_literal",
        "raw_string_literal",
        "rune_literal",
    }
)

TRAVERSAL_ORDERS = ("preorder", "postorder", "breadth")


@dataclass(frozen=True)
class Token:
    """A leaf of the syntax tree as a byte span."""

    start: int
    end: int
    type: str

    @property
    def is_comment(self) -> bool:
        return self.type == "comment"


class TokenStream:
    """Ordered, non-overlapping tokens of a parsed file with offset lookups."""

    def __init__(self, source_file: SourceFile) -> None:
        self._tokens: List[Token] = list(_iter_tokens(source_file.root, source_file.source))
        self._starts = [token.start for token in self._tokens]
        self._ends = [token.end for token in self._tokens]

    def __iter__(self) -> Iterator[Token]:
        return iter(self._tokens)

    def __len__(self) -> int:
        return len(self._tokens)

    def __getitem__(self, index: int) -> Token:
        return self._tokens[index]

    def first_at_or_after(self, offset: int) -> Optional[Token]:
        index = bisect_left(self._starts, offset)
        if index >= len(self._tokens):
            return None
        return self._tokens[index]

    def last_at_or_before(self, offset: int) -> Optional[Token]:
        index = bisect_right(self._ends, offset) - 1
        if index < 0:
            return None
        return self._tokens[index]


def walk(node: Node, order: str = "preorder") -> Iterator[Node]:
    """Yield ``node`` and all of its descendants in the requested order."""
    if order == "preorder":
        stack = [node]
        while stack:
            current = stack.pop()
            yield current
            stack.extend(reversed(current.children))
    elif order == "postorder":
        pending: List[tuple[Node, bool]] = [(node, False)]
        while pending:
            current, expanded = pending.pop()
            if expanded:
                yield current
                continue
            pending.append((current, True))
            pending.extend((child, False) for child in reversed(current.children))
    elif order == "breadth":
        queue = deque([node])
        while queue:
            current = queue.popleft()
            yield current
            queue.extend(current.children)
    else:
        raise ValueError(f"unknown traversal order {order!r}; expected one of {TRAVERSAL_ORDERS}")


def child_of_type(node: Node, kind: str, *, last: bool = False) -> Optional[Node]:
    children: Sequence[Node] = node.children
    if last:
        children = list(reversed(children))
    for child in children:
        if child.type == kind:
            return child
    return None


def _iter_tokens(root: Node, source: bytes) -> Iterator[Token]:
    stack = [root]
    while stack:
        node = stack.pop()
        if node.child_count and node.type not in ATOMIC_TYPES:
            stack.extend(reversed(node.children))
            continue
        if node.end_byte <= node.start_byte:
            continue
        # Automatic statement terminators surface as whitespace tokens.
        if not source[node.start_byte : node.end_byte].strip():
            continue
        yield Token(node.start_byte, node.end_byte, node.type)


__all__ = [
    "ATOMIC_TYPES",
    "TRAVERSAL_ORDERS",
    "Token",
    "TokenStream",
    "child_of_type",
    "walk",
]
