"""Parsing layer: Go syntax trees, tokens and the line table."""

from .lines import LineTable, LineTableError
from .parser import GO_LANGUAGE, GoParser, ParseError, SourceFile
from .tokens import Token, TokenStream, walk

__all__ = [
    "GO_LANGUAGE",
    "GoParser",
    "LineTable",
    "LineTableError",
    "ParseError",
    "SourceFile",
    "Token",
    "TokenStream",
    "walk",
]
