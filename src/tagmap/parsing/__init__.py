"""Parsing module for struct tag strings."""

from tagmap.parsing.tag_lexer import TagLexer
from tagmap.parsing.tag_parser import TagParser

__all__ = [
    "TagLexer",
    "TagParser",
]
