"""Parser for struct tag strings."""

from __future__ import annotations

from typing import Any

import ply.yacc as yacc

from tagmap.errors import MalformedTagError
from tagmap.parsing.tag_lexer import TagLexer
from tagmap.types import StructTag


class TagParser:
    """Parser turning a struct tag string into a StructTag.

    The grammar is a whitespace separated list of ``key:"value"`` pairs.
    An empty string is a valid tag with no entries.
    """

    tokens = TagLexer.tokens

    def __init__(self) -> None:
        self.lexer = TagLexer()
        self.lexer.build()
        self.parser: yacc.LRParser = None  # type: ignore

    def p_tag(self, p: yacc.YaccProduction) -> None:
        """tag : pair_list"""
        p[0] = p[1]

    def p_tag_empty(self, p: yacc.YaccProduction) -> None:
        """tag : """
        p[0] = []

    def p_pair_list_single(self, p: yacc.YaccProduction) -> None:
        """pair_list : pair"""
        p[0] = [p[1]]

    def p_pair_list_multiple(self, p: yacc.YaccProduction) -> None:
        """pair_list : pair_list pair"""
        p[0] = p[1] + [p[2]]

    def p_pair(self, p: yacc.YaccProduction) -> None:
        """pair : KEY COLON STRING"""
        p[0] = (p[1], p[3])

    def p_error(self, p: yacc.YaccProduction) -> None:
        if p:
            raise MalformedTagError(f"Syntax error at '{p.value}' (position {p.lexpos})")
        else:
            raise MalformedTagError("Syntax error at end of tag")

    def build(self, **kwargs: Any) -> None:
        """Build the parser."""
        self.parser = yacc.yacc(module=self, **kwargs)

    def parse(self, data: str) -> StructTag:
        """Parse a struct tag string."""
        if self.parser is None:
            self.build(debug=False, write_tables=False)

        pairs = self.parser.parse(data, lexer=self.lexer.lexer)
        if pairs is None:
            pairs = []
        return StructTag(raw=data, pairs=tuple(pairs))
