"""Lexer for struct tag strings such as ``config:"name" json:"other"``."""

import re

import ply.lex as lex

from tagmap.errors import MalformedTagError

# Escapes accepted inside a quoted tag value
ESCAPES = {
    '"': '"',
    "\\": "\\",
    "n": "\n",
    "t": "\t",
}

_ESCAPE_RE = re.compile(r"\\(.)")


def unquote(text: str) -> str:
    """Strip the surrounding quotes from a tag value and resolve escapes."""

    def replace(match: re.Match[str]) -> str:
        char = match.group(1)
        if char not in ESCAPES:
            raise MalformedTagError(f"Unknown escape '\\{char}' in tag value {text}")
        return ESCAPES[char]

    return _ESCAPE_RE.sub(replace, text[1:-1])


class TagLexer:
    """Lexer for tokenizing struct tag strings."""

    # Token list
    tokens = [
        "KEY",
        "COLON",
        "STRING",
    ]

    # Ignored characters (spaces and tabs separate key/value pairs)
    t_ignore = " \t"

    def __init__(self) -> None:
        self.lexer: lex.LexToken = None  # type: ignore

    def t_STRING(self, t: lex.LexToken) -> lex.LexToken:
        r'"(?:[^"\\\n]|\\.)*"'
        t.value = unquote(t.value)
        return t

    def t_COLON(self, t: lex.LexToken) -> lex.LexToken:
        r":"
        return t

    def t_KEY(self, t: lex.LexToken) -> lex.LexToken:
        r'[^\s:"\\]+'
        return t

    def t_error(self, t: lex.LexToken) -> None:
        raise MalformedTagError(f"Illegal character '{t.value[0]}' at position {t.lexpos}")

    def build(self, **kwargs) -> None:  # type: ignore
        """Build the lexer."""
        self.lexer = lex.lex(module=self, **kwargs)

    def input(self, data: str) -> None:
        """Set the input string to tokenize."""
        self.lexer.input(data)

    def token(self) -> lex.LexToken | None:
        """Return the next token."""
        return self.lexer.token()

    def tokenize(self, data: str) -> list[lex.LexToken]:
        """Tokenize the input and return all tokens."""
        self.input(data)
        tokens = []
        while True:
            tok = self.token()
            if tok is None:
                break
            tokens.append(tok)
        return tokens
