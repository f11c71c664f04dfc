"""Lexer for the surface language.

Regex-driven tokenizer. Whitespace, newlines and nested `(* ... *)`
comments are skipped; everything else becomes a `Token`.
"""

from __future__ import annotations

import re

from itgl.surface.types import LexerError, Token, TokenType
from itgl.utils.location import Location

_WORD_END = r"(?![A-Za-z0-9_'])"


class Lexer:
    """Tokenizer for ITGL source text."""

    # Token specifications as regex patterns, tried in order
    TOKEN_PATTERNS = [
        ("WHITESPACE", r"[ \t]+"),
        ("NEWLINE", r"\n|\r\n?"),
        ("COMMENT_START", r"\(\*"),
        ("SEMISEMI", r";;"),
        # Keywords
        ("FUN", r"fun" + _WORD_END),
        ("TRUE", r"true" + _WORD_END),
        ("FALSE", r"false" + _WORD_END),
        ("INT", r"int" + _WORD_END),
        ("BOOL", r"bool" + _WORD_END),
        # Operators (ASCII and Unicode)
        ("ARROW", r"->|\u2192"),  # -> or →
        ("LAMBDA", r"\\|\u03bb"),  # \ or λ
        ("PLUS", r"\+"),
        ("COLON", r":"),
        ("DOT", r"\."),
        ("QUESTION", r"\?"),
        # Delimiters
        ("LPAREN", r"\("),
        ("RPAREN", r"\)"),
        ("IDENT", r"[a-z_][a-zA-Z0-9_']*"),
        ("NUMBER", r"[0-9]+"),
    ]

    def __init__(self, source: str, filename: str | None = None):
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: list[Token] = []

        self._pattern = re.compile(
            "|".join(f"(?P<{name}>{pattern})" for name, pattern in self.TOKEN_PATTERNS)
        )

    def tokenize(self) -> list[Token]:
        """Convert source code to a token stream ending in EOF.

        Raises:
            LexerError: On an unexpected character or an unclosed comment
        """
        self.tokens = []

        while self.pos < len(self.source):
            match = self._pattern.match(self.source, self.pos)
            if not match or match.lastgroup is None:
                char = self.source[self.pos]
                raise LexerError(f"Unexpected character: {char!r}", self._location())

            token_type = match.lastgroup
            value = match.group()
            start_loc = self._location()

            if token_type == TokenType.COMMENT_START:
                self._skip_comment(start_loc)
                continue

            self._advance(value)

            if token_type in (TokenType.WHITESPACE, TokenType.NEWLINE):
                continue

            self.tokens.append(Token(token_type, value, start_loc))

        self.tokens.append(Token(TokenType.EOF, "", self._location()))
        return self.tokens

    def _skip_comment(self, start_loc: Location) -> None:
        """Skip a possibly nested `(* ... *)` comment."""
        depth = 0
        while self.pos < len(self.source):
            if self.source.startswith("(*", self.pos):
                depth += 1
                self._advance("(*")
            elif self.source.startswith("*)", self.pos):
                depth -= 1
                self._advance("*)")
                if depth == 0:
                    return
            else:
                self._advance(self.source[self.pos])

        raise LexerError("Unclosed comment: expected *)", start_loc)

    def _location(self) -> Location:
        return Location(self.line, self.column, self.filename)

    def _advance(self, text: str) -> None:
        """Update line/column counters after consuming text."""
        for char in text:
            if char == "\n":
                self.line += 1
                self.column = 1
            else:
                self.column += 1
        self.pos += len(text)


def lex(source: str, filename: str | None = None) -> list[Token]:
    """Tokenize source code.

    Example:
        >>> [t.type for t in lex("fun x -> x")]
        ['FUN', 'IDENT', 'ARROW', 'IDENT', 'EOF']
    """
    return Lexer(source, filename).tokenize()
