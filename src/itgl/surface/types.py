"""Token definitions for the surface lexer."""

from __future__ import annotations

from dataclasses import dataclass

from itgl.utils.location import Location


@dataclass(frozen=True)
class Token:
    """A lexed token: its type name, source text and location."""

    type: str
    value: str
    location: Location

    def __str__(self) -> str:
        return f"{self.type}({self.value!r})"


class LexerError(Exception):
    """Error during lexical analysis."""

    def __init__(self, message: str, location: Location):
        super().__init__(f"{location}: {message}")
        self.location = location


class TokenType:
    """Token types for the surface lexer.

    Plain class attributes rather than an Enum, so token types compare
    equal to their names.
    """

    # Skipped
    WHITESPACE = "WHITESPACE"
    NEWLINE = "NEWLINE"
    COMMENT_START = "COMMENT_START"  # (*

    # Keywords
    FUN = "FUN"
    TRUE = "TRUE"
    FALSE = "FALSE"
    INT = "INT"
    BOOL = "BOOL"

    # Operators
    ARROW = "ARROW"  # ->
    LAMBDA = "LAMBDA"  # \
    PLUS = "PLUS"  # +
    COLON = "COLON"  # :
    DOT = "DOT"  # .
    QUESTION = "QUESTION"  # ?
    SEMISEMI = "SEMISEMI"  # ;;

    # Delimiters
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"

    IDENT = "IDENT"
    NUMBER = "NUMBER"

    EOF = "EOF"
