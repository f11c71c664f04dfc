"""Surface language: lexer and parser."""

from itgl.surface.lexer import Lexer, lex
from itgl.surface.parser import (
    ParseError,
    Parser,
    parse_binding,
    parse_expr,
    parse_program,
    parse_type,
)
from itgl.surface.types import LexerError, Token, TokenType

__all__ = [
    # Lexer
    "Lexer",
    "LexerError",
    "Token",
    "TokenType",
    "lex",
    # Parser
    "Parser",
    "ParseError",
    "parse_expr",
    "parse_program",
    "parse_type",
    "parse_binding",
]
