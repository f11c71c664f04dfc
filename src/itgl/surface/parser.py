"""Recursive descent parser for the surface language.

Builds core expressions and types directly: the surface grammar has no
sugar that needs elaborating.
"""

from __future__ import annotations

from itgl.core.syntax import (
    App,
    BinOp,
    BinOpKind,
    Const,
    ConstBool,
    ConstInt,
    ExplicitAbs,
    Expr,
    ImplicitAbs,
    Var,
)
from itgl.core.types import BOOL, DYN, INT, Type, TypeArrow
from itgl.surface.lexer import Lexer
from itgl.surface.types import Token, TokenType
from itgl.utils.location import Location

_ATOM_START = (
    TokenType.IDENT,
    TokenType.NUMBER,
    TokenType.TRUE,
    TokenType.FALSE,
    TokenType.LPAREN,
)


class ParseError(Exception):
    """Error during parsing."""

    def __init__(self, message: str, location: Location):
        super().__init__(f"{location}: {message}")
        self.location = location


class Parser:
    """Recursive descent parser for ITGL.

    Grammar:
        program   ::= (expr ";;")* expr? EOF

        expr      ::= lambda | sum

        lambda    ::= ("fun" | "\\") binder ("->" | ".") expr

        binder    ::= ident
                    | ident ":" atom_type
                    | "(" ident ":" type ")"

        sum       ::= app ("+" (app | lambda))*

        app       ::= atom atom*

        atom      ::= ident | number | "true" | "false" | "(" expr ")"

        type      ::= atom_type ("->" type)?

        atom_type ::= "int" | "bool" | "?" | "(" type ")"
    """

    def __init__(self, tokens: list[Token]):
        """Initialize parser with token stream."""
        self.tokens = tokens
        self.pos = 0

    def _current(self) -> Token:
        """Get current token."""
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return self.tokens[-1]  # EOF token

    def _peek(self, offset: int = 0) -> Token:
        """Peek at token ahead."""
        idx = self.pos + offset
        if idx < len(self.tokens):
            return self.tokens[idx]
        return self.tokens[-1]

    def _advance(self) -> Token:
        """Consume and return current token."""
        token = self._current()
        if self.pos < len(self.tokens) - 1:
            self.pos += 1
        return token

    def _expect(self, token_type: str) -> Token:
        """Expect current token to be of specific type."""
        token = self._current()
        if token.type != token_type:
            raise ParseError(f"Expected {token_type}, got {token.type}", token.location)
        return self._advance()

    def _match(self, *token_types: str) -> bool:
        """Check if current token matches any of the types."""
        return self._current().type in token_types

    def _consume(self, token_type: str) -> bool:
        """Consume token if it matches type."""
        if self._match(token_type):
            self._advance()
            return True
        return False

    def at_end(self) -> bool:
        """Check if at end of input."""
        return self._current().type == TokenType.EOF

    # =====================================================================
    # Programs
    # =====================================================================

    def parse_program(self) -> list[Expr]:
        """Parse `;;`-separated expressions until EOF."""
        exprs = []
        while not self.at_end():
            if self._consume(TokenType.SEMISEMI):
                continue
            exprs.append(self.parse_expr())
            if not self.at_end():
                self._expect(TokenType.SEMISEMI)
        return exprs

    def parse_toplevel(self) -> Expr:
        """Parse exactly one expression, optionally terminated by `;;`."""
        expr = self.parse_expr()
        self._consume(TokenType.SEMISEMI)
        self._expect(TokenType.EOF)
        return expr

    # =====================================================================
    # Expressions
    # =====================================================================

    def parse_expr(self) -> Expr:
        """Parse an expression."""
        if self._match(TokenType.FUN, TokenType.LAMBDA):
            return self.parse_lambda()
        return self.parse_sum()

    def parse_lambda(self) -> Expr:
        """Parse: fun x -> e, fun (x : T) -> e, \\x:T. e"""
        self._advance()  # fun or \
        name, param_type = self.parse_binder()

        if not self._consume(TokenType.ARROW):
            self._expect(TokenType.DOT)
        body = self.parse_expr()  # extends as far right as possible

        if param_type is None:
            return ImplicitAbs(name, body)
        return ExplicitAbs(name, param_type, body)

    def parse_binder(self) -> tuple[str, Type | None]:
        """Parse a lambda binder with an optional annotation."""
        if self._match(TokenType.LPAREN) and self._peek(2).type == TokenType.COLON:
            self._advance()
            name = self._expect(TokenType.IDENT).value
            self._expect(TokenType.COLON)
            param_type = self.parse_type()
            self._expect(TokenType.RPAREN)
            return name, param_type

        name = self._expect(TokenType.IDENT).value
        if self._consume(TokenType.COLON):
            # Only an atomic type: the next arrow belongs to the lambda
            return name, self.parse_atom_type()
        return name, None

    def parse_sum(self) -> Expr:
        """Parse left-associative addition."""
        expr = self.parse_application()
        while self._consume(TokenType.PLUS):
            if self._match(TokenType.FUN, TokenType.LAMBDA):
                right = self.parse_lambda()
            else:
                right = self.parse_application()
            expr = BinOp(BinOpKind.PLUS, expr, right)
        return expr

    def parse_application(self) -> Expr:
        """Parse function application (left-associative)."""
        expr = self.parse_atom()
        while self._match(*_ATOM_START):
            expr = App(expr, self.parse_atom())
        return expr

    def parse_atom(self) -> Expr:
        """Parse atomic expression."""
        token = self._current()

        if self._consume(TokenType.LPAREN):
            expr = self.parse_expr()
            self._expect(TokenType.RPAREN)
            return expr

        if self._match(TokenType.IDENT):
            return Var(self._advance().value)

        if self._match(TokenType.NUMBER):
            return Const(ConstInt(int(self._advance().value)))

        if self._consume(TokenType.TRUE):
            return Const(ConstBool(True))

        if self._consume(TokenType.FALSE):
            return Const(ConstBool(False))

        raise ParseError(f"Unexpected token: {token.type}", token.location)

    # =====================================================================
    # Types
    # =====================================================================

    def parse_type(self) -> Type:
        """Parse arrow type (right-associative)."""
        arg = self.parse_atom_type()
        if self._consume(TokenType.ARROW):
            return TypeArrow(arg, self.parse_type())
        return arg

    def parse_atom_type(self) -> Type:
        """Parse atomic type."""
        token = self._current()

        if self._consume(TokenType.LPAREN):
            ty = self.parse_type()
            self._expect(TokenType.RPAREN)
            return ty

        if self._consume(TokenType.INT):
            return INT

        if self._consume(TokenType.BOOL):
            return BOOL

        if self._consume(TokenType.QUESTION):
            return DYN

        raise ParseError(f"Unexpected token in type: {token.type}", token.location)

    def parse_toplevel_type(self) -> Type:
        """Parse exactly one type."""
        ty = self.parse_type()
        self._expect(TokenType.EOF)
        return ty

    def parse_binding(self) -> tuple[str, Type]:
        """Parse an environment entry: name : type"""
        name = self._expect(TokenType.IDENT).value
        self._expect(TokenType.COLON)
        ty = self.parse_type()
        self._expect(TokenType.EOF)
        return name, ty


# =============================================================================
# Convenience Functions
# =============================================================================


def _parser(source: str, filename: str | None) -> Parser:
    return Parser(Lexer(source, filename).tokenize())


def parse_expr(source: str, filename: str | None = None) -> Expr:
    """Parse a single expression, with an optional trailing `;;`.

    Example:
        >>> str(parse_expr("fun x -> x"))
        'λx.x'
    """
    return _parser(source, filename).parse_toplevel()


def parse_program(source: str, filename: str | None = None) -> list[Expr]:
    """Parse a sequence of `;;`-separated expressions."""
    return _parser(source, filename).parse_program()


def parse_type(source: str, filename: str | None = None) -> Type:
    """Parse a type such as `(int -> ?) -> bool`."""
    return _parser(source, filename).parse_toplevel_type()


def parse_binding(source: str, filename: str | None = None) -> tuple[str, Type]:
    """Parse `name : type`."""
    return _parser(source, filename).parse_binding()
