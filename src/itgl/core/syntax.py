"""Expressions, constants and typing environments."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Union

from itgl.core.types import Type, TypeArrow

# =============================================================================
# Constants
# =============================================================================


@dataclass(frozen=True)
class ConstBool:
    """Boolean literal."""

    value: bool

    def __str__(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True)
class ConstInt:
    """Integer literal."""

    value: int

    def __str__(self) -> str:
        return str(self.value)


Constant = Union[ConstBool, ConstInt]


class BinOpKind(str, Enum):
    PLUS = "+"


# =============================================================================
# Expressions
# =============================================================================


class Expr:
    """Base class for expressions."""

    def __str__(self) -> str:
        return render_expr(self)


@dataclass(frozen=True)
class Var(Expr):
    """Variable reference: x."""

    name: str


@dataclass(frozen=True)
class Const(Expr):
    """Boolean or integer constant."""

    value: Constant


@dataclass(frozen=True)
class BinOp(Expr):
    """Binary arithmetic: left + right."""

    op: BinOpKind
    left: Expr
    right: Expr


@dataclass(frozen=True)
class ImplicitAbs(Expr):
    """Abstraction without a binder annotation: λx.body."""

    param: str
    body: Expr


@dataclass(frozen=True)
class ExplicitAbs(Expr):
    """Abstraction with a declared binder type: λx:T.body."""

    param: str
    param_type: Type
    body: Expr


@dataclass(frozen=True)
class App(Expr):
    """Application: (func arg)."""

    func: Expr
    arg: Expr


ExprRepr = Union[Var, Const, BinOp, ImplicitAbs, ExplicitAbs, App]


def render_expr(e: Expr) -> str:
    """Render an expression in a form the surface parser reads back."""
    match e:
        case Var(name):
            return name
        case Const(value):
            return str(value)
        case BinOp(op, left, right):
            left_str = render_expr(left)
            if isinstance(left, (ImplicitAbs, ExplicitAbs)):
                left_str = f"({left_str})"
            right_str = render_expr(right)
            if isinstance(right, (BinOp, ImplicitAbs, ExplicitAbs)):
                right_str = f"({right_str})"
            return f"{left_str} {op.value} {right_str}"
        case ImplicitAbs(param, body):
            return f"λ{param}.{render_expr(body)}"
        case ExplicitAbs(param, param_type, body):
            ty_str = str(param_type)
            if isinstance(param_type, TypeArrow):
                ty_str = f"({ty_str})"
            return f"λ{param}:{ty_str}.{render_expr(body)}"
        case App(func, arg):
            return f"({_operand(func)} {_operand(arg)})"
        case _:
            raise TypeError(f"Unknown expression: {e!r}")


def _operand(e: Expr) -> str:
    s = render_expr(e)
    if isinstance(e, (BinOp, ImplicitAbs, ExplicitAbs)):
        return f"({s})"
    return s


# =============================================================================
# Typing environment
# =============================================================================


@dataclass(frozen=True)
class Environment:
    """Immutable typing environment Γ mapping identifiers to types."""

    bindings: Mapping[str, Type] = field(default_factory=lambda: MappingProxyType({}))

    @staticmethod
    def empty() -> Environment:
        return Environment()

    @staticmethod
    def of(bindings: Mapping[str, Type]) -> Environment:
        return Environment(MappingProxyType(dict(bindings)))

    def lookup(self, name: str) -> Type:
        """Look up the type of `name`.

        Raises:
            KeyError: If `name` is not bound
        """
        try:
            return self.bindings[name]
        except KeyError:
            raise KeyError(f"Variable {name!r} not bound in environment with {len(self)} entries") from None

    def extend(self, name: str, ty: Type) -> Environment:
        """Return a new environment with `name` bound to `ty`, shadowing any older binding."""
        extended = dict(self.bindings)
        extended[name] = ty
        return Environment(MappingProxyType(extended))

    def __contains__(self, name: object) -> bool:
        return name in self.bindings

    def __iter__(self) -> Iterator[str]:
        return iter(self.bindings)

    def __len__(self) -> int:
        return len(self.bindings)

    def __str__(self) -> str:
        entries = ", ".join(f"{name} : {ty}" for name, ty in self.bindings.items())
        return f"Environment([{entries}])"
