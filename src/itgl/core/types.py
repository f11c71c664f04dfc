"""Type representations for the implicitly typed gradual language."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


class Type:
    """Base class for types."""

    def free_vars(self) -> set[int]:
        """Return set of free type variable ids."""
        raise NotImplementedError

    def substitute(self, var: int, ty: Type) -> Type:
        """Replace every occurrence of type variable `var` with `ty`."""
        raise NotImplementedError

    def is_static(self) -> bool:
        """True if the type mentions no dynamic type."""
        return True

    def __str__(self) -> str:
        return render_type(self)


@dataclass(frozen=True)
class TypeParam(Type):
    """Type parameter introduced by generalization."""

    id: int

    def free_vars(self) -> set[int]:
        return set()

    def substitute(self, var: int, ty: Type) -> Type:
        return self


@dataclass(frozen=True)
class TypeVar(Type):
    """Solver-internal type variable."""

    id: int

    def free_vars(self) -> set[int]:
        return {self.id}

    def substitute(self, var: int, ty: Type) -> Type:
        if self.id == var:
            return ty
        return self


@dataclass(frozen=True)
class BaseType(Type):
    """Base type: bool or int."""

    name: str

    def free_vars(self) -> set[int]:
        return set()

    def substitute(self, var: int, ty: Type) -> Type:
        return self


@dataclass(frozen=True)
class TypeArrow(Type):
    """Function type: dom -> cod."""

    dom: Type
    cod: Type

    def free_vars(self) -> set[int]:
        return self.dom.free_vars() | self.cod.free_vars()

    def substitute(self, var: int, ty: Type) -> Type:
        return TypeArrow(self.dom.substitute(var, ty), self.cod.substitute(var, ty))

    def is_static(self) -> bool:
        return self.dom.is_static() and self.cod.is_static()


@dataclass(frozen=True)
class TypeDyn(Type):
    """The dynamic type `?`, consistent with every type."""

    def free_vars(self) -> set[int]:
        return set()

    def substitute(self, var: int, ty: Type) -> Type:
        return self

    def is_static(self) -> bool:
        return False


BOOL = BaseType("bool")
INT = BaseType("int")
DYN = TypeDyn()

TypeRepr = Union[TypeParam, TypeVar, BaseType, TypeArrow, TypeDyn]


def is_base_type(t: Type) -> bool:
    return isinstance(t, BaseType)


def is_bvp_type(t: Type) -> bool:
    """Base type, type variable or type parameter."""
    return isinstance(t, (BaseType, TypeVar, TypeParam))


def _param_name(index: int) -> str:
    letter = chr(ord("a") + index % 26)
    suffix = index // 26
    return f"'{letter}{suffix}" if suffix else f"'{letter}"


def render_type(t: Type, params: dict[int, str] | None = None) -> str:
    """Render a type for humans.

    Type parameters are named `'a`, `'b`, ... in order of first appearance,
    so two alpha-equivalent schemes render identically. Pass the same `params`
    dict to render several types with one naming.
    """
    if params is None:
        params = {}

    def go(t: Type) -> str:
        match t:
            case TypeParam(id):
                if id not in params:
                    params[id] = _param_name(len(params))
                return params[id]
            case TypeVar(id):
                return f"'x{id}"
            case BaseType(name):
                return name
            case TypeArrow(dom, cod):
                dom_str = go(dom)
                if isinstance(dom, TypeArrow):
                    dom_str = f"({dom_str})"
                return f"{dom_str} -> {go(cod)}"
            case TypeDyn():
                return "?"
            case _:
                raise TypeError(f"Unknown type: {t!r}")

    return go(t)
