"""Generalization of leftover type variables into type parameters."""

from __future__ import annotations

from itgl.core.fresh import FreshSupply
from itgl.core.types import Type, TypeArrow, TypeParam, TypeVar


def tyvars_in_order(t: Type) -> list[int]:
    """Free type variable ids, left to right, each listed once."""
    seen: list[int] = []

    def go(t: Type) -> None:
        match t:
            case TypeVar(id):
                if id not in seen:
                    seen.append(id)
            case TypeArrow(dom, cod):
                go(dom)
                go(cod)
            case _:
                pass

    go(t)
    return seen


def generalize(t: Type, supply: FreshSupply | None = None) -> Type:
    """Replace every free type variable in `t` with a fresh type parameter.

    The same variable always maps to the same parameter. A type without free
    variables is returned as is.
    """
    variables = tyvars_in_order(t)
    if not variables:
        return t
    supply = supply if supply is not None else FreshSupply()
    for var in variables:
        t = t.substitute(var, supply.typaram())
    return t


def alpha_equivalent(t1: Type, t2: Type) -> bool:
    """Equality up to a consistent renaming of type parameters and variables."""
    params: dict[int, int] = {}
    variables: dict[int, int] = {}

    def rename(mapping: dict[int, int], a: int, b: int) -> bool:
        if a in mapping:
            return mapping[a] == b
        if b in mapping.values():
            return False
        mapping[a] = b
        return True

    def go(a: Type, b: Type) -> bool:
        match a, b:
            case TypeParam(i), TypeParam(j):
                return rename(params, i, j)
            case TypeVar(i), TypeVar(j):
                return rename(variables, i, j)
            case TypeArrow(d1, c1), TypeArrow(d2, c2):
                return go(d1, d2) and go(c1, c2)
            case _:
                return a == b

    return go(t1, t2)
