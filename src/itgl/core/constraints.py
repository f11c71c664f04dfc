"""Equality and consistency constraints."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from itgl.core.types import Type, render_type

if TYPE_CHECKING:
    from itgl.core.unify import Substitution


class Constraint:
    """Base class for constraints between two types."""

    left: Type
    right: Type

    def substitute(self, var: int, ty: Type) -> Constraint:
        return type(self)(self.left.substitute(var, ty), self.right.substitute(var, ty))

    def apply(self, subst: Substitution) -> Constraint:
        return type(self)(subst.apply(self.left), subst.apply(self.right))


@dataclass(frozen=True)
class Equal(Constraint):
    """left and right must become identical."""

    left: Type
    right: Type

    def __str__(self) -> str:
        names: dict[int, str] = {}
        return f"{render_type(self.left, names)} = {render_type(self.right, names)}"


@dataclass(frozen=True)
class Consistent(Constraint):
    """left and right must become consistent: `?` matches anything."""

    left: Type
    right: Type

    def __str__(self) -> str:
        names: dict[int, str] = {}
        return f"{render_type(self.left, names)} ~ {render_type(self.right, names)}"


ConstraintRepr = Union[Equal, Consistent]


@dataclass(frozen=True)
class ConstraintSet:
    """Unordered set of constraints; duplicates collapse."""

    constraints: frozenset[Constraint] = frozenset()

    @staticmethod
    def empty() -> ConstraintSet:
        return ConstraintSet()

    @staticmethod
    def of(*constraints: Constraint) -> ConstraintSet:
        return ConstraintSet(frozenset(constraints))

    def add(self, constraint: Constraint) -> ConstraintSet:
        return ConstraintSet(self.constraints | {constraint})

    def union(self, *others: ConstraintSet) -> ConstraintSet:
        result = self.constraints
        for other in others:
            result = result | other.constraints
        return ConstraintSet(result)

    def substitute(self, var: int, ty: Type) -> ConstraintSet:
        return ConstraintSet(frozenset(c.substitute(var, ty) for c in self.constraints))

    def apply(self, subst: Substitution) -> ConstraintSet:
        return ConstraintSet(frozenset(c.apply(subst) for c in self.constraints))

    def ordered(self) -> list[Constraint]:
        """Constraints in a fixed order, independent of hashing."""
        return sorted(self.constraints, key=repr)

    def __or__(self, other: ConstraintSet) -> ConstraintSet:
        return self.union(other)

    def __contains__(self, constraint: object) -> bool:
        return constraint in self.constraints

    def __iter__(self) -> Iterator[Constraint]:
        return iter(self.ordered())

    def __len__(self) -> int:
        return len(self.constraints)

    def __str__(self) -> str:
        return "{" + ", ".join(str(c) for c in self.ordered()) + "}"
