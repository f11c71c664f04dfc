"""Unification of equality and consistency constraints."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from loguru import logger

from itgl.core.constraints import Consistent, Constraint, ConstraintSet, Equal
from itgl.core.errors import UnificationError
from itgl.core.fresh import FreshSupply
from itgl.core.types import Type, TypeArrow, TypeDyn, TypeVar, is_bvp_type, render_type


@dataclass(frozen=True)
class Substitution:
    """Ordered list of type variable bindings, in the order they were solved.

    Application is a left-to-right fold: each binding is substituted into the
    result of the previous ones, so a binding may mention variables that are
    only bound later in the list.
    """

    bindings: tuple[tuple[int, Type], ...] = ()

    @staticmethod
    def empty() -> Substitution:
        return Substitution()

    @staticmethod
    def singleton(var: int, t: Type) -> Substitution:
        return Substitution(((var, t),))

    def extend(self, var: int, t: Type) -> Substitution:
        """Append a binding; it is applied after all existing ones."""
        return Substitution(self.bindings + ((var, t),))

    def apply(self, t: Type) -> Type:
        """Apply this substitution to a type."""
        for var, ty in self.bindings:
            t = t.substitute(var, ty)
        return t

    def __iter__(self) -> Iterator[tuple[int, Type]]:
        return iter(self.bindings)

    def __len__(self) -> int:
        return len(self.bindings)

    def __str__(self) -> str:
        names: dict[int, str] = {}
        return ", ".join(f"x{var}={render_type(ty, names)}" for var, ty in self.bindings)


def occurs_in(var: int, t: Type) -> bool:
    """Check if type variable `var` occurs in `t`."""
    return var in t.free_vars()


class Unifier:
    """Rewrites a constraint set to solved form.

    The worklist is a stack: the next constraint is at the end, and the
    constraints a rule produces are pushed so that the first of them is
    handled next.
    """

    def __init__(self, supply: FreshSupply | None = None):
        self.supply = supply if supply is not None else FreshSupply()

    def unify(self, constraints: ConstraintSet) -> Substitution:
        """Solve `constraints`.

        Returns:
            A substitution whose bindings are in solve order

        Raises:
            UnificationError: If some constraint has no matching rule,
                including occurs-check violations
        """
        work: list[Constraint] = list(reversed(constraints.ordered()))
        subst = Substitution.empty()

        while work:
            c = work.pop()
            match c:
                case Consistent(u1, u2) if u1 == u2 and is_bvp_type(u1):
                    pass

                case Consistent(TypeDyn(), _) | Consistent(_, TypeDyn()):
                    pass

                case Consistent(TypeArrow(u11, u12), TypeArrow(u21, u22)):
                    self._push(work, Consistent(u11, u21), Consistent(u12, u22))

                case Consistent(u, TypeVar() as x) if not isinstance(u, TypeVar):
                    self._push(work, Consistent(x, u))

                case Consistent(TypeVar() as x, u) if is_bvp_type(u):
                    self._push(work, Equal(x, u))

                case Consistent(TypeVar(xid) as x, TypeArrow(u1, u2) as u) if not occurs_in(xid, u):
                    x1, x2 = self.supply.tyvar_pair()
                    self._push(work, Equal(x, TypeArrow(x1, x2)), Consistent(x1, u1), Consistent(x2, u2))

                case Equal(t1, t2) if t1 == t2 and t1.is_static() and is_bvp_type(t1):
                    pass

                case Equal(TypeArrow(t11, t12), TypeArrow(t21, t22)) if all(
                    t.is_static() for t in (t11, t12, t21, t22)
                ):
                    self._push(work, Equal(t11, t21), Equal(t12, t22))

                case Equal(t, TypeVar() as x) if t.is_static() and not isinstance(t, TypeVar):
                    self._push(work, Equal(x, t))

                case Equal(TypeVar(xid), t) if not occurs_in(xid, t):
                    logger.trace("unify.bind x{}={}", xid, t)
                    subst = subst.extend(xid, t)
                    work = [w.substitute(xid, t) for w in work]

                case _:
                    logger.debug("unify.fail constraint={}", c)
                    raise UnificationError(c)

        return subst

    @staticmethod
    def _push(work: list[Constraint], *constraints: Constraint) -> None:
        work.extend(reversed(constraints))


def unify(constraints: ConstraintSet, supply: FreshSupply | None = None) -> Substitution:
    """Compute a substitution solving `constraints`."""
    subst = Unifier(supply).unify(constraints)
    logger.debug("unify.done bindings={}", len(subst))
    return subst
