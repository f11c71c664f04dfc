"""Constraint generation for the implicitly typed gradual language."""

from __future__ import annotations

from loguru import logger

from itgl.core.constraints import Consistent, ConstraintSet, Equal
from itgl.core.errors import NotApplicable, UnboundVariable
from itgl.core.fresh import FreshSupply
from itgl.core.syntax import (
    App,
    BinOp,
    Const,
    ConstBool,
    ConstInt,
    Environment,
    ExplicitAbs,
    Expr,
    ImplicitAbs,
    Var,
)
from itgl.core.types import BOOL, DYN, INT, Type, TypeArrow, TypeDyn, TypeVar


class ConstraintGenerator:
    """Walks an expression and collects equality and consistency constraints."""

    def __init__(self, supply: FreshSupply | None = None):
        self.supply = supply if supply is not None else FreshSupply()

    def generate(self, env: Environment, expr: Expr) -> tuple[Type, ConstraintSet]:
        """Infer a raw type for `expr` together with the constraints it must satisfy.

        Args:
            env: Typing environment
            expr: Expression to walk

        Returns:
            The raw (unsolved) type and the constraint set

        Raises:
            UnboundVariable: If a variable is not in the environment
            NotApplicable: If a non-function is applied
        """
        match expr:
            case Var(name):
                try:
                    return env.lookup(name), ConstraintSet.empty()
                except KeyError as e:
                    raise UnboundVariable(name) from e

            case Const(ConstBool()):
                return BOOL, ConstraintSet.empty()

            case Const(ConstInt()):
                return INT, ConstraintSet.empty()

            case BinOp(_, left, right):
                # Operands only need to be consistent with int, so ? is accepted
                u1, c1 = self.generate(env, left)
                u2, c2 = self.generate(env, right)
                c = c1.union(c2).add(Consistent(u1, INT)).add(Consistent(u2, INT))
                return INT, c

            case ImplicitAbs(param, body):
                param_type = self.supply.tyvar()
                u, c = self.generate(env.extend(param, param_type), body)
                return TypeArrow(param_type, u), c

            case ExplicitAbs(param, param_type, body):
                u, c = self.generate(env.extend(param, param_type), body)
                return TypeArrow(param_type, u), c

            case App(func, arg):
                u1, c1 = self.generate(env, func)
                u2, c2 = self.generate(env, arg)
                u3, c3 = self._codomain(u1)
                c4 = self._domain(u1, u2)
                return u3, c1.union(c2, c3, c4)

            case _:
                raise TypeError(f"Unknown expression: {expr!r}")

    def _codomain(self, u: Type) -> tuple[Type, ConstraintSet]:
        match u:
            case TypeVar():
                x1, x2 = self.supply.tyvar_pair()
                return x2, ConstraintSet.of(Equal(u, TypeArrow(x1, x2)))
            case TypeArrow(_, cod):
                return cod, ConstraintSet.empty()
            case TypeDyn():
                return DYN, ConstraintSet.empty()
            case _:
                raise NotApplicable(u)

    def _domain(self, u1: Type, u2: Type) -> ConstraintSet:
        match u1:
            case TypeVar():
                x1, x2 = self.supply.tyvar_pair()
                return ConstraintSet.of(Equal(u1, TypeArrow(x1, x2)), Consistent(x1, u2))
            case TypeArrow(dom, _):
                return ConstraintSet.of(Consistent(dom, u2))
            case TypeDyn():
                return ConstraintSet.of(Consistent(u1, u2))
            case _:
                raise NotApplicable(u1)


def generate(
    env: Environment, expr: Expr, supply: FreshSupply | None = None
) -> tuple[Type, ConstraintSet]:
    """Generate constraints for `expr` under `env`."""
    ty, constraints = ConstraintGenerator(supply).generate(env, expr)
    logger.debug("generate.done type={} constraints={}", ty, len(constraints))
    return ty, constraints
