"""Top-level type inference: generate, unify, generalize."""

from __future__ import annotations

from dataclasses import dataclass

from loguru import logger

from itgl.core.constraints import ConstraintSet
from itgl.core.fresh import FreshSupply
from itgl.core.generalize import generalize
from itgl.core.generator import generate
from itgl.core.syntax import Environment, Expr
from itgl.core.types import Type
from itgl.core.unify import Substitution, unify


@dataclass(frozen=True)
class Inference:
    """Every intermediate result of one inference, for diagnostics."""

    expression: Expr
    raw_type: Type
    constraints: ConstraintSet
    substitution: Substitution
    type: Type


def infer_with_trace(env: Environment, expr: Expr, supply: FreshSupply | None = None) -> Inference:
    """Infer the principal type of `expr`, keeping the intermediate results.

    A fresh supply is created unless one is given, so separate calls never
    share counters.

    Raises:
        TypingError: If `expr` has no consistent typing
    """
    supply = supply if supply is not None else FreshSupply()
    raw_type, constraints = generate(env, expr, supply)
    subst = unify(constraints, supply)
    ty = generalize(subst.apply(raw_type), supply)
    logger.debug("infer.done expr={} type={}", expr, ty)
    return Inference(expr, raw_type, constraints, subst, ty)


def infer(env: Environment, expr: Expr, supply: FreshSupply | None = None) -> Type:
    """Infer the principal type scheme of `expr` under `env`."""
    return infer_with_trace(env, expr, supply).type
