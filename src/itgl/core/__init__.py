"""Core language: types, expressions, constraints and inference."""

from itgl.core.constraints import Consistent, Constraint, ConstraintSet, Equal
from itgl.core.errors import NotApplicable, TypingError, UnboundVariable, UnificationError
from itgl.core.fresh import FreshSupply
from itgl.core.generalize import alpha_equivalent, generalize
from itgl.core.generator import ConstraintGenerator, generate
from itgl.core.inference import Inference, infer, infer_with_trace
from itgl.core.syntax import (
    App,
    BinOp,
    BinOpKind,
    Const,
    ConstBool,
    ConstInt,
    Environment,
    ExplicitAbs,
    Expr,
    ImplicitAbs,
    Var,
)
from itgl.core.types import (
    BOOL,
    DYN,
    INT,
    BaseType,
    Type,
    TypeArrow,
    TypeDyn,
    TypeParam,
    TypeVar,
)
from itgl.core.unify import Substitution, Unifier, unify

__all__ = [
    # Expressions
    "Expr",
    "Var",
    "Const",
    "ConstBool",
    "ConstInt",
    "BinOp",
    "BinOpKind",
    "ImplicitAbs",
    "ExplicitAbs",
    "App",
    "Environment",
    # Types
    "Type",
    "TypeParam",
    "TypeVar",
    "BaseType",
    "TypeArrow",
    "TypeDyn",
    "BOOL",
    "INT",
    "DYN",
    # Constraints
    "Constraint",
    "Equal",
    "Consistent",
    "ConstraintSet",
    # Inference
    "FreshSupply",
    "ConstraintGenerator",
    "generate",
    "Substitution",
    "Unifier",
    "unify",
    "generalize",
    "alpha_equivalent",
    "Inference",
    "infer",
    "infer_with_trace",
    # Errors
    "TypingError",
    "UnboundVariable",
    "NotApplicable",
    "UnificationError",
]
