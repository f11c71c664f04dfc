"""Error types for gradual type inference."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from itgl.core.constraints import Constraint
    from itgl.core.types import Type


class TypingError(Exception):
    """Base class for typing errors. The whole inference is aborted."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnboundVariable(TypingError):
    """Variable not found in the typing environment."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"variable '{name}' not found in the environment")


class NotApplicable(TypingError):
    """Operator of an application is neither a function, a variable nor dynamic."""

    def __init__(self, ty: Type):
        self.ty = ty
        super().__init__(f"type {ty} is not applicable")


class UnificationError(TypingError):
    """No rewrite rule applies to a constraint.

    Occurs-check violations end up here as well.
    """

    def __init__(self, constraint: Constraint):
        self.constraint = constraint
        super().__init__(f"cannot unify: {constraint}")
