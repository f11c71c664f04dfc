"""Principal type inference for the implicitly typed gradual language."""

from itgl.core import Environment, TypingError, infer, infer_with_trace

__version__ = "0.1.0"

__all__ = [
    "Environment",
    "TypingError",
    "infer",
    "infer_with_trace",
]
