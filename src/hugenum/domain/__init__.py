"""
Domain models and value objects.

Contains the ScaledInt value type, its error taxonomy and string forms.
"""

from src.hugenum.domain.errors import (
    AccuracyLossError,
    ArithmeticOverflowError,
    DivisionByZeroError,
    ScaledIntError,
)
from src.hugenum.domain.formatting import format_human, format_raw, parse_raw
from src.hugenum.domain.scaled_int import ONE, ZERO, ScaledInt

__all__ = [
    # Value type
    "ScaledInt",
    "ZERO",
    "ONE",
    # Errors
    "ScaledIntError",
    "ArithmeticOverflowError",
    "AccuracyLossError",
    "DivisionByZeroError",
    # Formatting
    "format_raw",
    "format_human",
    "parse_raw",
]
