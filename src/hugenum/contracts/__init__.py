"""
Contract Validation Module

Модуль для валидации JSON контрактов hugenum.
"""

from .validators import (
    ContractValidator,
    ScaledIntValidator,
    SchemaLoader,
    dump_scaled_int,
    load_scaled_int,
    validate_scaled_int,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "ScaledIntValidator",
    # Functions
    "validate_scaled_int",
    "dump_scaled_int",
    "load_scaled_int",
]
