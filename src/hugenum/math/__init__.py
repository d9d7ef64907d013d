"""
Math modules для hugenum

Целочисленные примитивы фиксированной ширины и комбинаторика на ScaledInt.
combinatorics импортируется напрямую (src.hugenum.math.combinatorics),
так как зависит от domain.
"""

from src.hugenum.math.numerical_safeguards import (
    # Fraction width constants
    DECIMAL_BASE,
    FRACTION_BITS,
    FRACTION_MAX,
    FRACTION_MIN,
    POW_GROUP_SIZE,
    # Fixed-width arithmetic
    can_scale_up,
    checked_scale_up,
    fits_fraction,
    product_would_overflow,
    representable_limit,
    shed_digit,
    trunc_div,
    wrap_fraction,
    # Float checks
    is_integral_float,
    is_valid_float,
    # Validation
    validate_finite,
    validate_non_negative,
)

__all__ = [
    # Fraction width constants
    "DECIMAL_BASE",
    "FRACTION_BITS",
    "FRACTION_MAX",
    "FRACTION_MIN",
    "POW_GROUP_SIZE",
    # Fixed-width arithmetic
    "can_scale_up",
    "checked_scale_up",
    "fits_fraction",
    "product_would_overflow",
    "representable_limit",
    "shed_digit",
    "trunc_div",
    "wrap_fraction",
    # Float checks
    "is_integral_float",
    "is_valid_float",
    # Validation
    "validate_finite",
    "validate_non_negative",
]
