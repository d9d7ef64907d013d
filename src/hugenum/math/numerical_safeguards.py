"""
Numerical Safeguards — целочисленные примитивы фиксированной ширины

Модуль задаёт границы fraction (знаковое 64-битное целое) и примитивы,
на которых строится вся арифметика ScaledInt:
- Эмуляция two's complement переполнения (wrap) для "тихих" операций
- Деление с усечением к нулю (как в native integer math)
- Проверенные шаги ×10 / ÷10 для сдвига экспоненты
- Валидация float и аргументов

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Любой fraction, возвращаемый наружу, лежит в [FRACTION_MIN, FRACTION_MAX]
2. Деление всегда усекает к нулю, никогда не округляет
3. Все операции детерминированы и воспроизводимы
"""

import math
from typing import Final

# =============================================================================
# ПАРАМЕТРЫ ШИРИНЫ FRACTION
# =============================================================================

# Ширина native integer, на котором хранится fraction
FRACTION_BITS: Final[int] = 64

# Максимальное значение fraction (2^63 - 1)
FRACTION_MAX: Final[int] = (1 << (FRACTION_BITS - 1)) - 1

# Минимальное значение fraction (-2^63)
FRACTION_MIN: Final[int] = -(1 << (FRACTION_BITS - 1))

# Модуль для two's complement wrap
_FRACTION_MODULUS: Final[int] = 1 << FRACTION_BITS

# Основание системы счисления экспоненты
DECIMAL_BASE: Final[int] = 10

# Размер группы при возведении в степень (base^(10k) = (base^k)^10)
POW_GROUP_SIZE: Final[int] = 10


# =============================================================================
# FIXED-WIDTH ARITHMETIC
# =============================================================================


def fits_fraction(value: int) -> bool:
    """
    Проверка, помещается ли целое в диапазон fraction.

    Examples:
        >>> fits_fraction(2**63 - 1)
        True
        >>> fits_fraction(2**63)
        False
    """
    return FRACTION_MIN <= value <= FRACTION_MAX


def wrap_fraction(value: int) -> int:
    """
    Приведение целого к диапазону fraction по модулю 2^64 (two's complement).

    Воспроизводит "тихое" переполнение native integer: alignment, exact
    multiply и add/sub не детектируют переполнение.

    Examples:
        >>> wrap_fraction(2**63)
        -9223372036854775808
        >>> wrap_fraction(-1)
        -1
    """
    return ((value - FRACTION_MIN) % _FRACTION_MODULUS) + FRACTION_MIN


def trunc_div(numerator: int, denominator: int) -> int:
    """
    Целочисленное деление с усечением к нулю.

    Python `//` округляет к -inf; native integer division усекает к нулю.

    Raises:
        ZeroDivisionError: если denominator == 0

    Examples:
        >>> trunc_div(7, 2)
        3
        >>> trunc_div(-7, 2)
        -3
    """
    quotient = abs(numerator) // abs(denominator)
    if (numerator < 0) != (denominator < 0):
        return -quotient
    return quotient


def shed_digit(value: int) -> tuple[int, int]:
    """
    Отбрасывание младшей десятичной цифры.

    Returns:
        (value без младшей цифры, отброшенная цифра со знаком value)

    Examples:
        >>> shed_digit(1234)
        (123, 4)
        >>> shed_digit(-1234)
        (-123, -4)
    """
    shed = trunc_div(value, DECIMAL_BASE)
    return shed, value - shed * DECIMAL_BASE


def can_scale_up(value: int) -> bool:
    """
    Проверка, что value × 10 остаётся в диапазоне fraction.
    """
    return abs(value) * DECIMAL_BASE <= FRACTION_MAX


def checked_scale_up(value: int) -> int:
    """
    value × 10 с проверкой переполнения.

    Raises:
        OverflowError: если результат выходит за диапазон fraction
    """
    result = value * DECIMAL_BASE
    if not fits_fraction(result):
        raise OverflowError(f"{value} * {DECIMAL_BASE} exceeds fraction range")
    return result


def product_would_overflow(a: int, b: int) -> bool:
    """
    Проверка, переполнит ли a × b диапазон fraction.

    Тест |a| > FRACTION_MAX // |b| — тот же, что делает native код перед
    умножением, без вычисления самого произведения.
    """
    if a == 0 or b == 0:
        return False
    return abs(a) > FRACTION_MAX // abs(b)


def representable_limit(exponent: int) -> int:
    """
    Максимум |fraction|, при котором fraction × 10^exponent ещё помещается
    в native integer (FRACTION_MAX, делённый на 10 exponent раз).
    """
    limit = FRACTION_MAX
    for _ in range(exponent):
        limit //= DECIMAL_BASE
        if limit == 0:
            break
    return limit


# =============================================================================
# FLOAT VALIDATION
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).
    """
    return math.isfinite(value)


def is_integral_float(value: float) -> bool:
    """
    Проверка, что float не имеет дробной части.
    """
    return value - math.floor(value) == 0


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_non_negative(value: int, name: str) -> None:
    """
    Валидация, что целое неотрицательное.

    Raises:
        ValueError: если value < 0
    """
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")


def validate_finite(value: float, name: str) -> None:
    """
    Валидация, что float конечен.

    Raises:
        ValueError: если value NaN/Inf
    """
    if not is_valid_float(value):
        raise ValueError(f"{name} must be a valid float (not NaN/Inf), got {value}")
