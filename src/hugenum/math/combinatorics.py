"""
Combinatorics — факториалы и таблицы степеней на ScaledInt

Все произведения накапливаются через mul_safe: при росте значения
младшие цифры отбрасываются, переполнения fraction не бывает.

Examples:
    >>> factorial(10)
    ScaledInt(fraction=36288, exponent=2)
"""

from typing import Union

from src.hugenum.domain.scaled_int import ONE, ScaledInt
from src.hugenum.math.numerical_safeguards import validate_non_negative


def factorial(n: int, strict: bool = False) -> ScaledInt:
    """
    n! как произведение 1 × 2 × ... × n через mul_safe.

    Args:
        n: Неотрицательное целое
        strict: Запретить потерю ненулевых цифр

    Returns:
        ScaledInt (factorial(0) == 1)

    Raises:
        ValueError: если n < 0
        AccuracyLossError: если strict и результат не помещается точно
    """
    validate_non_negative(n, "n")
    result = ONE
    for k in range(2, n + 1):
        result = result.mul_safe(k, strict=strict)
    return result


def factorial_table(upto: int) -> list[tuple[int, ScaledInt]]:
    """
    Таблица (n, n!) для n = 0..upto.

    Каждое значение получается из предыдущего одним mul_safe.
    """
    validate_non_negative(upto, "upto")
    table = [(0, ONE)]
    current = ONE
    for n in range(1, upto + 1):
        current = current.mul_safe(n)
        table.append((n, current))
    return table


def power_table(
    base: Union[ScaledInt, int], upto: int
) -> list[tuple[int, ScaledInt]]:
    """
    Таблица (n, base^n) для n = 0..upto.
    """
    validate_non_negative(upto, "upto")
    if not isinstance(base, ScaledInt):
        base = ScaledInt.from_int(base)
    table = [(0, ONE)]
    current = ONE
    for n in range(1, upto + 1):
        current = current.mul_safe(base)
        table.append((n, current))
    return table
