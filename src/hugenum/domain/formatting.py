"""
Formatting — строковые формы ScaledInt

Две формы вывода:
- raw:   fraction и, если exponent > 0, суффикс "e<exponent>" ("6022e20")
- human: обычные цифры, если значение помещается в native integer
         ("120", "3628800"), иначе научная запись ("1.416e+32")

parse_raw() — обратная операция для raw-формы.
"""

import re

from src.hugenum.math.numerical_safeguards import representable_limit

_RAW_PATTERN = re.compile(r"^\s*([+-]?\d+)(?:[eE]\+?(\d+))?\s*$")


def format_raw(fraction: int, exponent: int) -> str:
    """
    Raw-форма: "<fraction>" или "<fraction>e<exponent>".

    Examples:
        >>> format_raw(6022, 20)
        '6022e20'
        >>> format_raw(-15, 0)
        '-15'
    """
    if exponent > 0:
        return f"{fraction}e{exponent}"
    return f"{fraction}"


def format_human(fraction: int, exponent: int) -> str:
    """
    Human-форма.

    Если fraction × 10^exponent помещается в native integer — цифры с
    exponent нулями в конце. Иначе — научная запись с одной ведущей цифрой,
    дробным остатком и явной положительной экспонентой.

    Examples:
        >>> format_human(36288, 2)
        '3628800'
        >>> format_human(1416, 29)
        '1.416e+32'
        >>> format_human(1, 80)
        '1e+80'
    """
    if fraction == 0:
        return "0"
    if abs(fraction) < representable_limit(exponent):
        return f"{fraction}" + "0" * exponent

    sign = "-" if fraction < 0 else ""
    digits = str(abs(fraction))
    lead, rest = digits[0], digits[1:].rstrip("0")
    scientific_exponent = exponent + len(digits) - 1
    if rest:
        return f"{sign}{lead}.{rest}e+{scientific_exponent}"
    return f"{sign}{lead}e+{scientific_exponent}"


def parse_raw(text: str) -> tuple[int, int]:
    """
    Разбор raw-формы в пару (fraction, exponent).

    Принимает "-15", "6022e20" и "6022e+20". Диапазон fraction здесь не
    проверяется: это делает модель ScaledInt.

    Raises:
        ValueError: если строка не является raw-формой
    """
    match = _RAW_PATTERN.match(text)
    if match is None:
        raise ValueError(f"Not a raw scaled integer: {text!r}")
    fraction = int(match.group(1))
    exponent = int(match.group(2)) if match.group(2) is not None else 0
    return fraction, exponent
