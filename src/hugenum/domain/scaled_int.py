"""
ScaledInt — приближённое "огромное" целое

Значение хранится парой (fraction, exponent) и означает
fraction × 10^exponent. fraction ограничен native integer (int64),
поэтому большие значения (факториалы, степени) представляются приближённо:
точность обменивается на диапазон.

Immutable Pydantic модель: каждая операция возвращает новый экземпляр.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Нормализованная форма: fraction == 0 и exponent == 0, либо fraction % 10 != 0
2. Равенство определяется нормализованной формой; hash совпадает с hash(int)
3. Все арифметические операции возвращают нормализованный результат
4. mul_safe никогда не переполняет fraction (отбрасывает младшие цифры)

ИЗВЕСТНЫЕ ОГРАНИЧЕНИЯ:
- align(), mul_exact(), add(), sub() не детектируют переполнение fraction:
  результат "заворачивается" по модулю 2^64, как в native integer math.
- Сравнения < <= > >= выполняются через align() и поэтому неверны, если
  alignment переполняет fraction (операнды с очень разными экспонентами).
  Целые вне int64 сравниваются точно, без alignment.
"""

import sys
from typing import Optional, Union

from pydantic import BaseModel, Field

from src.hugenum.domain.errors import (
    AccuracyLossError,
    ArithmeticOverflowError,
    DivisionByZeroError,
)
from src.hugenum.domain.formatting import format_human, format_raw, parse_raw
from src.hugenum.logging import get_logger
from src.hugenum.math.numerical_safeguards import (
    DECIMAL_BASE,
    FRACTION_MAX,
    FRACTION_MIN,
    POW_GROUP_SIZE,
    can_scale_up,
    checked_scale_up,
    fits_fraction,
    is_integral_float,
    product_would_overflow,
    representable_limit,
    shed_digit,
    trunc_div,
    validate_finite,
    wrap_fraction,
)

logger = get_logger(__name__)

Operand = Union["ScaledInt", int]

_MAX_DIGITS = len(str(FRACTION_MIN))


# =============================================================================
# PAIR HELPERS
# =============================================================================


def _normalize_pair(fraction: int, exponent: int) -> tuple[int, int]:
    while fraction % DECIMAL_BASE == 0 and fraction != 0:
        fraction //= DECIMAL_BASE
        exponent += 1
    if fraction == 0:
        exponent = 0
    return fraction, exponent


def _aligned_fractions(a: "ScaledInt", b: "ScaledInt") -> tuple[int, int, int]:
    """
    Приведение двух значений к общей экспоненте.

    Fraction операнда с большей экспонентой умножается на 10 (с wrap) до
    совпадения экспонент. После 64 умножений wrap даёт 0, дальше цикл
    не нужен.

    Returns:
        (fraction a, fraction b, общая экспонента)
    """
    a_f, a_e = a.fraction, a.exponent
    b_f, b_e = b.fraction, b.exponent

    while a_e > b_e:
        if a_f == 0:
            a_e = b_e
            break
        a_f = wrap_fraction(a_f * DECIMAL_BASE)
        a_e -= 1

    while b_e > a_e:
        if b_f == 0:
            b_e = a_e
            break
        b_f = wrap_fraction(b_f * DECIMAL_BASE)
        b_e -= 1

    return a_f, b_f, a_e


def _magnitude_key(fraction: int, exponent: int) -> tuple[int, str]:
    """
    Ключ сравнения |fraction| × 10^exponent без раскрытия экспоненты.

    Порядок величины (exponent + число цифр), затем ведущие цифры,
    выровненные по длине.
    """
    digits = str(abs(fraction))
    return exponent + len(digits), digits.ljust(_MAX_DIGITS, "0")


def _is_representable(fraction: int, exponent: int) -> bool:
    return abs(fraction) < representable_limit(exponent)


def _build(fraction: int, exponent: int) -> "ScaledInt":
    return ScaledInt(*_normalize_pair(fraction, exponent))


def _coerce(value: object) -> Optional["ScaledInt"]:
    if isinstance(value, ScaledInt):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return ScaledInt.from_int(value)
    return None


def _is_wide_int(value: object) -> bool:
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and not fits_fraction(value)
    )


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def _compare_exact(fraction: int, exponent: int, value: int) -> int:
    """
    Точное сравнение fraction × 10^exponent с целым value: -1, 0 или 1.

    Экспонента раскрывается только когда порядки величин совпадают.
    """
    fraction, exponent = _normalize_pair(fraction, exponent)
    sign_a, sign_b = _sign(fraction), _sign(value)
    if sign_a != sign_b or sign_a == 0:
        return _sign(sign_a - sign_b)

    order_a = exponent + len(str(abs(fraction)))
    order_b = len(str(abs(value)))
    if order_a != order_b:
        result = _sign(order_a - order_b)
    else:
        result = _sign(abs(fraction) * DECIMAL_BASE**exponent - abs(value))
    return result * sign_a


def _order(a: "ScaledInt", other: object) -> Optional[int]:
    if _is_wide_int(other):
        return _compare_exact(a.fraction, a.exponent, other)
    other = _coerce(other)
    if other is None:
        return None
    a_f, b_f, _ = _aligned_fractions(a, other)
    return _sign(a_f - b_f)


def _require(value: object) -> "ScaledInt":
    coerced = _coerce(value)
    if coerced is None:
        raise TypeError(
            f"Expected ScaledInt or int operand, got {type(value).__name__}"
        )
    return coerced


# =============================================================================
# SCALED INT MODEL
# =============================================================================


class ScaledInt(BaseModel):
    """
    Целое fraction × 10^exponent с fraction фиксированной ширины.

    Конструктор принимает явную пару и НЕ нормализует её:
    ScaledInt(60) и ScaledInt(6, 1) — разные пары, но равные значения.
    """

    fraction: int = Field(
        ...,
        strict=True,
        ge=FRACTION_MIN,
        le=FRACTION_MAX,
        description="Мантисса (native int64)",
    )
    exponent: int = Field(
        0,
        strict=True,
        ge=0,
        description="Количество неявных нулей в конце (степень 10)",
    )

    model_config = {"frozen": True, "extra": "forbid"}  # Immutable

    def __init__(self, fraction: int, exponent: int = 0) -> None:
        super().__init__(fraction=fraction, exponent=exponent)

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def from_int(cls, value: int) -> "ScaledInt":
        """
        Значение из целого: fraction = value, exponent = 0.

        Целые вне диапазона int64 теряют младшие цифры (усечение), пока
        не поместятся в fraction.
        """
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"from_int expects int, got {type(value).__name__}")
        fraction, exponent = value, 0
        while not fits_fraction(fraction):
            fraction, _ = shed_digit(fraction)
            exponent += 1
        if exponent:
            logger.debug("from_int: shed %d digit(s) of %d", exponent, value)
        return cls(fraction, exponent)

    @classmethod
    def from_float(cls, value: float) -> "ScaledInt":
        """
        Значение из float.

        Пока value / 10 остаётся целым, делим на 10 и считаем деления в
        exponent; остаток усекается до целого fraction.

        Examples:
            >>> ScaledInt.from_float(6.022e23)
            ScaledInt(fraction=6022, exponent=20)

        Raises:
            ValueError: если value NaN/Inf
        """
        validate_finite(value, "value")
        n = float(value)
        exponent = 0
        while n != 0 and is_integral_float(n / DECIMAL_BASE):
            n /= DECIMAL_BASE
            exponent += 1

        fraction = int(n)
        while not fits_fraction(fraction):
            fraction, _ = shed_digit(fraction)
            exponent += 1
        return _build(fraction, exponent)

    @classmethod
    def parse(cls, text: str) -> "ScaledInt":
        """
        Разбор raw-формы ("6022e20", "-15").

        Raises:
            ValueError: если строка не является raw-формой
            pydantic.ValidationError: если fraction вне диапазона int64
        """
        fraction, exponent = parse_raw(text)
        return cls(fraction, exponent)

    # -------------------------------------------------------------------------
    # Normalization & alignment
    # -------------------------------------------------------------------------

    def normalize(self) -> "ScaledInt":
        """Каноническая форма без нулей в конце fraction."""
        fraction, exponent = _normalize_pair(self.fraction, self.exponent)
        if (fraction, exponent) == (self.fraction, self.exponent):
            return self
        return ScaledInt(fraction, exponent)

    def is_normalized(self) -> bool:
        return _normalize_pair(self.fraction, self.exponent) == (
            self.fraction,
            self.exponent,
        )

    @staticmethod
    def align(a: Operand, b: Operand) -> tuple["ScaledInt", "ScaledInt"]:
        """
        Приведение к общей экспоненте (commonize).

        Результат не нормализован. Переполнение fraction не детектируется.

        Examples:
            >>> ScaledInt.align(ScaledInt(6022, 20), ScaledInt(1416, 29))
            (ScaledInt(fraction=6022, exponent=20), ScaledInt(fraction=1416000000000, exponent=20))
        """
        a, b = _require(a), _require(b)
        a_f, b_f, exponent = _aligned_fractions(a, b)
        return ScaledInt(a_f, exponent), ScaledInt(b_f, exponent)

    # -------------------------------------------------------------------------
    # Equality & ordering
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if _is_wide_int(other):
            return _compare_exact(self.fraction, self.exponent, other) == 0
        other = _coerce(other)
        if other is None:
            return NotImplemented
        return _normalize_pair(self.fraction, self.exponent) == _normalize_pair(
            other.fraction, other.exponent
        )

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self) -> int:
        """
        Hash совпадает с hash(int) того же значения.

        |fraction| × 10^exponent берётся по модулю sys.hash_info.modulus,
        так что экспонента не раскрывается.
        """
        fraction, exponent = _normalize_pair(self.fraction, self.exponent)
        if exponent == 0:
            return hash(fraction)
        modulus = sys.hash_info.modulus
        result = abs(fraction) * pow(DECIMAL_BASE, exponent, modulus) % modulus
        if fraction < 0:
            result = -result
        return -2 if result == -1 else result

    def __lt__(self, other: object) -> bool:
        order = _order(self, other)
        if order is None:
            return NotImplemented
        return order < 0

    def __le__(self, other: object) -> bool:
        order = _order(self, other)
        if order is None:
            return NotImplemented
        return order <= 0

    def __gt__(self, other: object) -> bool:
        order = _order(self, other)
        if order is None:
            return NotImplemented
        return order > 0

    def __ge__(self, other: object) -> bool:
        order = _order(self, other)
        if order is None:
            return NotImplemented
        return order >= 0

    # -------------------------------------------------------------------------
    # Addition & subtraction
    # -------------------------------------------------------------------------

    def add(self, other: Operand) -> "ScaledInt":
        """Сумма через alignment. Переполнение не детектируется."""
        other = _require(other)
        a_f, b_f, exponent = _aligned_fractions(self, other)
        return _build(wrap_fraction(a_f + b_f), exponent)

    def sub(self, other: Operand) -> "ScaledInt":
        """Разность через alignment. Переполнение не детектируется."""
        other = _require(other)
        a_f, b_f, exponent = _aligned_fractions(self, other)
        return _build(wrap_fraction(a_f - b_f), exponent)

    def neg(self) -> "ScaledInt":
        return _build(wrap_fraction(-self.fraction), self.exponent)

    def abs(self) -> "ScaledInt":
        if self.fraction < 0:
            return ScaledInt(wrap_fraction(-self.fraction), self.exponent)
        return self

    # -------------------------------------------------------------------------
    # Multiplication
    # -------------------------------------------------------------------------

    def mul_exact(self, other: Operand) -> "ScaledInt":
        """
        Точное произведение: fraction × fraction, экспоненты складываются.

        Переполнение fraction не детектируется (wrap по модулю 2^64).
        """
        other = _require(other)
        return _build(
            wrap_fraction(self.fraction * other.fraction),
            self.exponent + other.exponent,
        )

    def mul_safe(self, other: Operand, strict: bool = False) -> "ScaledInt":
        """
        Произведение без переполнения.

        Пока произведение fraction не помещается в native integer, у операнда
        с большей величиной (порядок exponent + число цифр, затем ведущие
        цифры; при равенстве — self) отбрасывается младшая цифра:
        fraction // 10, exponent + 1.

        Args:
            other: Множитель (ScaledInt или int)
            strict: Запретить потерю ненулевых цифр

        Raises:
            AccuracyLossError: если strict и отбрасывается ненулевая цифра

        Examples:
            >>> ScaledInt(2**62).mul_safe(4)
            ScaledInt(fraction=184467440737095516, exponent=2)
        """
        other = _require(other)
        a_f, a_e = self.fraction, self.exponent
        b_f, b_e = other.fraction, other.exponent

        shed_count = 0
        while product_would_overflow(a_f, b_f):
            if _magnitude_key(a_f, a_e) >= _magnitude_key(b_f, b_e):
                a_f, digit = shed_digit(a_f)
                a_e += 1
            else:
                b_f, digit = shed_digit(b_f)
                b_e += 1
            if strict and digit != 0:
                raise AccuracyLossError(
                    f"mul_safe({self}, {other}) would discard a non-zero digit"
                )
            shed_count += 1

        if shed_count:
            logger.debug(
                "mul_safe: shed %d digit(s) multiplying %s by %s",
                shed_count,
                self,
                other,
            )
        return _build(a_f * b_f, a_e + b_e)

    # -------------------------------------------------------------------------
    # Division
    # -------------------------------------------------------------------------

    def div(self, other: Operand, strict: bool = False) -> "ScaledInt":
        """
        Приближённое частное (усечение к нулю).

        1. Общие степени 10 сокращаются без изменения fraction.
        2. Если у делителя не осталось экспоненты — экспонента делимого
           переносится в его fraction, пока тот помещается в native integer,
           затем fraction делятся нацело.
        3. Иначе оба операнда усекаются до представимых native integer,
           и выполняется обычное целочисленное деление.

        Raises:
            DivisionByZeroError: если fraction делителя равен 0
            AccuracyLossError: если strict и частное неточно
        """
        other = _require(other)
        if other.fraction == 0:
            raise DivisionByZeroError(f"Division of {self} by zero")

        a_f, a_e = self.fraction, self.exponent
        b_f, b_e = other.fraction, other.exponent

        common = min(a_e, b_e)
        a_e -= common
        b_e -= common

        if b_e == 0:
            while a_e > 0 and can_scale_up(a_f):
                a_f *= DECIMAL_BASE
                a_e -= 1
            quotient = trunc_div(a_f, b_f)
            if strict and quotient * b_f != a_f:
                raise AccuracyLossError(f"{self} / {other} is not exact")
            return _build(quotient, a_e)

        lost = False
        while not (_is_representable(a_f, a_e) and _is_representable(b_f, b_e)):
            a_f, digit = shed_digit(a_f)
            lost = lost or digit != 0
            if b_e > 0:
                b_e -= 1
            else:
                b_f, digit = shed_digit(b_f)
                lost = lost or digit != 0

        dividend = ScaledInt(a_f, a_e).to_int()
        divisor = ScaledInt(b_f, b_e).to_int()
        quotient = trunc_div(dividend, divisor)
        if strict and (lost or quotient * divisor != dividend):
            raise AccuracyLossError(f"{self} / {other} is not exact")
        return _build(quotient, 0)

    # -------------------------------------------------------------------------
    # Exponentiation
    # -------------------------------------------------------------------------

    def pow(self, exponent: Operand, strict: bool = False) -> "ScaledInt":
        """
        Возведение в степень группами по 10.

        base^(k × 10^e) = (base^(k × 10^(e-1)))^10; младший уровень —
        k умножений mul_safe. base^0 == 1.

        Args:
            exponent: Показатель (ScaledInt или int, неотрицательный)
            strict: Запретить потерю ненулевых цифр

        Raises:
            ValueError: если показатель отрицательный
            AccuracyLossError: если strict и результат неточен
        """
        exponent = _require(exponent).normalize()
        if exponent.fraction < 0:
            raise ValueError(f"exponent must be non-negative, got {exponent}")

        if exponent.exponent > 0:
            inner = self.pow(
                ScaledInt(exponent.fraction, exponent.exponent - 1), strict=strict
            )
            return _repeated_product(inner, POW_GROUP_SIZE, strict)
        if exponent.fraction > 0:
            return _repeated_product(self, exponent.fraction, strict)
        return ONE

    # -------------------------------------------------------------------------
    # Conversion
    # -------------------------------------------------------------------------

    def is_representable_as_int(self) -> bool:
        """
        Помещается ли fraction × 10^exponent в native integer.

        FRACTION_MAX делится на 10 на каждую единицу exponent; |fraction|
        должен остаться строго меньше результата.
        """
        return _is_representable(self.fraction, self.exponent)

    def to_int(self) -> int:
        """
        Раскрытие экспоненты в целое.

        Raises:
            ArithmeticOverflowError: если шаг ×10 выходит за FRACTION_MAX
        """
        result = self.fraction
        for _ in range(self.exponent):
            if result == 0:
                break
            try:
                result = checked_scale_up(result)
            except OverflowError as exc:
                raise ArithmeticOverflowError(
                    f"{self} does not fit in a {FRACTION_MAX.bit_length() + 1}-bit integer"
                ) from exc
        return result

    def to_raw_string(self) -> str:
        return format_raw(self.fraction, self.exponent)

    def to_human_string(self) -> str:
        return format_human(self.fraction, self.exponent)

    # -------------------------------------------------------------------------
    # Python protocols
    # -------------------------------------------------------------------------

    def __str__(self) -> str:
        return self.to_raw_string()

    def __repr__(self) -> str:
        return f"ScaledInt(fraction={self.fraction}, exponent={self.exponent})"

    def __bool__(self) -> bool:
        return self.fraction != 0

    def __int__(self) -> int:
        return self.to_int()

    def __abs__(self) -> "ScaledInt":
        return self.abs()

    def __neg__(self) -> "ScaledInt":
        return self.neg()

    def __pos__(self) -> "ScaledInt":
        return self

    def __add__(self, other: object) -> "ScaledInt":
        if _coerce(other) is None:
            return NotImplemented
        return self.add(other)

    def __radd__(self, other: object) -> "ScaledInt":
        coerced = _coerce(other)
        if coerced is None:
            return NotImplemented
        return coerced.add(self)

    def __sub__(self, other: object) -> "ScaledInt":
        if _coerce(other) is None:
            return NotImplemented
        return self.sub(other)

    def __rsub__(self, other: object) -> "ScaledInt":
        coerced = _coerce(other)
        if coerced is None:
            return NotImplemented
        return coerced.sub(self)

    def __mul__(self, other: object) -> "ScaledInt":
        if _coerce(other) is None:
            return NotImplemented
        return self.mul_exact(other)

    def __rmul__(self, other: object) -> "ScaledInt":
        coerced = _coerce(other)
        if coerced is None:
            return NotImplemented
        return coerced.mul_exact(self)

    def __truediv__(self, other: object) -> "ScaledInt":
        if _coerce(other) is None:
            return NotImplemented
        return self.div(other)

    def __rtruediv__(self, other: object) -> "ScaledInt":
        coerced = _coerce(other)
        if coerced is None:
            return NotImplemented
        return coerced.div(self)

    def __pow__(self, other: object, modulo: object = None) -> "ScaledInt":
        if modulo is not None or _coerce(other) is None:
            return NotImplemented
        return self.pow(other)

    def __rpow__(self, other: object) -> "ScaledInt":
        coerced = _coerce(other)
        if coerced is None:
            return NotImplemented
        return coerced.pow(self)


def _repeated_product(value: ScaledInt, times: int, strict: bool) -> ScaledInt:
    result = ONE
    for _ in range(times):
        result = result.mul_safe(value, strict=strict)
    return result


ZERO: ScaledInt = ScaledInt(0)
ONE: ScaledInt = ScaledInt(1)
