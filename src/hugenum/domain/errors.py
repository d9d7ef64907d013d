"""
Исключения ScaledInt

Явные, восстанавливаемые ошибки арифметики. "Тихое" переполнение в
alignment, exact multiply и add/sub не детектируется и исключений не
порождает.
"""


class ScaledIntError(Exception):
    """Базовое исключение для всех ошибок ScaledInt."""

    pass


class ArithmeticOverflowError(ScaledIntError, OverflowError):
    """
    Значение не помещается в native integer.

    Возникает в to_int(), когда раскрытие экспоненты в fraction
    выходит за FRACTION_MAX.
    """

    pass


class AccuracyLossError(ScaledIntError):
    """
    Операция потеряла бы ненулевые десятичные цифры.

    Возникает только в strict-режиме mul_safe / div / pow / factorial.
    В обычном режиме цифры отбрасываются без исключения.
    """

    pass


class DivisionByZeroError(ScaledIntError, ZeroDivisionError):
    """Деление на ScaledInt с нулевым fraction."""

    pass
