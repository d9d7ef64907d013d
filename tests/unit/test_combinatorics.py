"""
Тесты для Combinatorics — факториалы и таблицы степеней

Проверяемые инварианты:
1. factorial(0) == 1, точные значения пока помещаются в int64
2. Большие факториалы близки к точным (mul_safe теряет только младшие цифры)
3. strict-режим сообщает о первой потере точности
"""

import math

import pytest

from src.hugenum.domain import AccuracyLossError, ScaledInt
from src.hugenum.math.combinatorics import factorial, factorial_table, power_table


class TestFactorial:
    """Тесты factorial"""

    def test_known_values(self):
        assert factorial(0) == 1
        assert factorial(1) == 1
        assert factorial(5) == 120
        assert factorial(10) == 3628800

    def test_result_normalized(self):
        result = factorial(10)
        assert (result.fraction, result.exponent) == (36288, 2)

    def test_exact_up_to_20(self):
        assert factorial(20).to_int() == math.factorial(20)

    def test_exact_while_stripped_fraction_fits(self):
        """23! = 2585201673888497664 × 10^4 ещё точен"""
        result = factorial(23)
        assert (result.fraction, result.exponent) == (2585201673888497664, 4)

    @pytest.mark.parametrize("n", [21, 25, 50, 100])
    def test_large_values_approximate(self, n):
        result = factorial(n)
        exact = math.factorial(n)
        approx = result.fraction * 10**result.exponent
        assert approx <= exact
        assert (exact - approx) / exact < 1e-12

    def test_negative_rejected(self):
        with pytest.raises(ValueError, match="n must be non-negative"):
            factorial(-1)

    def test_strict(self):
        assert factorial(23, strict=True) == ScaledInt(2585201673888497664, 4)
        with pytest.raises(AccuracyLossError):
            factorial(24, strict=True)


class TestTables:
    """Тесты factorial_table и power_table"""

    def test_factorial_table(self):
        table = factorial_table(5)
        assert [n for n, _ in table] == [0, 1, 2, 3, 4, 5]
        assert [value for _, value in table] == [1, 1, 2, 6, 24, 120]

    def test_factorial_table_matches_factorial(self):
        for n, value in factorial_table(30):
            assert value == factorial(n)

    def test_power_table(self):
        table = power_table(2, 10)
        assert len(table) == 11
        assert table[0] == (0, ScaledInt(1))
        assert table[10][1] == 1024

    def test_power_table_scaled_base(self):
        assert power_table(ScaledInt(3), 4)[4][1] == 81
        assert power_table(ScaledInt(1, 3), 3)[3][1] == ScaledInt(1, 9)

    def test_power_table_matches_pow_for_small_exponents(self):
        for n, value in power_table(3, 12):
            assert value == ScaledInt(3).pow(n)

    def test_negative_upto_rejected(self):
        with pytest.raises(ValueError):
            power_table(2, -1)
        with pytest.raises(ValueError):
            factorial_table(-1)
