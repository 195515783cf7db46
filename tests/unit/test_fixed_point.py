"""Unit tests for fixed-point rate math."""
from __future__ import annotations

from decimal import Decimal

import pytest

from ppf.fixed_point import ONE, format_rate, invert, parse_rate


class TestInvert:
    def test_two_becomes_half(self) -> None:
        assert invert(2 * ONE) == ONE // 2

    def test_one_is_self_inverse(self) -> None:
        assert invert(ONE) == ONE

    def test_truncates_toward_zero(self) -> None:
        # 10^36 / 3 = 333...333.33 → 333...333
        assert invert(3 * ONE) == 333333333333333333

    def test_smallest_rate(self) -> None:
        assert invert(1) == ONE * ONE

    def test_zero_rejected(self) -> None:
        with pytest.raises(ValueError):
            invert(0)

    @pytest.mark.parametrize(
        "rate",
        [1, 3, 7, ONE // 3, ONE, 2 * ONE, 123456789 * ONE, 10**30, ONE * ONE],
    )
    def test_double_inversion_within_truncation_bound(self, rate: int) -> None:
        inverse = invert(rate)
        back = invert(inverse)
        # Truncating twice can only overshoot, by less than rate / inverse.
        assert 0 <= back - rate <= rate // inverse + 1


class TestFormatRate:
    def test_integer(self) -> None:
        assert format_rate(2) == 2 * ONE

    def test_decimal_string(self) -> None:
        assert format_rate("0.5") == ONE // 2

    def test_float_via_str(self) -> None:
        assert format_rate(0.1) == 10**17

    def test_truncates_extra_digits(self) -> None:
        assert format_rate("0.0000000000000000019") == 1

    def test_negative_rejected(self) -> None:
        with pytest.raises(ValueError, match="negative"):
            format_rate("-1")

    def test_garbage_rejected(self) -> None:
        with pytest.raises(ValueError):
            format_rate("two")

    def test_nan_rejected(self) -> None:
        with pytest.raises(ValueError):
            format_rate("NaN")


class TestParseRate:
    def test_exact_decimal(self) -> None:
        assert parse_rate(ONE // 2) == Decimal("0.5")

    def test_round_trip_of_decimal_string(self) -> None:
        assert parse_rate(format_rate("1234.000000000000000001")) == Decimal(
            "1234.000000000000000001"
        )
