from __future__ import annotations

from decimal import Decimal

import pytest

from fintrack.money import (
    ZERO,
    as_percent,
    format_amount,
    percent_change,
    quantize,
    safe_ratio,
    to_decimal,
)


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("12.50", Decimal("12.50")),
        (" 7 ", Decimal("7")),
        (3, Decimal("3")),
        (0.1, Decimal("0.1")),
        (None, ZERO),
        ("", ZERO),
    ],
)
def test_to_decimal_parses_stored_amounts(raw, expected):
    assert to_decimal(raw) == expected


def test_to_decimal_rejects_garbage():
    with pytest.raises(ValueError):
        to_decimal("twelve")


def test_decimal_sums_avoid_binary_float_drift():
    total = sum((to_decimal(v) for v in ("0.10", "0.20")), ZERO)
    assert total == Decimal("0.30")
    assert format_amount(total) == "0.30"


def test_quantize_rounds_half_up():
    assert quantize(Decimal("2.345")) == Decimal("2.35")
    assert quantize(Decimal("-2.345")) == Decimal("-2.35")
    assert format_amount(Decimal("1250.5")) == "1250.50"


def test_safe_ratio_and_percent_change_handle_zero_denominators():
    assert safe_ratio(Decimal("50"), ZERO) == ZERO
    assert safe_ratio(Decimal("450"), Decimal("400")) == Decimal("112.5")
    assert percent_change(Decimal("120"), ZERO) == ZERO
    assert percent_change(Decimal("150"), Decimal("100")) == Decimal("50")
    assert percent_change(Decimal("50"), Decimal("100")) == Decimal("-50")


def test_as_percent_renders_two_place_float():
    assert as_percent(Decimal("33.33333")) == 33.33
    assert as_percent(Decimal("66.666")) == 66.67
