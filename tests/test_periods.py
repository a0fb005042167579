from __future__ import annotations

from datetime import date

import pytest

from fintrack.services.periods import (
    ALL_TIME,
    LAST_MONTH,
    THIS_MONTH,
    THIS_YEAR,
    budget_period_bounds,
    filter_by_category,
    filter_by_period,
    month_bounds,
    period_bounds,
    previous_month,
    shift_month,
    within,
)

from conftest import make_txn


def test_previous_month_wraps_year():
    assert previous_month(date(2024, 1, 31)) == (2023, 12)
    assert previous_month(date(2024, 3, 1)) == (2024, 2)


def test_shift_month_moves_across_years():
    assert shift_month(2024, 1, -13) == (2022, 12)
    assert shift_month(2024, 11, 3) == (2025, 2)


def test_month_bounds_knows_leap_years():
    assert month_bounds(2024, 2) == (date(2024, 2, 1), date(2024, 2, 29))
    assert month_bounds(2023, 2) == (date(2023, 2, 1), date(2023, 2, 28))


@pytest.mark.parametrize(
    "period,expected",
    [
        (THIS_MONTH, (date(2024, 3, 1), date(2024, 3, 31))),
        (LAST_MONTH, (date(2024, 2, 1), date(2024, 2, 29))),
        (THIS_YEAR, (date(2024, 1, 1), date(2024, 12, 31))),
        (ALL_TIME, (None, None)),
    ],
)
def test_period_bounds(period, expected):
    assert period_bounds(period, date(2024, 3, 14)) == expected


def test_period_bounds_rejects_unknown_period():
    with pytest.raises(ValueError):
        period_bounds("lastWeek", date(2024, 3, 14))


def test_budget_period_bounds_weeks_start_monday():
    # 2024-03-14 is a Thursday
    assert budget_period_bounds("weekly", date(2024, 3, 14)) == (
        date(2024, 3, 11),
        date(2024, 3, 17),
    )
    assert budget_period_bounds("weekly", date(2024, 3, 17)) == (
        date(2024, 3, 11),
        date(2024, 3, 17),
    )
    assert budget_period_bounds("yearly", date(2024, 3, 14)) == (
        date(2024, 1, 1),
        date(2024, 12, 31),
    )


def test_within_is_inclusive_and_open_ended():
    assert within(date(2024, 1, 1), date(2024, 1, 1), date(2024, 1, 31))
    assert within(date(2024, 1, 31), date(2024, 1, 1), date(2024, 1, 31))
    assert not within(date(2024, 2, 1), date(2024, 1, 1), date(2024, 1, 31))
    assert within(date(1999, 1, 1), None, None)


def test_last_month_filter_keeps_only_previous_month():
    today = date(2024, 1, 31)
    txns = [
        make_txn("1", on=date(2023, 12, 1)),
        make_txn("2", on=date(2023, 12, 31)),
        make_txn("3", on=date(2024, 1, 1)),
        make_txn("4", on=date(2023, 11, 30)),
    ]

    kept = filter_by_period(txns, LAST_MONTH, today)

    assert [t.amount for t in kept] == ["1", "2"]


def test_category_filter_accepts_all_or_an_id():
    txns = [make_txn("1", category_id=1), make_txn("2", category_id=2), make_txn("3")]

    assert len(filter_by_category(txns, "all")) == 3
    assert [t.amount for t in filter_by_category(txns, 2)] == ["2"]
    assert [t.amount for t in filter_by_category(txns, "1")] == ["1"]
