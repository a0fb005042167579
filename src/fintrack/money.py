"""Decimal helpers for currency amounts stored as base-10 strings."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

ZERO = Decimal("0")
HUNDRED = Decimal("100")
CENT = Decimal("0.01")
# Upper bound for a single entered amount; keeps sums well inside the context precision.
MAX_AMOUNT = Decimal("1e15")


def to_decimal(value: object) -> Decimal:
    """Parse a stored amount into a Decimal.

    Accepts strings, ints and Decimals. Floats are routed through ``str`` so the
    shortest repr is used rather than the binary expansion. ``None`` and blank
    strings read as zero.
    """

    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        value = repr(value)
    text = str(value).strip()
    if not text:
        return ZERO
    try:
        return Decimal(text)
    except InvalidOperation as exc:
        raise ValueError(f"Not a decimal amount: {value!r}") from exc


def quantize(value: Decimal, places: Decimal = CENT) -> Decimal:
    """Round half-up to two decimal places (or ``places``)."""

    return value.quantize(places, rounding=ROUND_HALF_UP)


def format_amount(value: Decimal) -> str:
    """Render an amount as a plain two-place string, e.g. ``"1250.50"``."""

    return str(quantize(value))


def safe_ratio(numerator: Decimal, denominator: Decimal) -> Decimal:
    """Return ``numerator / denominator * 100`` or zero when the denominator is zero."""

    if denominator == 0:
        return ZERO
    return numerator / denominator * HUNDRED


def percent_change(current: Decimal, previous: Decimal) -> Decimal:
    """Percentage change from ``previous`` to ``current``; zero when ``previous`` is zero."""

    if previous == 0:
        return ZERO
    return (current - previous) / previous * HUNDRED


def as_percent(value: Decimal) -> float:
    """Convert a Decimal percentage to a 2-place float for JSON payloads."""

    return float(quantize(value))
