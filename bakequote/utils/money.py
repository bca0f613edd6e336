"""Currency helpers for Decimal amounts."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

CENT: Decimal = Decimal("0.01")
ZERO: Decimal = Decimal("0")


def to_decimal(value: Decimal | int | float | str | None) -> Decimal:
    """Convert a JSON-ish number into Decimal; floats go through str to avoid binary noise."""
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def quantize_money(value: Decimal) -> Decimal:
    """Round to currency precision."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def format_money(value: Decimal) -> str:
    return f"{quantize_money(value):.2f}"
