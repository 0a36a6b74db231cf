"""Decimal helpers and annotated value types shared across the domain layer."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Annotated

from pydantic import AfterValidator, Field

_CURRENCY_QUANTIZE = Decimal("0.01")
_RATE_QUANTIZE = Decimal("0.0001")

ZERO = Decimal(0)


def as_decimal(value: Decimal | int | float | str) -> Decimal:
    """Convert *value* to :class:`Decimal` without binary floating point drift."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def quantize_money(value: Decimal | int | float | str) -> Decimal:
    """Round *value* to whole cents using half-up rounding."""
    return as_decimal(value).quantize(_CURRENCY_QUANTIZE, rounding=ROUND_HALF_UP)


def quantize_rate(value: Decimal | int | float | str) -> Decimal:
    """Round a percentage or ratio to four decimal places."""
    return as_decimal(value).quantize(_RATE_QUANTIZE, rounding=ROUND_HALF_UP)


def monthly_rate(annual_rate_pct: Decimal) -> Decimal:
    """Return the periodic rate for an annual percentage rate."""
    return as_decimal(annual_rate_pct) / Decimal(100) / Decimal(12)


def _require_positive_cents(value: Decimal) -> Decimal:
    """Reject amounts that round to zero cents."""
    if value <= 0:
        msg = "Amount must be at least 0.01 after rounding to cents."
        raise ValueError(msg)
    return value


Money = Annotated[Decimal, AfterValidator(quantize_money)]
"""Monetary amount stored with cent precision."""

NonNegativeMoney = Annotated[Decimal, Field(ge=0), AfterValidator(quantize_money)]
"""Monetary amount that can never drop below zero."""

PositiveMoney = Annotated[
    Decimal,
    Field(gt=0),
    AfterValidator(quantize_money),
    AfterValidator(_require_positive_cents),
]
"""Monetary amount that must be strictly positive."""

Rate = Annotated[Decimal, Field(ge=0), AfterValidator(quantize_rate)]
"""Annual interest rate expressed in percent."""


__all__ = [
    "ZERO",
    "Money",
    "NonNegativeMoney",
    "PositiveMoney",
    "Rate",
    "as_decimal",
    "monthly_rate",
    "quantize_money",
    "quantize_rate",
]
