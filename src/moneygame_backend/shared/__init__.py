"""Shared utilities, shared models and cross-cutting helpers for the backend."""

from moneygame_backend.shared.enums import (
    AccountKind,
    CreditFactorKind,
    CreditRating,
    FactorImpact,
    FinancialEventType,
    LoanType,
    PaymentType,
    PayoffStrategyName,
    Priority,
    RecommendationType,
    WinType,
)
from moneygame_backend.shared.events import FinancialEvent
from moneygame_backend.shared.observability import setup_logging
from moneygame_backend.shared.value_objects import (
    ZERO,
    Money,
    NonNegativeMoney,
    PositiveMoney,
    Rate,
    as_decimal,
    monthly_rate,
    quantize_money,
    quantize_rate,
)

__all__ = [
    "ZERO",
    "AccountKind",
    "CreditFactorKind",
    "CreditRating",
    "FactorImpact",
    "FinancialEvent",
    "FinancialEventType",
    "LoanType",
    "Money",
    "NonNegativeMoney",
    "PaymentType",
    "PayoffStrategyName",
    "PositiveMoney",
    "Priority",
    "Rate",
    "RecommendationType",
    "WinType",
    "as_decimal",
    "monthly_rate",
    "quantize_money",
    "quantize_rate",
    "setup_logging",
]
