"""Shared enumerations used across the backend."""

from enum import StrEnum


class LoanType(StrEnum):
    """Closed set of loan products a player may apply for."""

    PERSONAL = "personal"
    BUSINESS = "business"
    INVESTMENT = "investment"
    EMERGENCY = "emergency"


class AccountKind(StrEnum):
    """Liquid player accounts that can fund or receive money."""

    CASH = "cash"
    SAVINGS = "savings"


class PaymentType(StrEnum):
    """Intent declared by the player when paying towards a debt."""

    MINIMUM = "minimum"
    EXTRA = "extra"
    FULL = "full"


class CreditRating(StrEnum):
    """Rating tiers derived from the numeric credit score."""

    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


class FactorImpact(StrEnum):
    """Direction in which a credit factor moves the score."""

    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class CreditFactorKind(StrEnum):
    """The five weighted categories that make up a credit score."""

    PAYMENT_HISTORY = "payment_history"
    UTILIZATION = "utilization"
    HISTORY_LENGTH = "history_length"
    CREDIT_MIX = "credit_mix"
    NEW_CREDIT = "new_credit"


class RecommendationType(StrEnum):
    """Kinds of debt recommendations surfaced to players."""

    CONSOLIDATION = "consolidation"
    PAYOFF_STRATEGY = "payoff_strategy"
    EMERGENCY_FUND = "emergency_fund"
    INCOME_BOOST = "income_boost"


class Priority(StrEnum):
    """Urgency attached to a recommendation."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class PayoffStrategyName(StrEnum):
    """Debt payoff orderings compared by the strategy simulator."""

    SNOWBALL = "snowball"
    AVALANCHE = "avalanche"


class FinancialEventType(StrEnum):
    """Credit-history events appended to the financial event log."""

    LOAN_APPROVED = "loan_approved"
    PAYMENT_MADE = "payment_made"
    DEBT_PAID_OFF = "debt_paid_off"


class WinType(StrEnum):
    """Ways in which a player can win the game."""

    FINANCIAL_FREEDOM = "financial_freedom"
    GOAL_ACHIEVEMENT = "goal_achievement"
