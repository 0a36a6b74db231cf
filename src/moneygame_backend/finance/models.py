"""Domain models exchanged between the finance engine and its collaborators."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field, computed_field, model_validator
from pydantic.config import ConfigDict

from moneygame_backend.shared.enums import (
    AccountKind,
    CreditFactorKind,
    CreditRating,
    FactorImpact,
    LoanType,
    PaymentType,
    PayoffStrategyName,
    Priority,
    RecommendationType,
    WinType,
)
from moneygame_backend.shared.value_objects import (
    ZERO,
    Money,
    NonNegativeMoney,
    PositiveMoney,
    Rate,
)


class PlayerAccount(BaseModel):
    """Liquid balances and monthly income owned by the session collaborator."""

    model_config = ConfigDict(frozen=True)

    cash: NonNegativeMoney = ZERO
    savings: NonNegativeMoney = ZERO
    salary: Money = ZERO
    passive_income: Money = ZERO

    @property
    def monthly_income(self) -> Decimal:
        """Income used for lending decisions."""
        return self.salary + self.passive_income

    def balance_of(self, account: AccountKind) -> Decimal:
        """Return the balance held in *account*."""
        if account is AccountKind.SAVINGS:
            return self.savings
        return self.cash


class CareerProfile(BaseModel):
    """Career assigned to a player together with its recurring expenses."""

    model_config = ConfigDict(frozen=True)

    career_id: int
    name: str
    base_salary: Money = ZERO
    monthly_expenses: Money = ZERO


class AssetHolding(BaseModel):
    """Quantity of a catalog asset held by a player."""

    model_config = ConfigDict(frozen=True)

    asset_id: int
    name: str
    quantity: int = Field(..., ge=0)
    catalog_cost: Money = ZERO
    cash_flow: Money = ZERO
    session_price: Money | None = None

    @property
    def unit_price(self) -> Decimal:
        """Session market price, or the catalog cost when the session has none."""
        if self.session_price is not None:
            return self.session_price
        return self.catalog_cost

    @property
    def market_value(self) -> Decimal:
        return self.unit_price * self.quantity

    @property
    def monthly_cash_flow(self) -> Decimal:
        return self.cash_flow * self.quantity


class PlayerProfile(BaseModel):
    """Read model of a player within a game session."""

    model_config = ConfigDict(frozen=True)

    player_id: int
    session_id: int
    display_name: str
    account: PlayerAccount = Field(default_factory=PlayerAccount)
    career: CareerProfile | None = None
    goal_id: int | None = None
    goal_name: str | None = None
    assets: tuple[AssetHolding, ...] = Field(default_factory=tuple)


class NewDebt(BaseModel):
    """Terms of a debt about to be originated."""

    model_config = ConfigDict(frozen=True)

    player_id: int
    loan_type: LoanType
    original_amount: PositiveMoney
    interest_rate: Rate
    monthly_payment: NonNegativeMoney
    term_months: int = Field(..., ge=1)
    due_date: date
    created_at: datetime
    description: str = ""
    collateral_asset_id: int | None = None


class DebtRecord(BaseModel):
    """Persisted debt; doubles as credit history once paid off."""

    model_config = ConfigDict(frozen=True)

    debt_id: int
    player_id: int
    loan_type: LoanType
    original_amount: NonNegativeMoney
    current_balance: NonNegativeMoney
    interest_rate: Rate
    monthly_payment: NonNegativeMoney
    term_months: int = Field(..., ge=1)
    due_date: date
    created_at: datetime
    last_payment_date: datetime | None = None
    is_paid_off: bool = False
    description: str = ""
    collateral_asset_id: int | None = None

    @model_validator(mode="after")
    def _validate_balance(self) -> DebtRecord:
        """Keep the balance inside the original amount and aligned with the flag."""
        if self.current_balance > self.original_amount:
            msg = "Debt balance cannot exceed the original amount."
            raise ValueError(msg)
        if self.is_paid_off != (self.current_balance == 0):
            msg = "Debt must be flagged paid off exactly when its balance is zero."
            raise ValueError(msg)
        return self

    def is_overdue(self, today: date) -> bool:
        """Return whether the next installment is past due on *today*."""
        return not self.is_paid_off and self.due_date < today

    def days_past_due(self, today: date) -> int | None:
        if not self.is_overdue(today):
            return None
        return (today - self.due_date).days


class LoanApplication(BaseModel):
    """Transient request for a new loan."""

    model_config = ConfigDict(frozen=True)

    player_id: int
    loan_type: LoanType
    amount: PositiveMoney
    purpose: str = ""
    collateral_asset_id: int | None = None
    requested_term_months: int | None = Field(default=None, gt=0)


class LoanTerms(BaseModel):
    """Amortized terms generated for a loan amount."""

    model_config = ConfigDict(frozen=True)

    interest_rate: Rate
    term_months: int = Field(..., ge=1)
    monthly_payment: Money
    total_payments: Money
    total_interest: Money
    due_date: date


class ApprovedLoan(BaseModel):
    """Terms returned to the player once a loan is booked."""

    model_config = ConfigDict(frozen=True)

    loan_id: int
    amount: Money
    interest_rate: Rate
    term_months: int
    monthly_payment: Money
    total_payments: Money
    total_interest: Money
    due_date: date


class LoanApproval(BaseModel):
    """Outcome of a loan application."""

    model_config = ConfigDict(frozen=True)

    approved: bool
    message: str
    terms: ApprovedLoan | None = None
    reason: str | None = None


class PaymentRequest(BaseModel):
    """Request to pay *amount* towards a specific debt."""

    model_config = ConfigDict(frozen=True)

    player_id: int
    debt_id: int
    amount: PositiveMoney
    payment_type: PaymentType = PaymentType.MINIMUM
    from_account: AccountKind = AccountKind.CASH


class PaymentBreakdown(BaseModel):
    """Principal and interest split for a single payment event."""

    model_config = ConfigDict(frozen=True)

    principal: Money
    interest: Money
    early_payoff_savings: Money | None = None
    is_full_payoff: bool = False


class PaymentReceipt(BaseModel):
    """Balances after a payment has been committed."""

    model_config = ConfigDict(frozen=True)

    principal_paid: Money
    interest_paid: Money
    remaining_balance: NonNegativeMoney
    new_monthly_payment: Money
    new_account_balance: Money
    is_paid_off: bool
    early_payoff_savings: Money | None = None


class PaymentResult(BaseModel):
    """Outcome of a payment request."""

    model_config = ConfigDict(frozen=True)

    success: bool
    message: str
    payment: PaymentReceipt | None = None
    error: str | None = None


class CreditFactor(BaseModel):
    """One weighted category contributing to a credit score."""

    model_config = ConfigDict(frozen=True)

    kind: CreditFactorKind
    factor: str
    impact: FactorImpact
    weight: int = Field(..., ge=0, le=100)
    description: str
    adjustment: Decimal = ZERO


class CreditScore(BaseModel):
    """Bounded credit score with its explanation."""

    model_config = ConfigDict(frozen=True)

    score: int = Field(..., ge=300, le=850)
    rating: CreditRating
    factors: tuple[CreditFactor, ...] = Field(default_factory=tuple)
    improvement_tips: tuple[str, ...] = Field(..., min_length=1)


class DebtTypeBreakdown(BaseModel):
    """Aggregates for all active debts of one loan type."""

    model_config = ConfigDict(frozen=True)

    loan_type: LoanType
    count: int = Field(..., ge=0)
    total_balance: Money
    total_monthly_payment: Money
    average_rate: Rate
    allocation: Decimal


class UpcomingPayment(BaseModel):
    """Next installment due on an active debt."""

    model_config = ConfigDict(frozen=True)

    debt_id: int
    debt_name: str
    due_date: date
    minimum_payment: Money
    current_balance: Money
    is_overdue: bool
    days_past_due: int | None = None


class DebtRecommendation(BaseModel):
    """Actionable advice derived from a player's debt portfolio."""

    model_config = ConfigDict(frozen=True)

    type: RecommendationType
    title: str
    description: str
    priority: Priority
    potential_savings: Money | None = None


class DebtSummary(BaseModel):
    """Portfolio view over a player's active debts."""

    model_config = ConfigDict(frozen=True)

    total_debt: Money = ZERO
    total_monthly_payments: Money = ZERO
    average_interest_rate: Rate = ZERO
    debt_to_income_ratio: Decimal = ZERO
    credit_utilization: Decimal = ZERO
    payoff_timeline_months: int = 0
    total_interest_remaining: Money = ZERO
    debts_by_type: tuple[DebtTypeBreakdown, ...] = Field(default_factory=tuple)
    upcoming_payments: tuple[UpcomingPayment, ...] = Field(default_factory=tuple)
    recommendations: tuple[DebtRecommendation, ...] = Field(default_factory=tuple)


class PayoffOrderEntry(BaseModel):
    """Debt as positioned in a payoff ordering."""

    model_config = ConfigDict(frozen=True)

    debt_id: int
    loan_type: LoanType
    balance: Money
    monthly_payment: Money
    interest_rate: Rate


class StrategyEstimate(BaseModel):
    """Estimated time and interest to clear debts in a given order."""

    model_config = ConfigDict(frozen=True)

    order: tuple[PayoffOrderEntry, ...] = Field(default_factory=tuple)
    total_months: int = Field(default=0, ge=0)
    total_interest: Money = ZERO


class PayoffStrategyComparison(BaseModel):
    """Snowball and avalanche estimates with a recommendation."""

    model_config = ConfigDict(frozen=True)

    snowball: StrategyEstimate = Field(default_factory=StrategyEstimate)
    avalanche: StrategyEstimate = Field(default_factory=StrategyEstimate)
    recommended: PayoffStrategyName
    explanation: str

    @computed_field  # type: ignore[prop-decorator]
    @property
    def interest_savings(self) -> Decimal:
        """Interest avoided by choosing avalanche over snowball."""
        return self.snowball.total_interest - self.avalanche.total_interest


class PlayerState(BaseModel):
    """Authoritative financial snapshot consumed by the rest of the game."""

    model_config = ConfigDict(frozen=True)

    player_id: int
    session_id: int
    display_name: str
    career_id: int | None = None
    career_name: str | None = None
    goal_id: int | None = None
    goal_name: str | None = None
    cash: Money
    savings: Money
    salary: Money
    passive_income: Money
    net_worth: Money
    monthly_cash_flow: Money
    total_asset_value: Money
    total_debt_balance: Money


class WinDetails(BaseModel):
    """Targets and current values behind a win evaluation."""

    model_config = ConfigDict(frozen=True)

    net_worth_target: Money | None = None
    cash_flow_target: Money | None = None
    current_net_worth: Money | None = None
    current_cash_flow: Money | None = None
    goal_name: str | None = None


class PlayerWinCondition(BaseModel):
    """Result of checking whether a player has won."""

    model_config = ConfigDict(frozen=True)

    has_won: bool
    win_type: WinType | None = None
    win_timestamp: datetime | None = None
    details: WinDetails | None = None


__all__ = [
    "ApprovedLoan",
    "AssetHolding",
    "CareerProfile",
    "CreditFactor",
    "CreditScore",
    "DebtRecommendation",
    "DebtRecord",
    "DebtSummary",
    "DebtTypeBreakdown",
    "LoanApplication",
    "LoanApproval",
    "LoanTerms",
    "NewDebt",
    "PaymentBreakdown",
    "PaymentReceipt",
    "PaymentRequest",
    "PaymentResult",
    "PayoffOrderEntry",
    "PayoffStrategyComparison",
    "PlayerAccount",
    "PlayerProfile",
    "PlayerState",
    "PlayerWinCondition",
    "StrategyEstimate",
    "UpcomingPayment",
    "WinDetails",
]
