"""Business parameters for lending, scoring and win evaluation."""

from __future__ import annotations

from collections.abc import Mapping  # noqa: TC003
from decimal import Decimal
from functools import cache

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict

from moneygame_backend.shared.enums import LoanType


class FinanceDefaults(BaseSettings):
    """Load default finance parameters from the environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="MONEYGAME_FINANCE_",
        extra="ignore",
    )

    minimum_monthly_income: Decimal = Field(default=Decimal(10_000), ge=0)
    max_debt_to_income: Decimal = Field(default=Decimal("0.40"), ge=0)
    max_loan_income_months: int = Field(default=36, ge=1)
    default_term_months: int = Field(default=60, ge=1)
    personal_rate: Decimal = Field(default=Decimal("12.0"), ge=0)
    business_rate: Decimal = Field(default=Decimal("8.5"), ge=0)
    investment_rate: Decimal = Field(default=Decimal("10.0"), ge=0)
    emergency_rate: Decimal = Field(default=Decimal("15.0"), ge=0)
    max_projection_months: int = Field(default=360, ge=1)
    net_worth_target: Decimal = Field(default=Decimal(1_000_000), ge=0)
    cash_flow_target: Decimal = Field(default=Decimal(20_000), ge=0)
    summary_dti_alert_pct: Decimal = Field(default=Decimal(40), ge=0)
    high_interest_rate: Decimal = Field(default=Decimal(12), ge=0)
    consolidation_savings_estimate: Decimal = Field(default=Decimal(5_000), ge=0)
    emergency_fund_months: int = Field(default=3, ge=0)
    snowball_savings_threshold: Decimal = Field(default=Decimal(10_000), ge=0)
    snowball_min_debt_count: int = Field(default=3, ge=0)
    new_credit_window_months: int = Field(default=6, ge=1)
    new_credit_max_recent: int = Field(default=2, ge=0)

    def to_config(self) -> FinanceConfiguration:
        """Convert defaults into an immutable configuration object."""
        return FinanceConfiguration(
            minimum_monthly_income=self.minimum_monthly_income,
            max_debt_to_income=self.max_debt_to_income,
            max_loan_income_months=self.max_loan_income_months,
            default_term_months=self.default_term_months,
            loan_rates={
                LoanType.PERSONAL: self.personal_rate,
                LoanType.BUSINESS: self.business_rate,
                LoanType.INVESTMENT: self.investment_rate,
                LoanType.EMERGENCY: self.emergency_rate,
            },
            max_projection_months=self.max_projection_months,
            net_worth_target=self.net_worth_target,
            cash_flow_target=self.cash_flow_target,
            summary_dti_alert_pct=self.summary_dti_alert_pct,
            high_interest_rate=self.high_interest_rate,
            consolidation_savings_estimate=self.consolidation_savings_estimate,
            emergency_fund_months=self.emergency_fund_months,
            snowball_savings_threshold=self.snowball_savings_threshold,
            snowball_min_debt_count=self.snowball_min_debt_count,
            new_credit_window_months=self.new_credit_window_months,
            new_credit_max_recent=self.new_credit_max_recent,
        )


def _default_loan_rates() -> dict[LoanType, Decimal]:
    return {
        LoanType.PERSONAL: Decimal("12.0"),
        LoanType.BUSINESS: Decimal("8.5"),
        LoanType.INVESTMENT: Decimal("10.0"),
        LoanType.EMERGENCY: Decimal("15.0"),
    }


class FinanceConfiguration(BaseModel):
    """Immutable representation of the finance rules for a game."""

    model_config = ConfigDict(frozen=True)

    minimum_monthly_income: Decimal = Field(default=Decimal(10_000), ge=0)
    max_debt_to_income: Decimal = Field(default=Decimal("0.40"), ge=0)
    max_loan_income_months: int = Field(default=36, ge=1)
    default_term_months: int = Field(default=60, ge=1)
    loan_rates: Mapping[LoanType, Decimal] = Field(default_factory=_default_loan_rates)
    max_projection_months: int = Field(default=360, ge=1)
    net_worth_target: Decimal = Field(default=Decimal(1_000_000), ge=0)
    cash_flow_target: Decimal = Field(default=Decimal(20_000), ge=0)
    summary_dti_alert_pct: Decimal = Field(default=Decimal(40), ge=0)
    high_interest_rate: Decimal = Field(default=Decimal(12), ge=0)
    consolidation_savings_estimate: Decimal = Field(default=Decimal(5_000), ge=0)
    emergency_fund_months: int = Field(default=3, ge=0)
    snowball_savings_threshold: Decimal = Field(default=Decimal(10_000), ge=0)
    snowball_min_debt_count: int = Field(default=3, ge=0)
    new_credit_window_months: int = Field(default=6, ge=1)
    new_credit_max_recent: int = Field(default=2, ge=0)

    def rate_for(self, loan_type: LoanType) -> Decimal:
        """Return the annual rate for *loan_type*, falling back to the personal rate."""
        fallback = self.loan_rates.get(LoanType.PERSONAL, Decimal("12.0"))
        return self.loan_rates.get(loan_type, fallback)


@cache
def get_default_finance_configuration() -> FinanceConfiguration:
    """Return the cached default finance configuration."""
    return FinanceDefaults().to_config()


__all__ = [
    "FinanceConfiguration",
    "FinanceDefaults",
    "get_default_finance_configuration",
]
