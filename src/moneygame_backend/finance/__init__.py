"""Debt lifecycle and player financial state engine."""

from moneygame_backend.finance.amortization import (
    add_months,
    first_day_of_next_month,
    loan_terms,
    monthly_payment,
    payoff_timeline_months,
    remaining_interest,
)
from moneygame_backend.finance.configuration import (
    FinanceConfiguration,
    FinanceDefaults,
    get_default_finance_configuration,
)
from moneygame_backend.finance.credit_scoring import CreditScoringEngine
from moneygame_backend.finance.errors import (
    DebtNotFoundError,
    FinanceError,
    InsufficientFundsError,
    PlayerNotFoundError,
)
from moneygame_backend.finance.models import (
    ApprovedLoan,
    AssetHolding,
    CareerProfile,
    CreditFactor,
    CreditScore,
    DebtRecommendation,
    DebtRecord,
    DebtSummary,
    DebtTypeBreakdown,
    LoanApplication,
    LoanApproval,
    LoanTerms,
    NewDebt,
    PaymentBreakdown,
    PaymentReceipt,
    PaymentRequest,
    PaymentResult,
    PayoffOrderEntry,
    PayoffStrategyComparison,
    PlayerAccount,
    PlayerProfile,
    PlayerState,
    PlayerWinCondition,
    StrategyEstimate,
    UpcomingPayment,
    WinDetails,
)
from moneygame_backend.finance.payments import PaymentProcessor
from moneygame_backend.finance.payoff import (
    AmortizedPayoffEstimator,
    PayoffEstimator,
    PayoffStrategySimulator,
    QuickPayoffEstimator,
)
from moneygame_backend.finance.player_state import PlayerFinancialStateCalculator
from moneygame_backend.finance.portfolio import DebtPortfolioAnalyzer
from moneygame_backend.finance.ports import (
    DebtStore,
    FinanceRepositories,
    FinanceUnitOfWork,
    FinancialEventLog,
    InMemoryFinanceStore,
    InMemoryFinancialEventLog,
    NullFinancialEventLog,
    PlayerStore,
)
from moneygame_backend.finance.service import FinanceService
from moneygame_backend.finance.underwriting import LoanUnderwriter

__all__ = [
    "AmortizedPayoffEstimator",
    "ApprovedLoan",
    "AssetHolding",
    "CareerProfile",
    "CreditFactor",
    "CreditScore",
    "CreditScoringEngine",
    "DebtNotFoundError",
    "DebtPortfolioAnalyzer",
    "DebtRecommendation",
    "DebtRecord",
    "DebtStore",
    "DebtSummary",
    "DebtTypeBreakdown",
    "FinanceConfiguration",
    "FinanceDefaults",
    "FinanceError",
    "FinanceRepositories",
    "FinanceService",
    "FinanceUnitOfWork",
    "FinancialEventLog",
    "InMemoryFinanceStore",
    "InMemoryFinancialEventLog",
    "InsufficientFundsError",
    "LoanApplication",
    "LoanApproval",
    "LoanTerms",
    "LoanUnderwriter",
    "NewDebt",
    "NullFinancialEventLog",
    "PaymentBreakdown",
    "PaymentProcessor",
    "PaymentReceipt",
    "PaymentRequest",
    "PaymentResult",
    "PayoffEstimator",
    "PayoffOrderEntry",
    "PayoffStrategyComparison",
    "PayoffStrategySimulator",
    "PlayerAccount",
    "PlayerFinancialStateCalculator",
    "PlayerNotFoundError",
    "PlayerProfile",
    "PlayerState",
    "PlayerStore",
    "PlayerWinCondition",
    "QuickPayoffEstimator",
    "StrategyEstimate",
    "UpcomingPayment",
    "WinDetails",
    "add_months",
    "first_day_of_next_month",
    "get_default_finance_configuration",
    "loan_terms",
    "monthly_payment",
    "payoff_timeline_months",
    "remaining_interest",
]
