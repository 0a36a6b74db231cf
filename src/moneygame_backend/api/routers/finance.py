"""Player finance endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from moneygame_backend.api.dependencies import FinanceServiceDep  # noqa: TC001
from moneygame_backend.api.models import LoanApplicationRequest, PaymentRequestBody
from moneygame_backend.finance import (
    CreditScore,
    DebtRecord,
    DebtSummary,
    LoanApplication,
    LoanApproval,
    PaymentRequest,
    PaymentResult,
    PayoffStrategyComparison,
    PlayerNotFoundError,
    PlayerState,
    PlayerWinCondition,
)
from moneygame_backend.shared import FinancialEvent

router = APIRouter(prefix="/players/{player_id}", tags=["finance"])


@router.post("/loans", response_model=LoanApproval)
def apply_for_loan(
    player_id: int, payload: LoanApplicationRequest, service: FinanceServiceDep
) -> LoanApproval:
    """Underwrite a loan; rejections are returned with ``approved=False``."""
    application = LoanApplication(player_id=player_id, **payload.model_dump())
    return service.apply_for_loan(application)


@router.post("/payments", response_model=PaymentResult)
def make_payment(
    player_id: int, payload: PaymentRequestBody, service: FinanceServiceDep
) -> PaymentResult:
    """Pay towards a debt; failures are returned with ``success=False``."""
    request = PaymentRequest(player_id=player_id, **payload.model_dump())
    return service.make_payment(request)


@router.get("/debts", response_model=list[DebtRecord])
def list_debts(player_id: int, service: FinanceServiceDep) -> list[DebtRecord]:
    """Return every debt of the player ordered by due date."""
    return service.get_player_debts(player_id)


@router.get("/debts/summary", response_model=DebtSummary)
def get_debt_summary(player_id: int, service: FinanceServiceDep) -> DebtSummary:
    summary = service.get_debt_summary(player_id)
    if summary is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Player not found"
        )
    return summary


@router.get("/credit-score", response_model=CreditScore)
def get_credit_score(player_id: int, service: FinanceServiceDep) -> CreditScore:
    return service.calculate_credit_score(player_id)


@router.get("/payoff-strategy", response_model=PayoffStrategyComparison)
def get_payoff_strategy(
    player_id: int, service: FinanceServiceDep
) -> PayoffStrategyComparison:
    return service.calculate_payoff_strategy(player_id)


@router.get("/state", response_model=PlayerState)
def get_player_state(player_id: int, service: FinanceServiceDep) -> PlayerState:
    """Return the authoritative financial snapshot of the player."""
    try:
        return service.get_player_state(player_id)
    except PlayerNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
        ) from exc


@router.get("/win-condition", response_model=PlayerWinCondition)
def get_win_condition(
    player_id: int, service: FinanceServiceDep
) -> PlayerWinCondition:
    return service.check_win_condition(player_id)


@router.get("/history", response_model=list[FinancialEvent])
def get_financial_history(
    player_id: int, service: FinanceServiceDep
) -> list[FinancialEvent]:
    """Return the player's loan and payment events in the order they happened."""
    return list(service.get_financial_history(player_id))
