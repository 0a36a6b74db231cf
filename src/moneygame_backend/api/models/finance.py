"""Pydantic models for finance endpoints."""

from __future__ import annotations

from pydantic import BaseModel, Field

from moneygame_backend.shared import AccountKind, LoanType, PaymentType, PositiveMoney


class LoanApplicationRequest(BaseModel):
    """Payload for applying for a new loan."""

    loan_type: LoanType
    amount: PositiveMoney
    purpose: str = Field(default="", max_length=255)
    collateral_asset_id: int | None = None
    requested_term_months: int | None = Field(default=None, gt=0, le=360)


class PaymentRequestBody(BaseModel):
    """Payload for paying towards one of the player's debts."""

    debt_id: int
    amount: PositiveMoney
    payment_type: PaymentType = PaymentType.MINIMUM
    from_account: AccountKind = AccountKind.CASH


__all__ = ["LoanApplicationRequest", "PaymentRequestBody"]
