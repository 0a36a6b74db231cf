"""Models used for API request and response payloads."""

from moneygame_backend.api.models.finance import (
    LoanApplicationRequest,
    PaymentRequestBody,
)

__all__ = ["LoanApplicationRequest", "PaymentRequestBody"]
