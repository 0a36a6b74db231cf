"""Exceptions raised by the finance engine."""


class FinanceError(Exception):
    """Base exception for the finance layer."""


class PlayerNotFoundError(FinanceError):
    """Raised when a player in session cannot be located."""

    def __init__(self, player_id: int) -> None:
        super().__init__(f"Player in session with ID {player_id} not found")
        self.player_id = player_id


class DebtNotFoundError(FinanceError):
    """Raised by stores when a debt referenced for update does not exist."""

    def __init__(self, debt_id: int) -> None:
        super().__init__(f"Debt with ID {debt_id} not found")
        self.debt_id = debt_id


class InsufficientFundsError(FinanceError):
    """Raised by stores when a decrement would drive an account negative."""


__all__ = [
    "DebtNotFoundError",
    "FinanceError",
    "InsufficientFundsError",
    "PlayerNotFoundError",
]
