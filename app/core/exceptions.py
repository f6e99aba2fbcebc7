"""Wallet domain specific exceptions."""

from decimal import Decimal


class WalletError(Exception):
    """Base class for wallet domain errors."""


class InsufficientBalanceError(WalletError):
    """Raised when a withdrawal exceeds the current balance."""

    def __init__(self, requested: Decimal, available: Decimal):
        self.requested = requested
        self.available = available
        super().__init__(f"Insufficient balance: requested {requested}, available {available}")


class LedgerConflictError(WalletError):
    """Raised by a ledger store when another entry was appended first."""
