from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class Balance:
    """Current wallet value, always derived from the ledger and never stored."""

    amount: Decimal
