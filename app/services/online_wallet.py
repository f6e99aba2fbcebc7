import logging
import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Callable

from app.core.exceptions import InsufficientBalanceError, LedgerConflictError
from app.models import Balance, OnlineWalletEntry
from app.repositories.online_wallet import OnlineWalletRepository


logger = logging.getLogger(__name__)


def _as_decimal(value) -> Decimal:
    if value is None:
        raise TypeError("amount is required")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class OnlineWalletService:
    """Derives the balance from the latest ledger entry and appends deposits/withdrawals.

    Holds no state between calls. Each operation reads the last entry and appends at most
    one new entry claiming the next ledger position; if a store reports that position as
    taken, the whole read-validate-append step is repeated up to ``max_append_attempts``.
    """

    def __init__(
        self,
        repository: OnlineWalletRepository,
        *,
        max_append_attempts: int = 3,
        clock: Callable[[], datetime] = _utcnow,
    ):
        if max_append_attempts < 1:
            raise ValueError("max_append_attempts must be at least 1")
        self.repository = repository
        self.max_append_attempts = max_append_attempts
        self.clock = clock

    def _read_last(self) -> tuple[OnlineWalletEntry | None, Decimal]:
        entry = self.repository.get_last_entry()
        if entry is None:
            return None, Decimal("0")
        return entry, _as_decimal(entry.balance_before) + _as_decimal(entry.amount)

    def get_balance(self) -> Balance:
        _, amount = self._read_last()
        return Balance(amount=amount)

    def deposit(self, amount) -> Balance:
        # Sign is not checked here; callers validate amounts before they reach the ledger.
        entry_amount = _as_decimal(amount)
        return self._append(entry_amount, kind="deposit")

    def withdraw(self, amount) -> Balance:
        requested = _as_decimal(amount)
        return self._append(-requested, kind="withdrawal", requested=requested)

    def _append(self, entry_amount: Decimal, *, kind: str, requested: Decimal | None = None) -> Balance:
        attempt = 0
        while True:
            attempt += 1
            last, current = self._read_last()

            if requested is not None and requested > current:
                logger.warning("Rejected %s of %s: balance is %s", kind, requested, current)
                raise InsufficientBalanceError(requested=requested, available=current)

            entry_id = str(uuid.uuid4())
            entry = OnlineWalletEntry(
                id=entry_id,
                sequence=last.sequence + 1 if last is not None else 1,
                amount=entry_amount,
                balance_before=current,
                event_time=self.clock(),
            )
            try:
                self.repository.append_entry(entry)
            except LedgerConflictError:
                if attempt >= self.max_append_attempts:
                    logger.warning("Giving up on %s after %s conflicting attempts", kind, attempt)
                    raise
                logger.warning(
                    "Ledger moved during %s, retrying (%s/%s)",
                    kind,
                    attempt,
                    self.max_append_attempts - 1,
                )
                continue

            new_balance = current + entry_amount
            logger.info(
                "Recorded %s entry %s: amount=%s balance_before=%s balance=%s",
                kind,
                entry_id,
                entry_amount,
                current,
                new_balance,
            )
            return Balance(amount=new_balance)
