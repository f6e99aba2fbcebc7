"""Ledger stores for the online wallet."""

from __future__ import annotations

import threading
from typing import Protocol

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import LedgerConflictError
from app.models import OnlineWalletEntry


class OnlineWalletRepository(Protocol):
    def get_last_entry(self) -> OnlineWalletEntry | None:
        ...

    def append_entry(self, entry: OnlineWalletEntry) -> None:
        ...


class SqlAlchemyOnlineWalletRepository:
    """Relational ledger. The unique ``sequence`` index rejects concurrent appends."""

    def __init__(self, db: Session):
        self.db = db

    def get_last_entry(self) -> OnlineWalletEntry | None:
        return (
            self.db.query(OnlineWalletEntry)
            .order_by(OnlineWalletEntry.sequence.desc())
            .first()
        )

    def append_entry(self, entry: OnlineWalletEntry) -> None:
        self.db.add(entry)
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise LedgerConflictError(
                f"Ledger position {entry.sequence} was taken by another writer"
            ) from exc


class InMemoryOnlineWalletRepository:
    """Process-local ledger, used for development and tests."""

    def __init__(self) -> None:
        self._entries: list[OnlineWalletEntry] = []
        self._lock = threading.Lock()

    @property
    def entries(self) -> tuple[OnlineWalletEntry, ...]:
        with self._lock:
            return tuple(self._entries)

    def get_last_entry(self) -> OnlineWalletEntry | None:
        with self._lock:
            return self._entries[-1] if self._entries else None

    def append_entry(self, entry: OnlineWalletEntry) -> None:
        with self._lock:
            expected = self._entries[-1].sequence + 1 if self._entries else 1
            if entry.sequence != expected:
                raise LedgerConflictError(
                    f"Ledger position {entry.sequence} is stale, next position is {expected}"
                )
            self._entries.append(entry)
