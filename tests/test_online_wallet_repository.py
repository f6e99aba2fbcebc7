from contextlib import contextmanager
from datetime import datetime, timezone
from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import Base
from app.core.exceptions import InsufficientBalanceError, LedgerConflictError
from app.models import OnlineWalletEntry
from app.repositories.online_wallet import (
    InMemoryOnlineWalletRepository,
    SqlAlchemyOnlineWalletRepository,
)
from app.services.online_wallet import OnlineWalletService


@contextmanager
def _sqlite_session():
    engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=engine)
    db = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()


def _entry(sequence, amount, balance_before, entry_id=None):
    return OnlineWalletEntry(
        id=entry_id or f"entry-{sequence}",
        sequence=sequence,
        amount=Decimal(amount),
        balance_before=Decimal(balance_before),
        event_time=datetime(2026, 10, 18, tzinfo=timezone.utc),
    )


def test_sql_repository_returns_none_for_empty_ledger():
    with _sqlite_session() as db:
        assert SqlAlchemyOnlineWalletRepository(db).get_last_entry() is None


def test_sql_repository_returns_entry_with_highest_sequence():
    with _sqlite_session() as db:
        repo = SqlAlchemyOnlineWalletRepository(db)
        repo.append_entry(_entry(1, "70", "0"))
        repo.append_entry(_entry(2, "200", "70"))

        last = repo.get_last_entry()

        assert last.id == "entry-2"
        assert last.balance_before + last.amount == Decimal("270")


def test_sql_repository_turns_duplicate_sequence_into_conflict():
    with _sqlite_session() as db:
        repo = SqlAlchemyOnlineWalletRepository(db)
        repo.append_entry(_entry(1, "70", "0"))

        with pytest.raises(LedgerConflictError):
            repo.append_entry(_entry(1, "5", "0", entry_id="late-writer"))

        # Session is rolled back and still usable.
        assert db.query(OnlineWalletEntry).count() == 1
        assert repo.get_last_entry().id == "entry-1"


def test_engine_scenario_on_sql_repository():
    with _sqlite_session() as db:
        service = OnlineWalletService(SqlAlchemyOnlineWalletRepository(db))

        assert service.deposit(Decimal("70")).amount == Decimal("70")
        assert service.deposit(Decimal("200")).amount == Decimal("270")
        assert service.withdraw(Decimal("50")).amount == Decimal("220")
        with pytest.raises(InsufficientBalanceError):
            service.withdraw(Decimal("500"))

        assert service.get_balance().amount == Decimal("220")
        rows = db.query(OnlineWalletEntry).order_by(OnlineWalletEntry.sequence).all()
        assert [(row.sequence, row.amount, row.balance_before) for row in rows] == [
            (1, Decimal("70"), Decimal("0")),
            (2, Decimal("200"), Decimal("70")),
            (3, Decimal("-50"), Decimal("270")),
        ]


def test_memory_repository_appends_in_order():
    repo = InMemoryOnlineWalletRepository()
    assert repo.get_last_entry() is None

    repo.append_entry(_entry(1, "10", "0"))
    repo.append_entry(_entry(2, "-4", "10"))

    assert repo.get_last_entry().id == "entry-2"
    assert [entry.sequence for entry in repo.entries] == [1, 2]


def test_memory_repository_rejects_stale_sequence():
    repo = InMemoryOnlineWalletRepository()
    repo.append_entry(_entry(1, "10", "0"))

    with pytest.raises(LedgerConflictError):
        repo.append_entry(_entry(1, "10", "0", entry_id="stale"))
    with pytest.raises(LedgerConflictError):
        repo.append_entry(_entry(3, "10", "10", entry_id="gap"))

    assert len(repo.entries) == 1


def test_memory_repository_entries_is_a_snapshot():
    repo = InMemoryOnlineWalletRepository()
    snapshot = repo.entries
    repo.append_entry(_entry(1, "10", "0"))
    assert snapshot == ()
    assert len(repo.entries) == 1


def test_sql_repository_keeps_twenty_significant_digits():
    with _sqlite_session() as db:
        service = OnlineWalletService(SqlAlchemyOnlineWalletRepository(db))

        first = service.deposit(Decimal("123456789012.12345678"))
        second = service.deposit(Decimal("123456789012.12345678"))

        assert first.amount == Decimal("123456789012.12345678")
        assert second.amount == Decimal("246913578024.24691356")
        assert service.get_balance() == second
        stored = db.query(OnlineWalletEntry).order_by(OnlineWalletEntry.sequence).all()
        assert stored[1].balance_before == Decimal("123456789012.12345678")
        assert stored[1].amount == Decimal("123456789012.12345678")
