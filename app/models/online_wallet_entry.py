from decimal import Decimal

from sqlalchemy import Column, DateTime, Integer, Numeric, String, Index
from sqlalchemy.types import TypeDecorator
from app.core.database import Base


class LedgerAmount(TypeDecorator):
    """Numeric(20, 8) money column.

    SQLite has no exact decimal storage (NUMERIC values end up as REAL), so there the
    value is kept as its exact decimal text instead.
    """

    impl = Numeric
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "sqlite":
            return dialect.type_descriptor(String(40))
        return super().load_dialect_impl(dialect)

    def process_bind_param(self, value, dialect):
        if value is None or dialect.name != "sqlite":
            return value
        return str(value if isinstance(value, Decimal) else Decimal(str(value)))

    def process_result_value(self, value, dialect):
        if value is None or dialect.name != "sqlite":
            return value
        return Decimal(value)


class OnlineWalletEntry(Base):
    __tablename__ = "online_wallet_entries"

    id = Column(String(36), primary_key=True)
    # Position in the ledger, starting at 1. Unique so two writers cannot claim the same slot.
    sequence = Column(Integer, nullable=False)
    amount = Column(LedgerAmount(20, 8), nullable=False)  # +deposit / -withdrawal
    balance_before = Column(LedgerAmount(20, 8), nullable=False)
    event_time = Column(DateTime(timezone=True), nullable=False)

    def __repr__(self) -> str:
        return (
            f"OnlineWalletEntry(id={self.id!r}, sequence={self.sequence!r}, "
            f"amount={self.amount!r}, balance_before={self.balance_before!r})"
        )


Index("ux_online_wallet_entries_sequence", OnlineWalletEntry.sequence, unique=True)
