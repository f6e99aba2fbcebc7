from functools import lru_cache

from fastapi import Depends
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.database import get_db
from app.repositories.online_wallet import (
    InMemoryOnlineWalletRepository,
    OnlineWalletRepository,
    SqlAlchemyOnlineWalletRepository,
)
from app.services.online_wallet import OnlineWalletService


@lru_cache
def get_memory_repository() -> InMemoryOnlineWalletRepository:
    # One ledger per process; it lives as long as the worker does.
    return InMemoryOnlineWalletRepository()


def get_online_wallet_repository(db: Session = Depends(get_db)) -> OnlineWalletRepository:
    if get_settings().ledger_backend == "memory":
        return get_memory_repository()
    return SqlAlchemyOnlineWalletRepository(db)


def get_online_wallet_service(
    repository: OnlineWalletRepository = Depends(get_online_wallet_repository),
) -> OnlineWalletService:
    return OnlineWalletService(
        repository,
        max_append_attempts=get_settings().ledger_append_attempts,
    )
