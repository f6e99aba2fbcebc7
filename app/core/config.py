from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


LEDGER_BACKENDS = ("sql", "memory")


class Settings(BaseSettings):
    app_name: str = "Online Wallet"
    environment: str = "development"
    api_v1_prefix: str = "/api/v1"
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite:///./online_wallet.db"
    db_pool_size: int = 5
    db_max_overflow: int = 5
    db_pool_timeout: int = 15
    db_pool_recycle: int = 1200
    db_pool_pre_ping: bool = True
    auto_create_tables: bool = False

    # Ledger
    ledger_backend: str = "sql"
    # Total append attempts per operation when another writer got there first.
    ledger_append_attempts: int = Field(default=3, ge=1)

    # Rate limiting (deposit/withdraw)
    rate_limit_enabled: bool = True
    rate_limit: str = "30/minute"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    @field_validator("ledger_backend")
    @classmethod
    def validate_ledger_backend(cls, value: str) -> str:
        backend = str(value or "").strip().lower()
        if backend not in LEDGER_BACKENDS:
            raise ValueError(f"ledger_backend must be one of {', '.join(LEDGER_BACKENDS)}")
        return backend

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return str(value or "INFO").strip().upper()


@lru_cache
def get_settings() -> Settings:
    return Settings()
