import pytest
from pydantic import ValidationError

from app.core.config import Settings


def test_ledger_backend_is_normalized():
    settings = Settings(_env_file=None, ledger_backend=" MEMORY ")
    assert settings.ledger_backend == "memory"


def test_unknown_ledger_backend_is_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, ledger_backend="redis")


def test_append_attempts_must_be_positive():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, ledger_append_attempts=0)


def test_log_level_is_upper_cased():
    assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"


def test_environment_overrides_defaults(monkeypatch):
    monkeypatch.setenv("LEDGER_APPEND_ATTEMPTS", "9")
    monkeypatch.setenv("RATE_LIMIT", "5/second")
    settings = Settings(_env_file=None)
    assert settings.ledger_append_attempts == 9
    assert settings.rate_limit == "5/second"
