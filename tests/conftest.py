import os


def _set_test_env() -> None:
    defaults = {
        "APP_NAME": "Online Wallet Test",
        "ENVIRONMENT": "test",
        "LOG_LEVEL": "WARNING",
        "DATABASE_URL": "sqlite://",
        "AUTO_CREATE_TABLES": "false",
        "LEDGER_BACKEND": "memory",
        "LEDGER_APPEND_ATTEMPTS": "3",
        "RATE_LIMIT_ENABLED": "false",
        "RATE_LIMIT": "30/minute",
    }
    for key, value in defaults.items():
        os.environ.setdefault(key, value)


_set_test_env()
