import logging

from app.core.config import get_settings


LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    resolved = (level or get_settings().log_level or "INFO").upper()
    numeric_level = logging.getLevelName(resolved)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(numeric_level)

    # SQL echo is controlled by SQLAlchemy itself; keep its pool chatter down.
    logging.getLogger("sqlalchemy.pool").setLevel(max(numeric_level, logging.WARNING))
