# sleep_tracker/logging_config.py
from __future__ import annotations

from logging.config import dictConfig


def setup_logging(
    level: str = "INFO",
    services_level: str | None = None,
    sql_level: str = "WARNING",
) -> None:
    """
    Central logging setup for the application, uvicorn and SQLAlchemy.
    - Level comes from .env (LOG_LEVEL)
    - SERVICES_LOG_LEVEL raises or lowers only the entry/location services
    - SQL_LOG_LEVEL=INFO echoes statements from sqlalchemy.engine
    """
    level = (level or "INFO").upper()
    services_level = (services_level or level).upper()
    sql_level = (sql_level or "WARNING").upper()

    def console(logger_level: str) -> dict:
        return {"handlers": ["console"], "level": logger_level, "propagate": False}

    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                },
            },
            "handlers": {
                # handler passes everything; loggers decide
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                    "level": "DEBUG",
                },
            },
            "loggers": {
                "sleep_tracker": console(level),
                # children of sleep_tracker, so they keep its handler via propagation
                "sleep_tracker.services": {"level": services_level},
                "sqlalchemy.engine": console(sql_level),
                "uvicorn": console(level),
                "uvicorn.error": console(level),
                "uvicorn.access": console(level),
            },
            # root for third-party libraries
            "root": {"handlers": ["console"], "level": level},
        }
    )
