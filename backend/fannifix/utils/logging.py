# backend/fannifix/utils/logging.py
import os
import logging
from logging.config import dictConfig

_configured = False

def setup_logging(force: bool = False) -> None:
    """Console logging for the API process. Later calls are no-ops unless ``force``."""
    global _configured
    if _configured and not force:
        return
    level = os.getenv("LOG_LEVEL", "INFO").upper()
    access_level = os.getenv("UVICORN_ACCESS_LOG_LEVEL", "INFO").upper()
    # Loader chatter (per-file counts, dropped SEO keys)
    content_level = os.getenv("CONTENT_LOG_LEVEL", level).upper()

    dictConfig({
        "version": 1,
        "disable_existing_loggers": False,  # keep uvicorn/fastapi loggers
        "formatters": {
            "default": {
                "format": "[%(levelname)s] %(asctime)s %(name)s: %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stdout",
            },
        },
        "root": {"level": level, "handlers": ["console"]},
        "loggers": {
            "fannifix.services.ingestion": {"level": content_level},
            "fannifix.services.ingestion_modules": {"level": content_level},
            "uvicorn.error": {"level": level, "handlers": ["console"], "propagate": False},
            "uvicorn.access": {"level": access_level, "handlers": ["console"], "propagate": False},
            "httpx": {"level": "WARNING"},
        },
    })
    _configured = True

def get_logger(name: str | None = None) -> logging.Logger:
    return logging.getLogger(name if name else "fannifix")
