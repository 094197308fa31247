"""Structured JSON logging configuration.

Emits one JSON object per line on stdout with a ``severity`` field, which both
Cloud Run and CloudWatch Logs Insights pick up without extra parsing.

Usage:
    from knowledge_relay.logging_config import configure_logging
    configure_logging()
"""

import logging
import logging.config

LOGGING_CONFIG: dict = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "json": {
            "()": "pythonjsonlogger.json.JsonFormatter",
            "format": "%(asctime)s %(levelname)s %(name)s %(funcName)s %(message)s",
            "rename_fields": {
                "levelname": "severity",
                "asctime": "timestamp",
                "name": "logger",
            },
            "static_fields": {
                "service": "knowledge-relay",
            },
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "json",
            "stream": "ext://sys.stdout",
        },
    },
    "loggers": {
        "botocore": {"level": "WARNING"},
        "urllib3": {"level": "WARNING"},
    },
    "root": {
        "level": "INFO",
        "handlers": ["console"],
    },
}


def configure_logging(level: str | None = None) -> None:
    """Apply structured JSON logging configuration.

    Call once per process (FastAPI lifespan or the first queue/schedule invocation).
    ``level`` overrides the root level, typically from ``Settings.log_level``.
    """
    logging.config.dictConfig(LOGGING_CONFIG)
    if level:
        logging.getLogger().setLevel(getattr(logging, level.upper(), logging.INFO))
