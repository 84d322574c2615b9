"""
Logging setup for the Blog API.

Three sinks are attached to the root logger:

- console, human readable;
- ``blog-api.log``, plain text, rotated daily, 14 files kept;
- ``blog-api-structured.jsonl``, one JSON object per record rendered by
  structlog's ``ProcessorFormatter``, rotated daily, 7 files kept.

Application modules keep using ``logging.getLogger(__name__)``; only the
formatting of the structured sink goes through structlog.
"""
import logging
import logging.config
from pathlib import Path

import structlog

from app.config import Settings, settings as default_settings

CONSOLE_FORMAT = "[%(asctime)s %(levelname).3s] [%(name)s] %(message)s"
FILE_FORMAT = "%(asctime)s.%(msecs)03d [%(levelname).3s] [%(name)s] %(message)s"

# Libraries that are too chatty at DEBUG.
QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "aiosqlite", "asyncio")


def _static_fields(app_name: str, environment: str):
    def add_static_fields(logger, method_name, event_dict):
        event_dict.setdefault("application", app_name)
        event_dict.setdefault("environment", environment)
        return event_dict

    return add_static_fields


def resolve_level(settings: Settings) -> str:
    """DEBUG in development, INFO elsewhere, unless ``LOG_LEVEL`` overrides."""
    if settings.LOG_LEVEL:
        return settings.LOG_LEVEL.upper()
    return "DEBUG" if settings.is_development else "INFO"


def build_logging_config(settings: Settings) -> dict:
    """Return the ``dictConfig`` mapping for *settings*."""
    level = resolve_level(settings)
    handlers: dict[str, dict] = {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "console",
        },
    }

    if settings.LOG_TO_FILE:
        log_dir = Path(settings.LOG_DIR)
        handlers["file"] = {
            "class": "logging.handlers.TimedRotatingFileHandler",
            "formatter": "plain",
            "filename": str(log_dir / "blog-api.log"),
            "when": "midnight",
            "backupCount": 14,
            "encoding": "utf-8",
            "utc": True,
        }
        handlers["structured"] = {
            "class": "logging.handlers.TimedRotatingFileHandler",
            "formatter": "json",
            "filename": str(log_dir / "blog-api-structured.jsonl"),
            "when": "midnight",
            "backupCount": 7,
            "encoding": "utf-8",
            "utc": True,
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "console": {"format": CONSOLE_FORMAT, "datefmt": "%H:%M:%S"},
            "plain": {"format": FILE_FORMAT, "datefmt": "%Y-%m-%d %H:%M:%S"},
            "json": {
                "()": structlog.stdlib.ProcessorFormatter,
                "processors": [
                    structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                    structlog.processors.JSONRenderer(),
                ],
                "foreign_pre_chain": [
                    structlog.processors.TimeStamper(fmt="iso", utc=True),
                    structlog.stdlib.add_log_level,
                    structlog.stdlib.add_logger_name,
                    _static_fields(settings.APP_NAME, settings.APP_ENV),
                    structlog.processors.format_exc_info,
                ],
            },
        },
        "handlers": handlers,
        "root": {"level": level, "handlers": list(handlers)},
        "loggers": {name: {"level": "WARNING"} for name in QUIET_LOGGERS},
    }


def configure_logging(settings: Settings = default_settings) -> None:
    """Apply the logging configuration.  Called once at application startup."""
    if settings.LOG_TO_FILE:
        Path(settings.LOG_DIR).mkdir(parents=True, exist_ok=True)
    logging.config.dictConfig(build_logging_config(settings))
    logging.getLogger(__name__).info(
        "Logging configured: level=%s env=%s", resolve_level(settings), settings.APP_ENV
    )
