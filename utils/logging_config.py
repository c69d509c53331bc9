"""Logging setup: one Rich console handler shared by the app and uvicorn."""
import logging.config
from typing import Any, Dict

UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def build_logging_config(level: str = "INFO") -> Dict[str, Any]:
    """``dictConfig`` payload routing the root and uvicorn loggers to a ``RichHandler``."""
    handler = {
        "class": "rich.logging.RichHandler",
        "formatter": "plain",
        "level": "DEBUG",
        "rich_tracebacks": True,
        "show_time": True,
        "show_path": False,
        "log_time_format": "%Y-%m-%d %H:%M:%S",
        # record text may contain "[...]"
        "markup": False,
    }
    loggers = {name: {"handlers": ["rich"], "level": "INFO", "propagate": False} for name in UVICORN_LOGGERS}
    loggers[""] = {"handlers": ["rich"], "level": level.upper(), "propagate": False}
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"plain": {"format": "%(name)s - %(message)s"}},
        "handlers": {"rich": handler},
        "loggers": loggers,
    }


def configure_logging(level: str = "INFO") -> Dict[str, Any]:
    config = build_logging_config(level)
    logging.config.dictConfig(config)
    return config
