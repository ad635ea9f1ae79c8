# MIT License (see LICENSE)
"""
Logging configuration for applications built on the package.

The library itself only creates module loggers and never configures
handlers. A driver (example script, benchmark, UI) calls setup_logging()
once at start-up.

Usage:
    from nbody_sim.logging_config import setup_logging
    setup_logging()                      # console only
    setup_logging(log_dir="logs")        # console + rotating files
"""
from __future__ import annotations
import logging
import logging.config
from pathlib import Path


def setup_logging(default_level: int = logging.INFO, log_dir: str | Path | None = None) -> None:
    """
    Configure console (and optionally file) logging.

    Parameters
    ----------
    default_level : int, optional
        Level of the root logger. Default is logging.INFO.
    log_dir : str or Path, optional
        When given, also write DEBUG and above to ``simulation.log`` and
        ERROR and above to ``error.log`` in this directory (created if
        missing), rotating at 10 MB.
    """
    handlers: dict[str, dict] = {
        "console": {
            "class": "logging.StreamHandler",
            "level": "INFO",
            "formatter": "standard",
            "stream": "ext://sys.stdout",
        },
    }
    if log_dir is not None:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": "DEBUG",
            "formatter": "detailed",
            "filename": str(log_path / "simulation.log"),
            "maxBytes": 10485760,  # 10 MB
            "backupCount": 5,
            "encoding": "utf8",
        }
        handlers["error_file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": "ERROR",
            "formatter": "detailed",
            "filename": str(log_path / "error.log"),
            "maxBytes": 10485760,  # 10 MB
            "backupCount": 5,
            "encoding": "utf8",
        }

    config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "detailed": {
                "format": "%(asctime)s [%(levelname)s] %(name)s (%(filename)s:%(lineno)d): %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": handlers,
        "loggers": {
            "": {
                "handlers": list(handlers),
                "level": default_level,
            },
        },
    }
    logging.config.dictConfig(config)
    logging.getLogger(__name__).debug("Logging configuration applied")
