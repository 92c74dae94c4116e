"""
Logging configuration.

Configures the standard library logging tree for API processes and
hands out named loggers.
"""

import logging
import logging.config

_LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"

# Third-party loggers that are too chatty at INFO
_QUIET_LOGGERS = ("sqlalchemy.engine", "httpx", "httpcore", "arq")

_initialized = False


def init_logging(level: str = "INFO", *, force: bool = False) -> None:
    """
    Configure root logging once per process.

    Args:
        level: Root log level name (e.g. "INFO", "DEBUG").
        force: Reconfigure even if logging was already initialized.
    """
    global _initialized

    if _initialized and not force:
        return

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"default": {"format": _LOG_FORMAT}},
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                    "stream": "ext://sys.stderr",
                }
            },
            "root": {"level": level.upper(), "handlers": ["console"]},
            "loggers": {name: {"level": "WARNING"} for name in _QUIET_LOGGERS},
        }
    )
    _initialized = True


def get_logger(name: str) -> logging.Logger:
    """Get a named logger."""
    return logging.getLogger(name)
