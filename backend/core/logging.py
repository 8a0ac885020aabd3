import logging

from .config import Settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# uvicorn.run(log_level=...) accepts only these names
_UVICORN_LEVELS = ("critical", "error", "warning", "info", "debug")


def resolve_log_level(settings: Settings) -> int:
    """Numeric level for settings.log_level (env LOG_LEVEL or --log-level); INFO when unrecognized."""
    level = logging.getLevelName(settings.log_level.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def uvicorn_log_level(settings: Settings) -> str:
    """Level name to hand to uvicorn, always one it accepts."""
    name = logging.getLevelName(resolve_log_level(settings)).lower()
    return name if name in _UVICORN_LEVELS else "info"


def setup_logging(settings: Settings) -> None:
    """Configure application-wide logging based on settings.

    The format includes timestamp, log level, logger name, and message.
    """
    level = resolve_log_level(settings)

    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)

    # Align uvicorn loggers with the application log level for consistency.
    for logger_name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(logger_name).setLevel(level)

    if not isinstance(logging.getLevelName(settings.log_level.strip().upper()), int):
        logging.getLogger(__name__).warning(
            "Unknown log level %r, using %s", settings.log_level, logging.getLevelName(level)
        )
