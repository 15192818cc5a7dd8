import logging
import sys

from environs import Env

from .log_filters import TruncatingFilter

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"

# Loggers whose records carry long elevation point lists or arrays
TRUNCATED_LOGGERS = ("httpx", "repeater_los.infrastructure.api.clients")
TRUNCATED_LENGTH = 105


def _resolve_level(env: Env, verbose: bool) -> int:
    if verbose or env.bool("DEBUG", default=False):
        return logging.DEBUG

    level_name = env.str("LOGGING_LEVEL", "INFO").upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        raise ValueError(f"Invalid log level: {level_name}")
    return level


def setup_logging(env: Env, verbose: bool = False) -> None:
    """
    Configure stdout logging from LOGGING_LEVEL (or DEBUG / ``verbose``).

    Leaves an already configured root logger untouched, so applications
    embedding the facade keep their own handlers.
    """
    if logging.root.handlers:
        return

    level = _resolve_level(env, verbose)
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stdout)

    for name in TRUNCATED_LOGGERS:
        logger = logging.getLogger(name)
        logger.setLevel(level)
        logger.addFilter(TruncatingFilter(max_length=TRUNCATED_LENGTH))

    # The client logs its own requests; httpx would repeat them
    logging.getLogger("httpx").propagate = False
    logging.getLogger("httpcore").setLevel(max(level, logging.INFO))


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance."""
    return logging.getLogger(name)
