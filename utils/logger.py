import functools
import logging
import time
from typing import Optional

_GENERATION_LOGGER_NAME = "dungeon_loot.generation"
_GENERATION_LOGGER: Optional[logging.Logger] = None

_DEFAULT_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def get_generation_logger(level: int = logging.INFO) -> logging.Logger:
    """Return the shared logger used for pipeline progress messages."""

    global _GENERATION_LOGGER
    if _GENERATION_LOGGER is not None:
        return _GENERATION_LOGGER

    logger = logging.getLogger(_GENERATION_LOGGER_NAME)
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(_DEFAULT_FORMAT))
        logger.addHandler(handler)

    logger.propagate = True
    _GENERATION_LOGGER = logger
    return logger


def configure_logging(verbosity: int = 0) -> None:
    """Route the ``modules`` loggers to stderr; ``verbosity`` > 0 enables DEBUG."""

    level = logging.DEBUG if verbosity > 0 else logging.INFO
    logging.basicConfig(level=level, format=_DEFAULT_FORMAT)
    get_generation_logger(level).setLevel(level)


def log_calls(func):
    """Decorator logging calls, return values and elapsed time at DEBUG level."""
    logger = logging.getLogger(func.__module__)

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        if not logger.isEnabledFor(logging.DEBUG):
            return func(*args, **kwargs)

        logger.debug("Call %s args=%r kwargs=%r", func.__qualname__, args, kwargs)
        start_time = time.perf_counter()
        result = func(*args, **kwargs)
        elapsed = time.perf_counter() - start_time
        logger.debug("Return %s: %r", func.__qualname__, result)
        logger.debug("Elapsed %s: %.6f s", func.__qualname__, elapsed)
        return result

    return wrapper
