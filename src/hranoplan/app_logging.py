"""Logging configuration helpers."""

import logging

# The Supabase client logs every HTTP request through httpx at INFO.
_NOISY_LOGGERS = ("httpx", "httpcore", "hpack")


def configure_logging(level: str | int = logging.INFO) -> None:
    """Configure the hranoplan logger with a single stream handler."""
    logger = logging.getLogger("hranoplan")
    logger.setLevel(level)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s: %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
