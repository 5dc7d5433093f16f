import logging
from typing import Union

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: Union[str, int] = "INFO") -> logging.Logger:
    """
    Install a single stream handler on the package logger.

    Safe to call more than once (e.g. one create_app per test); the
    handler is only attached the first time.
    """
    logger = logging.getLogger("contentsync")
    logger.setLevel(level.upper() if isinstance(level, str) else level)

    if not any(getattr(h, "_contentsync", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._contentsync = True  # type: ignore[attr-defined]
        logger.addHandler(handler)

    return logger
