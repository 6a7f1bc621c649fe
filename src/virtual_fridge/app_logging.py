"""Logging configuration helpers."""

import logging

APP_LOGGER = "virtual_fridge"
_NOISY_LOGGERS = ("httpx", "httpcore", "hpack")


def configure_logging(level: int | str = logging.INFO) -> None:
    """Attach one stream handler to the application logger.

    Repeated calls only adjust the level. Per-request logs of the HTTP client
    libraries are limited to warnings.
    """
    logger = logging.getLogger(APP_LOGGER)
    logger.setLevel(level)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s: %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
