"""Logging configuration helpers."""

import logging

PACKAGE_LOGGER = "nutrition_insights"
LOG_FORMAT = "%(asctime)s %(levelname)s: %(name)s: %(message)s"
# Model health polling logs every request at INFO through these.
QUIET_LOGGERS = ("httpx", "httpcore")


def configure_logging(level: int | str = logging.INFO) -> None:
    """Attach one stream handler to the package logger.

    Repeated calls only update the level.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
