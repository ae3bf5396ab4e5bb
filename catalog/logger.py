"""
Logging for the catalog service.

Store, service and API modules log through children of the ``catalog``
logger (``catalog.database``, ``catalog.service``, ``catalog.api``).
Output goes to stdout at INFO until ``create_app`` applies the level from
``Settings.log_level``.
"""
import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logger = logging.getLogger("catalog")


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach the stdout handler once and set the catalog log level.

    Safe to call for every app built in a process; the handler is only
    added the first time.
    """
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)
        # uvicorn installs its own root handlers
        logger.propagate = False

    logger.setLevel(level.upper())
    for handler in logger.handlers:
        handler.setLevel(level.upper())
    return logger


def get_logger(name: str = None) -> logging.Logger:
    """Child of the ``catalog`` logger, e.g. ``get_logger("service")``."""
    if name:
        return logger.getChild(name)
    return logger


configure_logging()
