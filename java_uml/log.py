import logging
import sys

_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """
    Attach a single stdout handler to the package logger.
    Safe to call more than once; only the level is updated on later calls.
    """
    logger = logging.getLogger("java_uml")
    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)

    return logger
