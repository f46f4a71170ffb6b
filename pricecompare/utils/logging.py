# pricecompare/utils/logging.py
import sys
from loguru import logger

from pricecompare.utils.settings import LOG_LEVEL

_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)

logger.remove()
logger.configure(extra={"name": "pricecompare"})
logger.add(sys.stderr, level=LOG_LEVEL.upper(), format=_FORMAT)


def get_logger(name: str | None = None):
    """Return the shared loguru logger, bound to the given module name."""
    if name:
        return logger.bind(name=name)
    return logger
