import logging
import sys
from typing import Optional

from loguru import logger

from ..core.settings import settings

MINIMAL_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SS}</green> |"
    " <level>{level}</level> | <level>{message}</level>\n"
)
DEBUG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SS}</green> | <level>{level: <4}</level> |"
    " <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan>"
    " | <level>{message}</level>\n"
)


class InterceptHandler(logging.Handler):
    """Forwards stdlib log records (httpx, httpcore) to loguru."""

    def emit(self, record):
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        logger.opt(exception=record.exc_info).log(level, record.getMessage())


def log_level() -> str:
    if settings.debug and settings.log_level == "INFO":
        return "DEBUG"
    return settings.log_level


def configure_logger(sink: Optional[object] = None) -> None:
    """Sends lnaddress logs to stderr (or sink). The package is silent until this
    is called, so applications embedding it keep control over their loguru sinks.
    """
    logger.remove()
    logger.enable("lnaddress")
    logger.add(
        sink or sys.stderr,
        level=log_level(),
        format=DEBUG_FORMAT if settings.debug else MINIMAL_FORMAT,
    )

    for name in ("httpx", "httpcore"):
        stdlib_logger = logging.getLogger(name)
        stdlib_logger.handlers = [InterceptHandler()]
        stdlib_logger.propagate = False
        if settings.debug:
            stdlib_logger.setLevel(logging.DEBUG)
