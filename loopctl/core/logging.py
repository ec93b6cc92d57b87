import sys
import os
from typing import Optional
from loguru import logger

from .config import LoggingSettings

CONSOLE_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"


def setup_logging(debug_mode: bool = True, settings: Optional[LoggingSettings] = None):
    """
    Configures Loguru logger.

    Console output is always enabled; the rotating file sink is added only
    when ``settings.file_logging`` is set.
    """
    settings = settings or LoggingSettings()

    # Remove default handler
    logger.remove()

    # Console Handler
    level = "DEBUG" if debug_mode else "INFO"
    logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT)

    # File Handler
    if settings.file_logging:
        os.makedirs(settings.log_dir, exist_ok=True)
        logger.add(
            os.path.join(settings.log_dir, "loopctl_{time}.log"),
            rotation=settings.rotation,
            retention=settings.retention,
            level="DEBUG",
        )

    logger.info("Logging initialized.")
