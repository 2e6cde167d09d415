"""
Logging for txfilter

The console sink is installed on import. setup_logger() applies the
[logging] table from the TOML config (see txfilter.example.toml).
"""

import sys
from typing import Any, Dict

from loguru import logger

LOG_FORMAT = "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"

logger.remove()
logger.add(sys.stderr, format=LOG_FORMAT, level="INFO", enqueue=True)


def setup_logger(config: Dict[str, Any] = None) -> None:
    """
    Reconfigure sinks from the [logging] table

    Args:
        config: Keys as in txfilter.example.toml:
            - level: "DEBUG" shows every builder step (attach, enter, exit)
            - file: also write to this path, zip-compressed on rotation
            - rotation: loguru rotation size or interval, default "10 MB"
            - retention: how long rotated files are kept, default "7 days"
    """
    if not config:
        return

    logger.remove()

    level = config.get("level", "INFO")
    logger.add(sys.stderr, format=LOG_FORMAT, level=level, enqueue=True)

    if log_file := config.get("file"):
        logger.add(
            log_file,
            format=LOG_FORMAT,
            level=level,
            rotation=config.get("rotation", "10 MB"),
            retention=config.get("retention", "7 days"),
            compression="zip",
            enqueue=True,
        )
