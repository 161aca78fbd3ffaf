"""Logging configuration utilities."""

import sys
from pathlib import Path
from typing import Optional, Union

from loguru import logger


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Union[str, Path]] = None,
    rotation: str = "10 MB",
    retention: str = "1 week",
) -> None:
    """Configure loguru for the application.

    Args:
        level: Minimum log level to display.
        log_file: Optional path to a log file.
        rotation: When to rotate the log file.
        retention: How long to keep old log files.
    """
    # Remove default handler
    logger.remove()

    logger.add(
        sys.stderr,
        level=level,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan> | "
            "<level>{message}</level>"
        ),
        colorize=True,
    )

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path,
            level=level,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}",
            rotation=rotation,
            retention=retention,
        )

    logger.debug(f"Logging configured at level: {level}")
