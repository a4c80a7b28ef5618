"""Loguru sink configuration."""

import sys
from pathlib import Path

from loguru import logger


def configure_logging(level: str = "INFO", log_dir: str = "logs") -> None:
    """Console sink at ``level`` plus a daily rotating DEBUG file."""
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>",
        level=level,
    )
    Path(log_dir).mkdir(parents=True, exist_ok=True)
    logger.add(
        str(Path(log_dir) / "keyword_scout_{time:YYYY-MM-DD}.log"),
        rotation="1 day",
        retention="7 days",
        level="DEBUG",
    )
