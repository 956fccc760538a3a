import sys
from pathlib import Path

from loguru import logger


def setup_logging(level: str = "INFO", log_dir: Path | None = None) -> None:
    """Configure loguru for the deduplication service."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
            "<level>{message}</level>"
        ),
        colorize=True,
    )
    if log_dir is not None:
        logger.add(
            str(Path(log_dir) / "dedup_{time:YYYY-MM-DD}.log"),
            level=level,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}",
            rotation="1 day",
            retention="7 days",
            compression="zip",
        )
