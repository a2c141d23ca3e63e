import sys
from pathlib import Path

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - "
    "<level>{message}</level>"
)


def setup_logger(*, level: str = "INFO", json_logs: bool = False, log_dir: str = "logs") -> Path | None:
    """Configure loguru: console at `level`, plus a DEBUG file sink under log_dir.

    An empty log_dir keeps logging on the console only. Returns the file
    sink path pattern when one is added.
    """
    logger.remove()
    logger.add(
        sys.stdout,
        format=CONSOLE_FORMAT,
        level=level.upper(),
        colorize=not json_logs,
        serialize=json_logs,
    )

    if not log_dir:
        return None

    path = Path(log_dir) / "bot_{time:YYYY-MM-DD}.log"
    logger.add(
        str(path),
        rotation="10 MB",
        retention="7 days",
        compression="gz",
        level="DEBUG",
        serialize=json_logs,
    )
    return path
