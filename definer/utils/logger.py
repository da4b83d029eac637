"""
Logging setup for the ``definer`` namespace.

Everything goes to a rotating file under the configured log directory; only
records at or above the console level reach stderr, so the shell stays quiet.
"""
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

ROOT_LOGGER = "definer"
FILE_FORMAT = "[%(asctime)s] %(levelname)-8s %(name)s:%(lineno)d - %(message)s"
CONSOLE_FORMAT = "definer: [%(levelname)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class ColoredFormatter(logging.Formatter):
    """Console formatter that tints the level name by severity."""

    LEVEL_COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record):
        color = self.LEVEL_COLORS.get(record.levelno)
        if color is None:
            return super().format(record)

        plain = record.levelname
        record.levelname = f"{color}{plain}{self.RESET}"
        try:
            return super().format(record)
        finally:
            # the same record also reaches the file handler
            record.levelname = plain


def _level(name: str, fallback: int) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else fallback


def _file_handler(log_dir: Path, level: str, max_bytes: int, backup_count: int) -> logging.Handler:
    log_dir = Path(log_dir).expanduser()
    log_dir.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(
        log_dir / f"{ROOT_LOGGER}.log",
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8"
    )
    handler.setLevel(_level(level, logging.INFO))
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
    return handler


def _console_handler(level: str, use_colors: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(_level(level, logging.ERROR))

    formatter_class = ColoredFormatter if use_colors and sys.stderr.isatty() else logging.Formatter
    handler.setFormatter(formatter_class(CONSOLE_FORMAT))
    return handler


def setup_logging(
    log_dir: Path = Path("logs"),
    log_level: str = "INFO",
    console_level: str = "ERROR",
    use_colors: bool = True,
    max_bytes: int = 5_000_000,
    backup_count: int = 3
) -> logging.Logger:
    """
    Attach the file and console handlers to the ``definer`` logger.

    Module loggers (``definer.glossary.store`` and so on) propagate here.
    Calling it again is a no-op while the handlers are installed.

    Args:
        log_dir: Directory holding ``definer.log`` and its backups
        log_level: File log level
        console_level: stderr log level
        use_colors: Tint level names when stderr is a terminal
        max_bytes: Size at which the file rotates
        backup_count: Rotated files to keep

    Returns:
        The ``definer`` logger
    """
    logger = logging.getLogger(ROOT_LOGGER)
    if logger.handlers:
        return logger

    logger.setLevel(logging.DEBUG)
    logger.addHandler(_file_handler(log_dir, log_level, max_bytes, backup_count))
    logger.addHandler(_console_handler(console_level, use_colors))
    return logger
