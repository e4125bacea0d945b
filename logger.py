"""Logging for Centavo.

CLI output goes through the ``centavo`` logger. The console shows INFO lines
as plain text so listings and reports read cleanly, and prefixes warnings and
errors with their level. Every record also lands in a daily log file.
"""

import logging
from datetime import date
from config import Config

LOGGER_NAME = "centavo"


class ConsoleFormatter(logging.Formatter):
    """Formatter that only labels records above INFO."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if record.levelno > logging.INFO:
            return f"{record.levelname}: {message}"
        return message


def setup_logging(config: Config) -> logging.Logger:
    """Attach the file and console handlers to the centavo logger.

    Safe to call more than once; earlier handlers are replaced.
    """
    config.log_dir.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(config.log_level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    file_handler = logging.FileHandler(
        config.log_dir / f"centavo-{date.today().isoformat()}.log", encoding="utf-8"
    )
    file_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(levelname)s - %(module)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(ConsoleFormatter("%(message)s"))

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)
    return logger


def get_logger() -> logging.Logger:
    """Get the application logger."""
    return logging.getLogger(LOGGER_NAME)
