"""Logging setup for structgen.

All modules obtain their logger through :func:`get_logger`. Output goes to
stderr so that generated source on stdout stays clean.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "structgen"
DEFAULT_FORMAT = "%(message)s"


def setup_logging(level: str | int = "WARNING", log_file: str | None = None) -> None:
    """Configure the package logger.

    Args:
        level: Logging level name or number.
        log_file: Optional path to also write plain-text logs to.
    """
    logger = logging.getLogger(LOGGER_NAME)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    console_handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Return a logger namespaced under the package logger."""
    if name == LOGGER_NAME or name.startswith(f"{LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
