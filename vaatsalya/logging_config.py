"""Logging setup shared by the CLI and library modules."""

import logging

from rich.logging import RichHandler

ROOT_LOGGER = "vaatsalya"


def setup_logging(level: str = "INFO") -> None:
    """Attach a rich handler to the package logger hierarchy."""
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level.upper())

    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        handler = RichHandler(rich_tracebacks=True, show_path=False)
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(handler)
    logger.propagate = False

    # httpx logs full request URLs at INFO, and ours carry the API key.
    logging.getLogger("httpx").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a child logger of the package logger."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
