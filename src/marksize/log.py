"""Logging setup for marksize."""

import logging
import logging.handlers
import os
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


def setup_logger(
    level: int = logging.WARNING,
    log_file: Optional[Path] = None,
    file_level: int = logging.DEBUG,
) -> logging.Logger:
    """Configure the ``marksize`` logger with a Rich console handler."""
    logger = logging.getLogger("marksize")
    logger.setLevel(logging.DEBUG)

    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    console_handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    )
    console_handler.setLevel(level)
    logger.addHandler(console_handler)

    if log_file is not None:
        resolved = Path(log_file).expanduser().resolve()
        os.makedirs(resolved.parent, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            resolved,
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.setLevel(file_level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        logger.addHandler(file_handler)

    return logger
