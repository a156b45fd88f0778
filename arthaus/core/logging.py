"""Logging configuration for the API."""

import logging
from typing import Union


def setup_logging(level: Union[int, str] = logging.INFO) -> None:
    """
    Configure root logging for the catalog.

    Args:
        level: Logging level name or number (default: INFO)
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )

    # Quiet noisy third-party loggers
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
