from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path


def configure_logging(*, debug: bool = False, log_path: str | None = None) -> None:
    """Configure logging for the ``datasheet`` package loggers.

    - Console output at INFO, or DEBUG when ``debug`` is set
    - Optionally a rotating file at ``log_path``
    """
    level = logging.DEBUG if debug else logging.INFO
    logger = logging.getLogger("datasheet")
    logger.setLevel(level)

    # Avoid duplicating handlers if called more than once.
    if getattr(logger, "_datasheet_configured", False):
        for handler in logger.handlers:
            handler.setLevel(level)
        return

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(fmt)
    logger.addHandler(console)

    if log_path is not None:
        Path(log_path).parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(log_path, maxBytes=1_000_000, backupCount=3, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(fmt)
        logger.addHandler(file_handler)

    setattr(logger, "_datasheet_configured", True)
