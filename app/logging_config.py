"""
Catalog API — Logging Configuration
=====================================

What:  One-time stdlib logging setup shared by the web app and the seeder CLI.
Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s on stdout.
"""

import logging
import sys

from app.config import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Libraries that log every operation at DEBUG/INFO
_NOISY_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "httpcore", "httpx", "aiosqlite")


def setup_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
