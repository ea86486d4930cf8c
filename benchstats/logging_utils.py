"""Logging and environment helpers for benchmark harnesses using benchstats."""
from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )


def load_env(path: str | None = None) -> bool:
    if path is None:
        path = os.getenv("ENV_FILE", ".env")
    return load_dotenv(path)
