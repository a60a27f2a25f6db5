"""Logging initialization."""

from __future__ import annotations

import os
import logging

from livescribe.config.logging import (
    LOG_FORMAT,
    ENV_LOG_LEVEL,
    UPSTREAM_LOGGERS,
    DEFAULT_LOG_LEVEL,
    ENV_SHOW_UPSTREAM_LOGS,
)


def configure_logging() -> None:
    """Apply LOG_LEVEL and SHOW_UPSTREAM_LOGS as they are in the environment now.

    Call after `load_env_files()` so values from `.env.local`/`.env` take effect.
    """
    level = (os.getenv(ENV_LOG_LEVEL) or "").strip().upper() or DEFAULT_LOG_LEVEL
    show_upstream = (os.getenv(ENV_SHOW_UPSTREAM_LOGS) or "").strip().lower() in {"1", "true", "yes"}

    if not show_upstream:
        for name in UPSTREAM_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    # basicConfig leaves the level alone when the root logger already has handlers.
    logging.getLogger().setLevel(level)


__all__ = ["configure_logging"]
