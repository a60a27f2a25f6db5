"""Secrets and credential configuration."""

from __future__ import annotations

import os
from pathlib import Path

ENV_GOOGLE_API_KEY = "GOOGLE_API_KEY"
ENV_GOOGLE_APPLICATION_CREDENTIALS = "GOOGLE_APPLICATION_CREDENTIALS"


def get_google_api_key() -> str:
    return (os.getenv(ENV_GOOGLE_API_KEY) or "").strip()


def get_credentials_path() -> Path | None:
    """Service-account key file for Speech-to-Text, or None for default credentials."""
    raw = (os.getenv(ENV_GOOGLE_APPLICATION_CREDENTIALS) or "").strip()
    if not raw:
        return None
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = Path.cwd() / path
    return path


__all__ = [
    "ENV_GOOGLE_API_KEY",
    "ENV_GOOGLE_APPLICATION_CREDENTIALS",
    "get_credentials_path",
    "get_google_api_key",
]
