"""HTTP server configuration (defaults and env names)."""

from __future__ import annotations

ENV_HOST = "HOST"
ENV_PORT = "PORT"

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000

# Loaded in order; values already present in the environment win.
DOTENV_FILES: tuple[str, ...] = (".env.local", ".env")

__all__ = ["DEFAULT_HOST", "DEFAULT_PORT", "DOTENV_FILES", "ENV_HOST", "ENV_PORT"]
