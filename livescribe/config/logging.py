"""Logging configuration (env names and defaults; values are read when logging is configured)."""

from __future__ import annotations

ENV_LOG_LEVEL = "LOG_LEVEL"
ENV_SHOW_UPSTREAM_LOGS = "SHOW_UPSTREAM_LOGS"

DEFAULT_LOG_LEVEL = "INFO"
LOG_FORMAT: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# gRPC and google-auth are chatty at DEBUG/INFO. Keep them tame unless explicitly enabled.
UPSTREAM_LOGGERS: tuple[str, ...] = ("grpc", "google", "google.auth", "urllib3")

# Audio chunk logging cadence: the first few chunks, then every Nth.
AUDIO_LOG_FIRST_CHUNKS: int = 5
AUDIO_LOG_EVERY_N_CHUNKS: int = 20

__all__ = [
    "AUDIO_LOG_EVERY_N_CHUNKS",
    "AUDIO_LOG_FIRST_CHUNKS",
    "DEFAULT_LOG_LEVEL",
    "ENV_LOG_LEVEL",
    "ENV_SHOW_UPSTREAM_LOGS",
    "LOG_FORMAT",
    "UPSTREAM_LOGGERS",
]
