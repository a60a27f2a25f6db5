"""Admission control and rate limit configuration (defaults and env names)."""

from __future__ import annotations

ENV_MAX_CONCURRENT_CONNECTIONS = "MAX_CONCURRENT_CONNECTIONS"
ENV_AI_REQUEST_WINDOW_SECONDS = "AI_REQUEST_WINDOW_SECONDS"
ENV_AI_MAX_REQUESTS_PER_WINDOW = "AI_MAX_REQUESTS_PER_WINDOW"

DEFAULT_MAX_CONCURRENT_CONNECTIONS = 100

# AI answers are user-triggered (button press). Anything faster is a stuck client.
DEFAULT_AI_REQUEST_WINDOW_SECONDS = 60.0
DEFAULT_AI_MAX_REQUESTS_PER_WINDOW = 20

__all__ = [
    "DEFAULT_AI_MAX_REQUESTS_PER_WINDOW",
    "DEFAULT_AI_REQUEST_WINDOW_SECONDS",
    "DEFAULT_MAX_CONCURRENT_CONNECTIONS",
    "ENV_AI_MAX_REQUESTS_PER_WINDOW",
    "ENV_AI_REQUEST_WINDOW_SECONDS",
    "ENV_MAX_CONCURRENT_CONNECTIONS",
]
