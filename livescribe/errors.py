"""Shared error types for the transcription relay."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RateLimitError(Exception):
    """Raised when a sliding-window rate limiter is saturated."""

    retry_in: float
    limit: int
    window_seconds: float


class UpstreamUnavailableError(Exception):
    """An upstream service cannot be reached with the current configuration.

    The message is safe to show to the client (e.g. a missing API key).
    """


__all__ = ["RateLimitError", "UpstreamUnavailableError"]
