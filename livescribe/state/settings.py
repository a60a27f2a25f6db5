"""Runtime settings (dataclasses only)."""

from __future__ import annotations

from pathlib import Path
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SpeechSettings:
    credentials_path: Path | None
    encoding: str
    sample_rate_hz: int
    language_code: str
    model: str
    automatic_punctuation: bool
    interim_results: bool
    streaming_limit_s: float
    restart_delay_s: float
    max_queued_chunks: int


@dataclass(frozen=True, slots=True)
class GenerationSettings:
    api_key: str
    model: str
    temperature: float | None


@dataclass(frozen=True, slots=True)
class LimitsSettings:
    max_concurrent_connections: int
    ai_request_window_seconds: float
    ai_max_requests_per_window: int


@dataclass(frozen=True, slots=True)
class WebSocketSettings:
    idle_timeout_s: float
    watchdog_tick_s: float
    max_connection_duration_s: float


@dataclass(frozen=True, slots=True)
class AppSettings:
    speech: SpeechSettings
    generation: GenerationSettings
    limits: LimitsSettings
    websocket: WebSocketSettings


__all__ = [
    "AppSettings",
    "GenerationSettings",
    "LimitsSettings",
    "SpeechSettings",
    "WebSocketSettings",
]
