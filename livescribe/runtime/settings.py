"""Environment parsing for runtime settings.

Defaults and env variable names live in `livescribe/config/*`; this module
resolves them into the frozen dataclasses the rest of the server consumes.
Malformed numeric values fall back to their defaults.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

from livescribe.config.server import DOTENV_FILES
from livescribe.config.secrets import get_google_api_key, get_credentials_path
from livescribe.state.settings import (
    AppSettings,
    LimitsSettings,
    SpeechSettings,
    WebSocketSettings,
    GenerationSettings,
)
from livescribe.config.generation import ENV_GEMINI_MODEL, DEFAULT_GEMINI_MODEL, ENV_GEMINI_TEMPERATURE
from livescribe.config.websocket import (
    ENV_WS_IDLE_TIMEOUT_S,
    ENV_WS_WATCHDOG_TICK_S,
    DEFAULT_WS_IDLE_TIMEOUT_S,
    DEFAULT_WS_WATCHDOG_TICK_S,
    ENV_WS_MAX_CONNECTION_DURATION_S,
    DEFAULT_WS_MAX_CONNECTION_DURATION_S,
)
from livescribe.config.limits import (
    ENV_AI_REQUEST_WINDOW_SECONDS,
    ENV_MAX_CONCURRENT_CONNECTIONS,
    ENV_AI_MAX_REQUESTS_PER_WINDOW,
    DEFAULT_AI_REQUEST_WINDOW_SECONDS,
    DEFAULT_MAX_CONCURRENT_CONNECTIONS,
    DEFAULT_AI_MAX_REQUESTS_PER_WINDOW,
)
from livescribe.config.speech import (
    ENV_SPEECH_MODEL,
    DEFAULT_SPEECH_MODEL,
    ENV_SPEECH_ENCODING,
    DEFAULT_SPEECH_ENCODING,
    SPEECH_INTERIM_RESULTS,
    ENV_SPEECH_LANGUAGE_CODE,
    ENV_SPEECH_SAMPLE_RATE_HZ,
    ENV_SPEECH_RESTART_DELAY_S,
    DEFAULT_SPEECH_LANGUAGE_CODE,
    ENV_SPEECH_MAX_QUEUED_CHUNKS,
    ENV_SPEECH_STREAMING_LIMIT_S,
    SPEECH_AUTOMATIC_PUNCTUATION,
    SPEECH_UPSTREAM_HARD_LIMIT_S,
    DEFAULT_SPEECH_SAMPLE_RATE_HZ,
    DEFAULT_SPEECH_RESTART_DELAY_S,
    DEFAULT_SPEECH_MAX_QUEUED_CHUNKS,
    DEFAULT_SPEECH_STREAMING_LIMIT_S,
)


def load_env_files(directory: Path | None = None) -> None:
    base = directory or Path.cwd()
    for name in DOTENV_FILES:
        path = base / name
        if path.is_file():
            load_dotenv(path, override=False)


def _str_env(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    v = raw.strip()
    return v if v else default


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _optional_float_env(name: str) -> float | None:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        return None


def _validate_streaming_limit(limit_s: float) -> float:
    if limit_s <= 0 or limit_s >= SPEECH_UPSTREAM_HARD_LIMIT_S:
        raise ValueError(
            f"{ENV_SPEECH_STREAMING_LIMIT_S} must be positive and below the upstream limit of"
            f" {SPEECH_UPSTREAM_HARD_LIMIT_S:.0f}s"
        )
    return limit_s


def _load_speech_settings() -> SpeechSettings:
    streaming_limit = _validate_streaming_limit(
        _float_env(ENV_SPEECH_STREAMING_LIMIT_S, DEFAULT_SPEECH_STREAMING_LIMIT_S)
    )
    return SpeechSettings(
        credentials_path=get_credentials_path(),
        encoding=_str_env(ENV_SPEECH_ENCODING, DEFAULT_SPEECH_ENCODING).upper(),
        sample_rate_hz=_int_env(ENV_SPEECH_SAMPLE_RATE_HZ, DEFAULT_SPEECH_SAMPLE_RATE_HZ),
        language_code=_str_env(ENV_SPEECH_LANGUAGE_CODE, DEFAULT_SPEECH_LANGUAGE_CODE),
        model=_str_env(ENV_SPEECH_MODEL, DEFAULT_SPEECH_MODEL),
        automatic_punctuation=SPEECH_AUTOMATIC_PUNCTUATION,
        interim_results=SPEECH_INTERIM_RESULTS,
        streaming_limit_s=streaming_limit,
        restart_delay_s=max(0.0, _float_env(ENV_SPEECH_RESTART_DELAY_S, DEFAULT_SPEECH_RESTART_DELAY_S)),
        max_queued_chunks=max(1, _int_env(ENV_SPEECH_MAX_QUEUED_CHUNKS, DEFAULT_SPEECH_MAX_QUEUED_CHUNKS)),
    )


def _load_generation_settings() -> GenerationSettings:
    return GenerationSettings(
        api_key=get_google_api_key(),
        model=_str_env(ENV_GEMINI_MODEL, DEFAULT_GEMINI_MODEL),
        temperature=_optional_float_env(ENV_GEMINI_TEMPERATURE),
    )


def _load_limits_settings() -> LimitsSettings:
    return LimitsSettings(
        max_concurrent_connections=max(
            1, _int_env(ENV_MAX_CONCURRENT_CONNECTIONS, DEFAULT_MAX_CONCURRENT_CONNECTIONS)
        ),
        ai_request_window_seconds=_float_env(ENV_AI_REQUEST_WINDOW_SECONDS, DEFAULT_AI_REQUEST_WINDOW_SECONDS),
        ai_max_requests_per_window=_int_env(ENV_AI_MAX_REQUESTS_PER_WINDOW, DEFAULT_AI_MAX_REQUESTS_PER_WINDOW),
    )


def _load_websocket_settings() -> WebSocketSettings:
    return WebSocketSettings(
        idle_timeout_s=_float_env(ENV_WS_IDLE_TIMEOUT_S, DEFAULT_WS_IDLE_TIMEOUT_S),
        watchdog_tick_s=_float_env(ENV_WS_WATCHDOG_TICK_S, DEFAULT_WS_WATCHDOG_TICK_S),
        max_connection_duration_s=_float_env(ENV_WS_MAX_CONNECTION_DURATION_S, DEFAULT_WS_MAX_CONNECTION_DURATION_S),
    )


def load_settings() -> AppSettings:
    return AppSettings(
        speech=_load_speech_settings(),
        generation=_load_generation_settings(),
        limits=_load_limits_settings(),
        websocket=_load_websocket_settings(),
    )


__all__ = ["load_env_files", "load_settings"]
