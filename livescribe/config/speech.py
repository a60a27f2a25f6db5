"""Google Cloud Speech-to-Text streaming configuration (defaults and env names)."""

from __future__ import annotations

ENV_SPEECH_ENCODING = "SPEECH_ENCODING"
ENV_SPEECH_SAMPLE_RATE_HZ = "SPEECH_SAMPLE_RATE_HZ"
ENV_SPEECH_LANGUAGE_CODE = "SPEECH_LANGUAGE_CODE"
ENV_SPEECH_MODEL = "SPEECH_MODEL"
ENV_SPEECH_STREAMING_LIMIT_S = "SPEECH_STREAMING_LIMIT_S"
ENV_SPEECH_RESTART_DELAY_S = "SPEECH_RESTART_DELAY_S"
ENV_SPEECH_MAX_QUEUED_CHUNKS = "SPEECH_MAX_QUEUED_CHUNKS"

# Browsers record webm/opus at 48kHz via MediaRecorder.
DEFAULT_SPEECH_ENCODING = "WEBM_OPUS"
DEFAULT_SPEECH_SAMPLE_RATE_HZ = 48000
DEFAULT_SPEECH_LANGUAGE_CODE = "en-US"
DEFAULT_SPEECH_MODEL = "latest_long"
SPEECH_AUTOMATIC_PUNCTUATION = True
SPEECH_INTERIM_RESULTS = True

# Google closes a streaming recognize call after ~305s. Restart ahead of it.
SPEECH_UPSTREAM_HARD_LIMIT_S = 305.0
DEFAULT_SPEECH_STREAMING_LIMIT_S = 290.0

# Give the upstream a moment to settle between close and reopen.
DEFAULT_SPEECH_RESTART_DELAY_S = 0.1

# Bounded per-channel audio buffer; the oldest chunk is dropped beyond this.
DEFAULT_SPEECH_MAX_QUEUED_CHUNKS = 200

# Substring (case-insensitive) of upstream errors caused by the duration ceiling.
SPEECH_TIMEOUT_ERROR_MARKER = "exceeded"

__all__ = [
    "DEFAULT_SPEECH_ENCODING",
    "DEFAULT_SPEECH_LANGUAGE_CODE",
    "DEFAULT_SPEECH_MAX_QUEUED_CHUNKS",
    "DEFAULT_SPEECH_MODEL",
    "DEFAULT_SPEECH_RESTART_DELAY_S",
    "DEFAULT_SPEECH_SAMPLE_RATE_HZ",
    "DEFAULT_SPEECH_STREAMING_LIMIT_S",
    "ENV_SPEECH_ENCODING",
    "ENV_SPEECH_LANGUAGE_CODE",
    "ENV_SPEECH_MAX_QUEUED_CHUNKS",
    "ENV_SPEECH_MODEL",
    "ENV_SPEECH_RESTART_DELAY_S",
    "ENV_SPEECH_SAMPLE_RATE_HZ",
    "ENV_SPEECH_STREAMING_LIMIT_S",
    "SPEECH_AUTOMATIC_PUNCTUATION",
    "SPEECH_INTERIM_RESULTS",
    "SPEECH_TIMEOUT_ERROR_MARKER",
    "SPEECH_UPSTREAM_HARD_LIMIT_S",
]
