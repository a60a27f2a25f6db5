"""WebSocket protocol configuration and constants."""

from __future__ import annotations

import os

WS_ENDPOINT_PATH = "/api/transcribe"

# Message keys
WS_KEY_TYPE = "type"
WS_KEY_TEXT = "text"
WS_KEY_MESSAGE = "message"
WS_KEY_IS_FINAL = "isFinal"
WS_KEY_CONFIDENCE = "confidence"
WS_KEY_CONTEXT = "context"
WS_KEY_QUESTION = "question"
WS_KEY_KIND = "kind"
WS_KEY_DROPPED_CHUNKS = "droppedChunks"

# Inbound message types
WS_MSG_AI_REQUEST = "ai_request"

# Outbound message types
WS_MSG_TRANSCRIPT = "transcript"
WS_MSG_ERROR = "error"
WS_MSG_AI_CHUNK = "ai_chunk"
WS_MSG_AI_COMPLETE = "ai_complete"
WS_MSG_AI_ERROR = "ai_error"
WS_MSG_STATUS = "status"

WS_STATUS_OVERLOAD_DROP = "overload_drop"

# Close codes
WS_CLOSE_IDLE_CODE = 4000
WS_CLOSE_BUSY_CODE = 4002
WS_CLOSE_MAX_DURATION_CODE = 4003

WS_CLOSE_IDLE_REASON = "idle timeout"
WS_CLOSE_MAX_DURATION_REASON = "max connection duration"

# Idle watchdog (0 disables the check). A paused recording keeps the socket quiet,
# so idle closing is opt-in.
DEFAULT_WS_IDLE_TIMEOUT_S = 0.0
DEFAULT_WS_WATCHDOG_TICK_S = 5.0
DEFAULT_WS_MAX_CONNECTION_DURATION_S = 0.0

ENV_WS_IDLE_TIMEOUT_S = "WS_IDLE_TIMEOUT_S"
ENV_WS_WATCHDOG_TICK_S = "WS_WATCHDOG_TICK_S"
ENV_WS_MAX_CONNECTION_DURATION_S = "WS_MAX_CONNECTION_DURATION_S"

# Client-facing messages
WS_ERROR_SERVER_AT_CAPACITY = "Server cannot accept new connections. Please try again later."
WS_ERROR_AI_BUSY = "An AI request is already in progress"
WS_ERROR_START_FAILED_PREFIX = "Failed to start transcription: "

__all__ = [
    "DEFAULT_WS_IDLE_TIMEOUT_S",
    "DEFAULT_WS_MAX_CONNECTION_DURATION_S",
    "DEFAULT_WS_WATCHDOG_TICK_S",
    "ENV_WS_IDLE_TIMEOUT_S",
    "ENV_WS_MAX_CONNECTION_DURATION_S",
    "ENV_WS_WATCHDOG_TICK_S",
    "WS_CLOSE_BUSY_CODE",
    "WS_CLOSE_IDLE_CODE",
    "WS_CLOSE_IDLE_REASON",
    "WS_CLOSE_MAX_DURATION_CODE",
    "WS_CLOSE_MAX_DURATION_REASON",
    "WS_ENDPOINT_PATH",
    "WS_ERROR_AI_BUSY",
    "WS_ERROR_SERVER_AT_CAPACITY",
    "WS_ERROR_START_FAILED_PREFIX",
    "WS_KEY_CONFIDENCE",
    "WS_KEY_CONTEXT",
    "WS_KEY_DROPPED_CHUNKS",
    "WS_KEY_IS_FINAL",
    "WS_KEY_KIND",
    "WS_KEY_MESSAGE",
    "WS_KEY_QUESTION",
    "WS_KEY_TEXT",
    "WS_KEY_TYPE",
    "WS_MSG_AI_CHUNK",
    "WS_MSG_AI_COMPLETE",
    "WS_MSG_AI_ERROR",
    "WS_MSG_AI_REQUEST",
    "WS_MSG_ERROR",
    "WS_MSG_STATUS",
    "WS_MSG_TRANSCRIPT",
    "WS_STATUS_OVERLOAD_DROP",
]
