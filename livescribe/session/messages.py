"""Outbound client message builders."""

from __future__ import annotations

from typing import Any

from livescribe.upstream.events import TranscriptResult
from livescribe.config.websocket import (
    WS_KEY_KIND,
    WS_KEY_TEXT,
    WS_KEY_TYPE,
    WS_MSG_ERROR,
    WS_KEY_MESSAGE,
    WS_MSG_STATUS,
    WS_KEY_IS_FINAL,
    WS_MSG_AI_CHUNK,
    WS_MSG_AI_ERROR,
    WS_KEY_CONFIDENCE,
    WS_MSG_TRANSCRIPT,
    WS_MSG_AI_COMPLETE,
    WS_KEY_DROPPED_CHUNKS,
    WS_STATUS_OVERLOAD_DROP,
)


def transcript_message(result: TranscriptResult) -> dict[str, Any]:
    message: dict[str, Any] = {
        WS_KEY_TYPE: WS_MSG_TRANSCRIPT,
        WS_KEY_TEXT: result.text,
        WS_KEY_IS_FINAL: result.is_final,
    }
    if result.confidence is not None:
        message[WS_KEY_CONFIDENCE] = result.confidence
    return message


def error_message(message: str) -> dict[str, Any]:
    return {WS_KEY_TYPE: WS_MSG_ERROR, WS_KEY_MESSAGE: message}


def ai_chunk_message(text: str) -> dict[str, Any]:
    return {WS_KEY_TYPE: WS_MSG_AI_CHUNK, WS_KEY_TEXT: text}


def ai_complete_message() -> dict[str, Any]:
    return {WS_KEY_TYPE: WS_MSG_AI_COMPLETE}


def ai_error_message(message: str) -> dict[str, Any]:
    return {WS_KEY_TYPE: WS_MSG_AI_ERROR, WS_KEY_MESSAGE: message}


def overload_drop_message(dropped_chunks: int) -> dict[str, Any]:
    return {
        WS_KEY_TYPE: WS_MSG_STATUS,
        WS_KEY_KIND: WS_STATUS_OVERLOAD_DROP,
        WS_KEY_DROPPED_CHUNKS: int(dropped_chunks),
    }


__all__ = [
    "ai_chunk_message",
    "ai_complete_message",
    "ai_error_message",
    "error_message",
    "overload_drop_message",
    "transcript_message",
]
