"""Inbound frame classification: raw audio vs AI answer requests."""

from __future__ import annotations

from typing import Any
from dataclasses import dataclass

import orjson

from livescribe.config.websocket import WS_KEY_TYPE, WS_KEY_CONTEXT, WS_KEY_QUESTION, WS_MSG_AI_REQUEST


@dataclass(frozen=True, slots=True)
class AudioChunk:
    data: bytes


@dataclass(frozen=True, slots=True)
class AnswerRequest:
    context: str
    question: str | None = None


InboundFrame = AudioChunk | AnswerRequest


def parse_answer_request(raw: str | bytes) -> AnswerRequest | None:
    """Parse an `ai_request` JSON object; None for anything else."""
    try:
        msg = orjson.loads(raw)
    except orjson.JSONDecodeError:
        return None

    if not isinstance(msg, dict) or msg.get(WS_KEY_TYPE) != WS_MSG_AI_REQUEST:
        return None

    context = msg.get(WS_KEY_CONTEXT)
    if context is None:
        context = ""
    if not isinstance(context, str):
        return None

    question = msg.get(WS_KEY_QUESTION)
    if not isinstance(question, str) or not question:
        question = None
    return AnswerRequest(context=context, question=question)


def classify_frame(message: dict[str, Any]) -> InboundFrame | None:
    """Classify one ASGI `websocket.receive` message.

    Binary frames are audio unless they hold an `ai_request` JSON object. Text
    frames are answer requests or ignored (None); text is never forwarded as audio.
    """
    data = message.get("bytes")
    if data is not None:
        if not data:
            return None
        if data[:1] == b"{":
            request = parse_answer_request(data)
            if request is not None:
                return request
        return AudioChunk(data=bytes(data))

    text = message.get("text")
    if text is None:
        return None
    return parse_answer_request(text)


__all__ = ["AnswerRequest", "AudioChunk", "InboundFrame", "classify_frame", "parse_answer_request"]
