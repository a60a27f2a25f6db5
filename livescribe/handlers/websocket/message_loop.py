"""WebSocket receive loop: audio frames to the session, answer requests to the dispatcher."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from fastapi import WebSocket

from livescribe.session.transcription import TranscriptionSession

from .answers import AnswerDispatcher
from .lifecycle import WebSocketLifecycle
from .parser import AnswerRequest, classify_frame

logger = logging.getLogger(__name__)


async def _receive_with_watchdog(ws: WebSocket, lifecycle: WebSocketLifecycle) -> tuple[dict[str, Any] | None, bool]:
    timeout = lifecycle.poll_interval_s
    if timeout is None:
        return await ws.receive(), False
    try:
        message = await asyncio.wait_for(ws.receive(), timeout=timeout)
        return message, False
    except TimeoutError:
        return None, lifecycle.should_close()


async def run_message_loop(
    ws: WebSocket,
    lifecycle: WebSocketLifecycle,
    session: TranscriptionSession,
    answers: AnswerDispatcher,
) -> None:
    first_audio_logged = False

    while True:
        message, should_exit = await _receive_with_watchdog(ws, lifecycle)
        if should_exit:
            return
        if message is None:
            continue

        if message.get("type") == "websocket.disconnect":
            logger.info("WebSocket client disconnected (code=%s)", message.get("code"))
            return

        lifecycle.touch()

        frame = classify_frame(message)
        if frame is None:
            logger.debug("Ignoring inbound text frame that is not an ai_request")
            continue

        if isinstance(frame, AnswerRequest):
            await answers.submit(frame)
            continue

        if not first_audio_logged:
            logger.info("First audio chunk received: %d bytes", len(frame.data))
            first_audio_logged = True
        await session.process_audio(frame.data)


__all__ = ["run_message_loop"]
