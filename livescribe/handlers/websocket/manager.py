"""Primary WebSocket connection handler orchestration."""

from __future__ import annotations

import logging
import contextlib

from fastapi import WebSocket

from livescribe.state import RuntimeDeps
from livescribe.handlers.limits import SlidingWindowRateLimiter
from livescribe.session.transcription import TranscriptionSession
from livescribe.config.websocket import WS_CLOSE_BUSY_CODE, WS_ERROR_SERVER_AT_CAPACITY

from .answers import AnswerDispatcher
from .lifecycle import WebSocketLifecycle
from .message_loop import run_message_loop
from .outbound import ClientConnection, reject_connection

logger = logging.getLogger(__name__)


async def _admit_connection(ws: WebSocket, runtime_deps: RuntimeDeps) -> bool:
    if not await runtime_deps.connections.connect(ws):
        await reject_connection(ws, message=WS_ERROR_SERVER_AT_CAPACITY, close_code=WS_CLOSE_BUSY_CODE)
        return False

    try:
        await ws.accept()
    except Exception:
        with contextlib.suppress(Exception):
            await runtime_deps.connections.disconnect(ws)
        raise
    return True


def _create_session(outbound: ClientConnection, runtime_deps: RuntimeDeps) -> TranscriptionSession:
    speech = runtime_deps.settings.speech
    return TranscriptionSession(
        outbound,
        runtime_deps.speech_factory,
        streaming_limit_s=speech.streaming_limit_s,
        restart_delay_s=speech.restart_delay_s,
    )


def _create_answer_dispatcher(outbound: ClientConnection, runtime_deps: RuntimeDeps) -> AnswerDispatcher:
    limits = runtime_deps.settings.limits
    limiter = SlidingWindowRateLimiter(
        limit=limits.ai_max_requests_per_window,
        window_seconds=limits.ai_request_window_seconds,
    )
    return AnswerDispatcher(outbound, runtime_deps.generation_factory, limiter=limiter)


async def handle_websocket_connection(ws: WebSocket, runtime_deps: RuntimeDeps) -> None:
    if not await _admit_connection(ws, runtime_deps):
        return

    logger.info("WebSocket client connected. Active: %s", runtime_deps.connections.get_connection_count())

    outbound = ClientConnection(ws)
    session = _create_session(outbound, runtime_deps)
    answers = _create_answer_dispatcher(outbound, runtime_deps)
    lifecycle = WebSocketLifecycle(
        ws,
        idle_timeout_s=runtime_deps.settings.websocket.idle_timeout_s,
        watchdog_tick_s=runtime_deps.settings.websocket.watchdog_tick_s,
        max_connection_duration_s=runtime_deps.settings.websocket.max_connection_duration_s,
    )
    try:
        lifecycle.start()
        await session.start()
        await run_message_loop(ws, lifecycle, session, answers)
    except Exception:
        logger.exception("WebSocket error")
    finally:
        outbound.mark_closed()
        with contextlib.suppress(Exception):
            await lifecycle.stop()
        with contextlib.suppress(Exception):
            await answers.cancel()
        with contextlib.suppress(Exception):
            await session.stop()
        with contextlib.suppress(Exception):
            await runtime_deps.connections.disconnect(ws)
        logger.info(
            "WebSocket connection closed (sent=%d). Active: %s",
            outbound.sent_messages,
            runtime_deps.connections.get_connection_count(),
        )


__all__ = ["handle_websocket_connection"]
