"""Client-facing send side of a WebSocket connection."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import orjson
from fastapi import WebSocket, WebSocketDisconnect
from starlette.websockets import WebSocketState

from livescribe.session.messages import error_message

logger = logging.getLogger(__name__)


class ClientConnection:
    """Serializes outbound messages for one client.

    Shared by the transcript and answer paths. Once the socket is closed (or a send
    fails) every further send is dropped and reported as False.
    """

    def __init__(self, ws: WebSocket) -> None:
        self._ws = ws
        self._lock = asyncio.Lock()
        self._closed = False
        self.sent_messages: int = 0

    @property
    def is_open(self) -> bool:
        if self._closed:
            return False
        return (
            self._ws.client_state == WebSocketState.CONNECTED
            and self._ws.application_state == WebSocketState.CONNECTED
        )

    def mark_closed(self) -> None:
        self._closed = True

    async def send(self, message: dict[str, Any]) -> bool:
        if not self.is_open:
            return False
        text = orjson.dumps(message).decode("utf-8")
        async with self._lock:
            if not self.is_open:
                return False
            try:
                await self._ws.send_text(text)
            except WebSocketDisconnect:
                self._closed = True
                return False
            except Exception:
                logger.debug("WebSocket send failed", exc_info=True)
                self._closed = True
                return False
        self.sent_messages += 1
        return True


async def reject_connection(ws: WebSocket, *, message: str, close_code: int) -> None:
    # Accept so we can send a structured error, then close.
    try:
        await ws.accept()
    except Exception:
        return
    await ClientConnection(ws).send(error_message(message))
    try:
        await ws.close(code=close_code, reason=message)
    except Exception:
        return


__all__ = ["ClientConnection", "reject_connection"]
