from __future__ import annotations

import pytest

from livescribe.handlers.websocket.outbound import ClientConnection, reject_connection
from tests.utils.fakes import FakeWebSocket


@pytest.mark.asyncio
async def test_send_serializes_json() -> None:
    ws = FakeWebSocket()
    await ws.accept()
    conn = ClientConnection(ws)

    assert await conn.send({"type": "transcript", "text": "hi", "isFinal": True})
    assert ws.sent == [{"type": "transcript", "text": "hi", "isFinal": True}]
    assert conn.sent_messages == 1


@pytest.mark.asyncio
async def test_send_before_accept_is_dropped() -> None:
    ws = FakeWebSocket()
    conn = ClientConnection(ws)

    assert not await conn.send({"type": "ai_complete"})
    assert ws.sent == []


@pytest.mark.asyncio
async def test_send_after_mark_closed_is_dropped() -> None:
    ws = FakeWebSocket()
    await ws.accept()
    conn = ClientConnection(ws)
    conn.mark_closed()

    assert not conn.is_open
    assert not await conn.send({"type": "ai_complete"})
    assert ws.sent == []


@pytest.mark.asyncio
async def test_failed_send_closes_connection() -> None:
    ws = FakeWebSocket()
    await ws.accept()
    conn = ClientConnection(ws)
    ws.fail_sends = True

    assert not await conn.send({"type": "ai_complete"})
    ws.fail_sends = False
    assert not await conn.send({"type": "ai_complete"})
    assert ws.sent == []


@pytest.mark.asyncio
async def test_reject_connection_sends_error_and_closes() -> None:
    ws = FakeWebSocket()

    await reject_connection(ws, message="full", close_code=4002)

    assert ws.accepted
    assert ws.sent == [{"type": "error", "message": "full"}]
    assert ws.close_code == 4002
