"""Outbound side of a client connection, as seen by sessions."""

from __future__ import annotations

from typing import Any, Protocol


class OutboundSink(Protocol):
    """Sends one JSON message to the client.

    Returns False (never raises) when the connection is already closed.
    """

    async def send(self, message: dict[str, Any]) -> bool: ...


__all__ = ["OutboundSink"]
