"""WebSocket connection admission control."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

logger = logging.getLogger(__name__)


class ConnectionManager:
    """Caps concurrently served client connections (one session each)."""

    def __init__(self, *, max_connections: int) -> None:
        self.max_connections = max(1, int(max_connections))
        self._lock = asyncio.Lock()
        self._active: set[int] = set()

    async def connect(self, ws: Any) -> bool:
        """Reserve a slot for `ws` (before accepting it); False when at capacity."""
        async with self._lock:
            if len(self._active) >= self.max_connections:
                logger.warning("Rejecting connection: %d/%d slots in use", len(self._active), self.max_connections)
                return False
            self._active.add(id(ws))
            return True

    async def disconnect(self, ws: Any) -> None:
        async with self._lock:
            self._active.discard(id(ws))

    def get_connection_count(self) -> int:
        return len(self._active)


__all__ = ["ConnectionManager"]
