"""Bounded audio chunk queue feeding one streaming recognize call."""

from __future__ import annotations

import asyncio


class AudioChunkQueue(asyncio.Queue):
    """Never blocks producers: past `max_chunks` the oldest unsent chunk is dropped.

    `None` is the end-of-stream sentinel. It is always enqueued, even when the
    queue is at capacity, so a close is never lost to backpressure.
    """

    def __init__(self, *, max_chunks: int) -> None:
        super().__init__()
        self.max_chunks = max(1, int(max_chunks))
        self.dropped_chunks: int = 0
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def offer(self, chunk: bytes) -> int:
        """Enqueue `chunk`; return how many old chunks were dropped to make room."""
        if self._closed:
            raise RuntimeError("audio queue is closed")

        dropped = 0
        while self.qsize() >= self.max_chunks:
            try:
                self.get_nowait()
            except asyncio.QueueEmpty:
                break
            dropped += 1

        self.put_nowait(chunk)
        self.dropped_chunks += dropped
        return dropped

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self.put_nowait(None)


__all__ = ["AudioChunkQueue"]
