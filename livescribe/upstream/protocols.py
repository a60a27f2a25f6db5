"""Structural interfaces for the upstream speech and generation services."""

from __future__ import annotations

from typing import Protocol
from collections.abc import AsyncIterator

from .events import SpeechEvent


class SpeechChannel(Protocol):
    """One bounded-duration streaming recognition call.

    `events()` may be iterated once; it yields transcript results and finishes with
    a single `ChannelError` or `ChannelEnd`.
    """

    @property
    def is_open(self) -> bool: ...

    @property
    def dropped_chunks(self) -> int: ...

    def write(self, chunk: bytes) -> bool: ...

    def close(self) -> None: ...

    def events(self) -> AsyncIterator[SpeechEvent]: ...


class SpeechChannelFactory(Protocol):
    async def open(self) -> SpeechChannel: ...

    async def aclose(self) -> None: ...


class GenerationChannelFactory(Protocol):
    def stream(self, system_prompt: str, user_prompt: str) -> AsyncIterator[str]: ...

    async def aclose(self) -> None: ...


__all__ = ["GenerationChannelFactory", "SpeechChannel", "SpeechChannelFactory"]
