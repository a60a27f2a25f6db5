"""Typed runtime state objects for dependency wiring."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from livescribe.state.settings import AppSettings
    from livescribe.handlers.connections import ConnectionManager
    from livescribe.upstream.protocols import SpeechChannelFactory, GenerationChannelFactory


@dataclass(slots=True)
class RuntimeDeps:
    """Process-lifetime collaborators shared by every connection.

    The upstream factories are built once at startup and own their SDK clients.
    """

    connections: ConnectionManager
    speech_factory: SpeechChannelFactory
    generation_factory: GenerationChannelFactory
    settings: AppSettings

    async def shutdown(self) -> None:
        for factory in (self.speech_factory, self.generation_factory):
            try:
                await factory.aclose()
            except Exception:
                logger.exception("runtime shutdown failed for %s", type(factory).__name__)


__all__ = ["RuntimeDeps"]
