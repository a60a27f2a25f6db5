"""Runtime dependency construction (upstream factories + admission control)."""

from __future__ import annotations

import logging

from livescribe.state import RuntimeDeps
from livescribe.state.settings import AppSettings
from livescribe.handlers.connections import ConnectionManager
from livescribe.upstream.speech import GoogleSpeechChannelFactory
from livescribe.upstream.generation import GeminiGenerationChannelFactory

from .settings import load_settings

logger = logging.getLogger(__name__)


async def build_runtime_deps(settings: AppSettings | None = None) -> RuntimeDeps:
    """Build the process-lifetime collaborators.

    The speech and generation factories are the only owners of their Google
    clients; every connection receives them through `RuntimeDeps`.
    """
    settings = settings or load_settings()

    speech_factory = GoogleSpeechChannelFactory(settings.speech)
    generation_factory = GeminiGenerationChannelFactory(settings.generation)
    if not settings.generation.api_key:
        logger.warning("GOOGLE_API_KEY is not set; AI answers will fail until it is configured")

    connections = ConnectionManager(max_connections=settings.limits.max_concurrent_connections)

    logger.info(
        "speech: encoding=%s rate=%d language=%s model=%s restart_every=%.0fs",
        settings.speech.encoding,
        settings.speech.sample_rate_hz,
        settings.speech.language_code,
        settings.speech.model,
        settings.speech.streaming_limit_s,
    )

    return RuntimeDeps(
        connections=connections,
        speech_factory=speech_factory,
        generation_factory=generation_factory,
        settings=settings,
    )


__all__ = ["RuntimeDeps", "build_runtime_deps"]
