"""Gemini streaming answer generation."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator

import google.generativeai as genai

from livescribe.errors import UpstreamUnavailableError
from livescribe.config.secrets import ENV_GOOGLE_API_KEY
from livescribe.state.settings import GenerationSettings

logger = logging.getLogger(__name__)


def chunk_text(chunk: genai.types.GenerateContentResponse) -> str:
    try:
        return chunk.text or ""
    except ValueError:
        # Chunks without parts (finish markers, blocked content) have no text accessor.
        logger.debug("Gemini chunk without text parts: %s", getattr(chunk, "candidates", None))
        return ""


class GeminiGenerationChannelFactory:
    """Streams Gemini responses for (system, user) prompt pairs.

    `genai.configure` is applied on the first request and kept for the lifetime of
    the factory (one factory per process).
    """

    def __init__(self, settings: GenerationSettings) -> None:
        self._settings = settings
        self._configured = False

    def _ensure_configured(self) -> None:
        if self._configured:
            return
        if not self._settings.api_key:
            raise UpstreamUnavailableError(f"{ENV_GOOGLE_API_KEY} not set in environment")
        genai.configure(api_key=self._settings.api_key)
        self._configured = True
        logger.info("Gemini AI client initialized with model: %s", self._settings.model)

    def _generation_config(self) -> genai.types.GenerationConfig | None:
        if self._settings.temperature is None:
            return None
        return genai.types.GenerationConfig(temperature=self._settings.temperature)

    async def stream(self, system_prompt: str, user_prompt: str) -> AsyncIterator[str]:
        self._ensure_configured()
        model = genai.GenerativeModel(
            self._settings.model,
            system_instruction=system_prompt,
            generation_config=self._generation_config(),
        )
        response = await model.generate_content_async(user_prompt, stream=True)
        async for chunk in response:
            text = chunk_text(chunk)
            if text:
                yield text

    async def aclose(self) -> None:
        return None


__all__ = ["GeminiGenerationChannelFactory", "chunk_text"]
