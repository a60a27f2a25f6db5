"""Google Cloud Speech-to-Text streaming channel and its factory."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator

from google.api_core import exceptions as google_exceptions
from google.auth import exceptions as auth_exceptions
from google.cloud import speech_v1 as speech

from livescribe.errors import UpstreamUnavailableError
from livescribe.state.settings import SpeechSettings

from .events import ChannelEnd, ChannelError, SpeechEvent, TranscriptResult
from .audio_queue import AudioChunkQueue

logger = logging.getLogger(__name__)


def make_streaming_config(settings: SpeechSettings) -> speech.StreamingRecognitionConfig:
    config = speech.RecognitionConfig(
        encoding=speech.RecognitionConfig.AudioEncoding[settings.encoding],
        sample_rate_hertz=settings.sample_rate_hz,
        language_code=settings.language_code,
        enable_automatic_punctuation=settings.automatic_punctuation,
        model=settings.model,
    )
    return speech.StreamingRecognitionConfig(
        config=config,
        interim_results=settings.interim_results,
    )


def result_from_response(response: speech.StreamingRecognizeResponse) -> TranscriptResult | None:
    """Map the leading result of a response to a transcript event (None when empty)."""
    if not response.results:
        return None
    result = response.results[0]
    if not result.alternatives:
        return None
    alternative = result.alternatives[0]
    if not alternative.transcript:
        return None
    # The recognizer only scores final results; interim confidence is always 0.
    confidence = float(alternative.confidence) if result.is_final else None
    return TranscriptResult(text=alternative.transcript, is_final=bool(result.is_final), confidence=confidence)


class GoogleSpeechChannel:
    """One `streaming_recognize` call fed from a bounded audio queue."""

    def __init__(self, *, streaming_config: speech.StreamingRecognitionConfig, max_queued_chunks: int) -> None:
        self._streaming_config = streaming_config
        self._queue = AudioChunkQueue(max_chunks=max_queued_chunks)
        self._call: AsyncIterator[speech.StreamingRecognizeResponse] | None = None
        self._consumed = False

    @property
    def is_open(self) -> bool:
        return self._call is not None and not self._queue.closed

    @property
    def dropped_chunks(self) -> int:
        return self._queue.dropped_chunks

    async def connect(self, client: speech.SpeechAsyncClient) -> None:
        self._call = await client.streaming_recognize(requests=self._requests())

    async def _requests(self) -> AsyncIterator[speech.StreamingRecognizeRequest]:
        yield speech.StreamingRecognizeRequest(streaming_config=self._streaming_config)
        while True:
            chunk = await self._queue.get()
            if chunk is None:
                return
            yield speech.StreamingRecognizeRequest(audio_content=chunk)

    def write(self, chunk: bytes) -> bool:
        if not self.is_open:
            return False
        dropped = self._queue.offer(chunk)
        if dropped:
            logger.info("Speech stream buffer full, backpressure: dropped %d oldest chunk(s)", dropped)
        return True

    def close(self) -> None:
        """Half-close: the recognizer flushes pending results, then the call ends."""
        self._queue.close()

    async def events(self) -> AsyncIterator[SpeechEvent]:
        if self._call is None:
            raise RuntimeError("speech channel is not connected")
        if self._consumed:
            raise RuntimeError("speech channel events can only be consumed once")
        self._consumed = True

        try:
            async for response in self._call:
                result = result_from_response(response)
                if result is not None:
                    yield result
        except google_exceptions.GoogleAPICallError as exc:
            logger.warning("Recognition stream error: code=%s message=%s", exc.code, exc.message)
            yield ChannelError(message=str(exc.message or exc))
            return
        except Exception as exc:
            logger.warning("Recognition stream failed: %s", exc, exc_info=True)
            yield ChannelError(message=str(exc))
            return
        finally:
            self._queue.close()
        yield ChannelEnd()


class GoogleSpeechChannelFactory:
    """Opens speech channels with one fixed recognition config.

    The `SpeechAsyncClient` is created on first use and reused for the lifetime of
    the factory (one factory per process).
    """

    def __init__(self, settings: SpeechSettings) -> None:
        self._settings = settings
        self._streaming_config = make_streaming_config(settings)
        self._client: speech.SpeechAsyncClient | None = None

    def _ensure_client(self) -> speech.SpeechAsyncClient:
        if self._client is not None:
            return self._client

        credentials_path = self._settings.credentials_path
        try:
            if credentials_path is not None:
                client = speech.SpeechAsyncClient.from_service_account_file(str(credentials_path))
                logger.info("Google Cloud Speech client initialized with: %s", credentials_path)
            else:
                client = speech.SpeechAsyncClient()
                logger.info("Google Cloud Speech client initialized with default credentials")
        except (OSError, ValueError, auth_exceptions.GoogleAuthError) as exc:
            raise UpstreamUnavailableError(f"Google Cloud credentials unavailable: {exc}") from exc

        self._client = client
        return client

    async def open(self) -> GoogleSpeechChannel:
        client = self._ensure_client()
        channel = GoogleSpeechChannel(
            streaming_config=self._streaming_config,
            max_queued_chunks=self._settings.max_queued_chunks,
        )
        await channel.connect(client)
        logger.info("Recognition stream created")
        return channel

    async def aclose(self) -> None:
        if self._client is None:
            return
        client, self._client = self._client, None
        await client.transport.close()


__all__ = [
    "GoogleSpeechChannel",
    "GoogleSpeechChannelFactory",
    "make_streaming_config",
    "result_from_response",
]
