"""Per-connection transcription session: owns the speech channel and its restarts."""

from __future__ import annotations

import asyncio
import logging
import contextlib

from livescribe.upstream.protocols import SpeechChannel, SpeechChannelFactory
from livescribe.upstream.events import ChannelEnd, ChannelError, TranscriptResult
from livescribe.config.websocket import WS_ERROR_START_FAILED_PREFIX
from livescribe.config.speech import (
    SPEECH_TIMEOUT_ERROR_MARKER,
    DEFAULT_SPEECH_RESTART_DELAY_S,
    DEFAULT_SPEECH_STREAMING_LIMIT_S,
)
from livescribe.config.logging import AUDIO_LOG_FIRST_CHUNKS, AUDIO_LOG_EVERY_N_CHUNKS

from .sink import OutboundSink
from .state import SessionState
from .messages import error_message, transcript_message, overload_drop_message

logger = logging.getLogger(__name__)


def is_timeout_error(message: str) -> bool:
    """True for upstream errors caused by the recognizer's stream duration ceiling."""
    return SPEECH_TIMEOUT_ERROR_MARKER in (message or "").lower()


class TranscriptionSession:
    """Relays one client's audio into a chain of bounded-duration speech channels.

    Exactly one channel serves audio while STREAMING. A channel is retired (closed
    and dropped) before its replacement is opened, and only the current channel's
    end/error can trigger a restart. `restart_stream` is a no-op outside STREAMING,
    which collapses concurrent triggers (deadline, error, end) into one restart.
    """

    def __init__(
        self,
        outbound: OutboundSink,
        speech_factory: SpeechChannelFactory,
        *,
        streaming_limit_s: float = DEFAULT_SPEECH_STREAMING_LIMIT_S,
        restart_delay_s: float = DEFAULT_SPEECH_RESTART_DELAY_S,
    ) -> None:
        self._outbound = outbound
        self._speech_factory = speech_factory
        self._streaming_limit_s = float(streaming_limit_s)
        self._restart_delay_s = max(0.0, float(restart_delay_s))

        self._state = SessionState.IDLE
        self._channel: SpeechChannel | None = None
        self._deadline_task: asyncio.Task | None = None
        self._reopen_task: asyncio.Task | None = None
        self._consumers: set[asyncio.Task] = set()
        self._drop_reported_for: SpeechChannel | None = None

        self.audio_chunk_count: int = 0
        self.channels_opened: int = 0

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def active(self) -> bool:
        return self._state not in {SessionState.IDLE, SessionState.STOPPED}

    @property
    def channel(self) -> SpeechChannel | None:
        return self._channel

    async def start(self) -> None:
        if self._state is not SessionState.IDLE:
            return
        await self._open_channel()

    async def process_audio(self, chunk: bytes) -> bool:
        channel = self._channel
        if self._state is not SessionState.STREAMING or channel is None:
            logger.debug("Cannot process audio: stream not active (state=%s)", self._state.value)
            return False

        self.audio_chunk_count += 1
        count = self.audio_chunk_count
        if count <= AUDIO_LOG_FIRST_CHUNKS or count % AUDIO_LOG_EVERY_N_CHUNKS == 0:
            logger.info("Audio chunk #%d: %d bytes", count, len(chunk))

        if not channel.write(chunk):
            logger.debug("Speech channel refused audio chunk #%d", count)
            return False

        if channel.dropped_chunks and self._drop_reported_for is not channel:
            self._drop_reported_for = channel
            await self._outbound.send(overload_drop_message(channel.dropped_chunks))
        return True

    def restart_stream(self) -> bool:
        """Retire the current channel and schedule a replacement; False if nothing to restart."""
        if self._state is not SessionState.STREAMING:
            return False

        self._state = SessionState.RESTARTING
        self._cancel_deadline()
        self._retire_channel()
        self._reopen_task = asyncio.create_task(self._reopen_after_delay())
        return True

    async def stop(self) -> None:
        if self._state is SessionState.STOPPED:
            return
        self._state = SessionState.STOPPED

        self._cancel_deadline()
        self._retire_channel()

        pending = [t for t in (self._reopen_task, *self._consumers) if t is not None]
        self._reopen_task = None
        self._consumers.clear()
        current = asyncio.current_task()
        for task in pending:
            if task is current:
                continue
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError, Exception):
                await task
        logger.info(
            "Transcription session stopped (channels_opened=%d audio_chunks=%d)",
            self.channels_opened,
            self.audio_chunk_count,
        )

    async def _open_channel(self) -> None:
        self._state = SessionState.STARTING
        try:
            channel = await self._speech_factory.open()
        except Exception as exc:
            logger.error("Failed to create recognition stream: %s", exc)
            if self._state is not SessionState.STARTING:
                return
            # No automatic retry: the client sees one error and may reconnect.
            self._state = SessionState.STOPPED
            await self._outbound.send(error_message(f"{WS_ERROR_START_FAILED_PREFIX}{exc}"))
            return

        if self._state is not SessionState.STARTING:
            # Stopped while the upstream call was being opened.
            channel.close()
            return

        self._channel = channel
        self._state = SessionState.STREAMING
        self.channels_opened += 1

        consumer = asyncio.create_task(self._consume(channel))
        self._consumers.add(consumer)
        consumer.add_done_callback(self._consumers.discard)

        if self._streaming_limit_s > 0:
            self._deadline_task = asyncio.create_task(self._deadline_elapsed(channel))

    async def _reopen_after_delay(self) -> None:
        await asyncio.sleep(self._restart_delay_s)
        if self._state is not SessionState.RESTARTING:
            return
        await self._open_channel()

    async def _deadline_elapsed(self, channel: SpeechChannel) -> None:
        await asyncio.sleep(self._streaming_limit_s)
        if channel is self._channel:
            logger.info("Restarting stream due to time limit")
            self.restart_stream()

    async def _consume(self, channel: SpeechChannel) -> None:
        try:
            async for event in channel.events():
                if isinstance(event, TranscriptResult):
                    await self._outbound.send(transcript_message(event))
                elif isinstance(event, ChannelError):
                    await self._on_channel_error(channel, event.message)
                elif isinstance(event, ChannelEnd):
                    self._on_channel_end(channel)
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            logger.exception("speech channel consumer failed")
            await self._on_channel_error(channel, str(exc))

    async def _on_channel_error(self, channel: SpeechChannel, message: str) -> None:
        if channel is not self._channel:
            logger.info("Ignoring error from retired recognition stream: %s", message)
            return

        if is_timeout_error(message):
            logger.info("Recognition stream reached its duration limit; restarting")
        else:
            logger.warning("Recognition stream error: %s", message)
            await self._outbound.send(error_message(message))

        # The send above may have yielded to a restart that already replaced the channel.
        if channel is self._channel:
            self.restart_stream()

    def _on_channel_end(self, channel: SpeechChannel) -> None:
        if channel is not self._channel:
            logger.debug("Retired recognition stream ended")
            return
        logger.info("Recognition stream ended")
        self.restart_stream()

    def _retire_channel(self) -> None:
        channel, self._channel = self._channel, None
        if channel is None:
            return
        try:
            channel.close()
        except Exception:
            logger.warning("Error ending recognition stream", exc_info=True)

    def _cancel_deadline(self) -> None:
        task, self._deadline_task = self._deadline_task, None
        if task is not None and task is not asyncio.current_task():
            task.cancel()


__all__ = ["TranscriptionSession", "is_timeout_error"]
