from __future__ import annotations

from pathlib import Path
from dataclasses import replace

import pytest
from google.api_core import exceptions as google_exceptions
from google.cloud import speech_v1 as speech

from livescribe.errors import UpstreamUnavailableError
from livescribe.upstream.events import ChannelEnd, ChannelError, TranscriptResult
from livescribe.upstream.speech import (
    GoogleSpeechChannel,
    GoogleSpeechChannelFactory,
    make_streaming_config,
    result_from_response,
)
from tests.utils.fakes import make_settings


def _response(text: str, *, is_final: bool, confidence: float = 0.0) -> speech.StreamingRecognizeResponse:
    return speech.StreamingRecognizeResponse(
        results=[
            speech.StreamingRecognitionResult(
                alternatives=[speech.SpeechRecognitionAlternative(transcript=text, confidence=confidence)],
                is_final=is_final,
            )
        ]
    )


class _FakeSpeechClient:
    """Drains the request stream, then replays canned responses."""

    def __init__(self, responses: list, *, error: Exception | None = None) -> None:
        self.responses = responses
        self.error = error
        self.requests: list[speech.StreamingRecognizeRequest] = []

    async def streaming_recognize(self, *, requests):
        async def _call():
            async for request in requests:
                self.requests.append(request)
            for response in self.responses:
                yield response
            if self.error is not None:
                raise self.error

        return _call()


def _channel(max_queued_chunks: int = 200) -> GoogleSpeechChannel:
    config = make_streaming_config(make_settings().speech)
    return GoogleSpeechChannel(streaming_config=config, max_queued_chunks=max_queued_chunks)


def test_streaming_config_uses_settings() -> None:
    config = make_streaming_config(make_settings().speech)

    assert config.interim_results
    assert config.config.encoding == speech.RecognitionConfig.AudioEncoding.WEBM_OPUS
    assert config.config.sample_rate_hertz == 48000
    assert config.config.language_code == "en-US"
    assert config.config.model == "latest_long"
    assert config.config.enable_automatic_punctuation


def test_final_result_carries_confidence() -> None:
    result = result_from_response(_response("hello world", is_final=True, confidence=0.5))
    assert result == TranscriptResult(text="hello world", is_final=True, confidence=0.5)


def test_interim_result_has_no_confidence() -> None:
    result = result_from_response(_response("hel", is_final=False))
    assert result == TranscriptResult(text="hel", is_final=False, confidence=None)


def test_empty_response_is_skipped() -> None:
    assert result_from_response(speech.StreamingRecognizeResponse()) is None
    assert result_from_response(_response("", is_final=False)) is None


@pytest.mark.asyncio
async def test_channel_sends_config_then_audio_and_ends() -> None:
    client = _FakeSpeechClient([_response("hi", is_final=False)])
    channel = _channel()

    assert not channel.write(b"too early")
    await channel.connect(client)
    assert channel.is_open
    assert channel.write(b"a")
    assert channel.write(b"b")
    channel.close()
    assert not channel.write(b"too late")

    events = [event async for event in channel.events()]

    assert events == [TranscriptResult(text="hi", is_final=False), ChannelEnd()]
    assert client.requests[0].streaming_config.config.language_code == "en-US"
    assert [r.audio_content for r in client.requests[1:]] == [b"a", b"b"]


@pytest.mark.asyncio
async def test_upstream_failure_becomes_channel_error() -> None:
    client = _FakeSpeechClient([], error=google_exceptions.ServiceUnavailable("backend down"))
    channel = _channel()
    await channel.connect(client)
    channel.close()

    events = [event async for event in channel.events()]

    assert events == [ChannelError(message="backend down")]
    assert not channel.is_open


@pytest.mark.asyncio
async def test_events_can_only_be_consumed_once() -> None:
    channel = _channel()
    await channel.connect(_FakeSpeechClient([]))
    channel.close()
    _ = [event async for event in channel.events()]

    with pytest.raises(RuntimeError):
        await anext(channel.events())


@pytest.mark.asyncio
async def test_channel_reports_dropped_chunks() -> None:
    channel = _channel(max_queued_chunks=2)
    await channel.connect(_FakeSpeechClient([]))

    for chunk in (b"1", b"2", b"3", b"4"):
        channel.write(chunk)

    assert channel.dropped_chunks == 2
    channel.close()


@pytest.mark.asyncio
async def test_factory_maps_unreadable_credentials(tmp_path: Path) -> None:
    speech_settings = replace(make_settings().speech, credentials_path=tmp_path / "missing.json")
    factory = GoogleSpeechChannelFactory(speech_settings)

    with pytest.raises(UpstreamUnavailableError):
        await factory.open()
    await factory.aclose()
