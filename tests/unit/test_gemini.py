from __future__ import annotations

from dataclasses import replace

import pytest
import google.generativeai as genai

from livescribe.errors import UpstreamUnavailableError
from livescribe.upstream.generation import GeminiGenerationChannelFactory, chunk_text
from tests.utils.fakes import make_settings


class _Chunk:
    def __init__(self, text: str | None) -> None:
        self._text = text

    @property
    def text(self) -> str:
        if self._text is None:
            raise ValueError("no parts")
        return self._text


class _Stream:
    def __init__(self, chunks: list[_Chunk]) -> None:
        self._chunks = chunks

    async def __aiter__(self):
        for chunk in self._chunks:
            yield chunk


class _FakeModel:
    instances: list[_FakeModel] = []

    def __init__(self, model_name: str, *, system_instruction: str, generation_config=None) -> None:
        self.model_name = model_name
        self.system_instruction = system_instruction
        self.generation_config = generation_config
        self.prompts: list[str] = []
        _FakeModel.instances.append(self)

    async def generate_content_async(self, prompt: str, *, stream: bool) -> _Stream:
        assert stream
        self.prompts.append(prompt)
        return _Stream([_Chunk("Short "), _Chunk(None), _Chunk(""), _Chunk("answer.")])


@pytest.fixture
def fake_genai(monkeypatch: pytest.MonkeyPatch) -> list[str]:
    configured: list[str] = []
    _FakeModel.instances = []
    monkeypatch.setattr(genai, "configure", lambda *, api_key: configured.append(api_key))
    monkeypatch.setattr(genai, "GenerativeModel", _FakeModel)
    return configured


def test_chunk_text_tolerates_missing_parts() -> None:
    assert chunk_text(_Chunk(None)) == ""
    assert chunk_text(_Chunk("x")) == "x"


@pytest.mark.asyncio
async def test_stream_yields_non_empty_text(fake_genai: list[str]) -> None:
    factory = GeminiGenerationChannelFactory(make_settings().generation)

    fragments = [text async for text in factory.stream("be brief", "Transcript: hi")]
    again = [text async for text in factory.stream("be brief", "Transcript: bye")]

    assert fragments == ["Short ", "answer."]
    assert again == fragments
    assert fake_genai == ["test-key"]
    model = _FakeModel.instances[0]
    assert model.model_name == "gemini-test"
    assert model.system_instruction == "be brief"
    assert model.generation_config is None
    assert model.prompts == ["Transcript: hi"]


@pytest.mark.asyncio
async def test_temperature_is_passed_as_generation_config(fake_genai: list[str]) -> None:
    settings = replace(make_settings().generation, temperature=0.2)
    factory = GeminiGenerationChannelFactory(settings)

    _ = [text async for text in factory.stream("s", "u")]

    assert _FakeModel.instances[0].generation_config.temperature == pytest.approx(0.2)


@pytest.mark.asyncio
async def test_missing_api_key_fails_the_request(fake_genai: list[str]) -> None:
    settings = replace(make_settings().generation, api_key="")
    factory = GeminiGenerationChannelFactory(settings)

    with pytest.raises(UpstreamUnavailableError, match="GOOGLE_API_KEY not set in environment"):
        _ = [text async for text in factory.stream("s", "u")]
    assert fake_genai == []
