from __future__ import annotations

import orjson
from fastapi.testclient import TestClient

from livescribe.server import create_app
from tests.utils.fakes import FakeSpeechFactory, FakeGenerationFactory, make_runtime_deps


def _client() -> tuple[TestClient, FakeSpeechFactory, FakeGenerationFactory]:
    speech_factory = FakeSpeechFactory(echo=True)
    generation_factory = FakeGenerationFactory(["Two ", "points."])
    deps = make_runtime_deps(speech_factory=speech_factory, generation_factory=generation_factory)

    async def build():
        return deps

    return TestClient(create_app(deps_builder=build)), speech_factory, generation_factory


def test_health_endpoints() -> None:
    client, _, _ = _client()
    with client:
        for path in ("/", "/health", "/healthz"):
            response = client.get(path)
            assert response.status_code == 200
            assert response.json() == {"status": "ok"}


def test_websocket_round_trip_and_shutdown() -> None:
    client, speech_factory, generation_factory = _client()
    with client:
        with client.websocket_connect("/api/transcribe") as ws:
            ws.send_bytes(b"abc")
            assert ws.receive_json() == {
                "type": "transcript",
                "text": "heard 3 bytes",
                "isFinal": True,
                "confidence": 0.9,
            }

            ws.send_text(orjson.dumps({"type": "ai_request", "context": "notes", "question": "summary?"}).decode())
            assert ws.receive_json() == {"type": "ai_chunk", "text": "Two "}
            assert ws.receive_json() == {"type": "ai_chunk", "text": "points."}
            assert ws.receive_json() == {"type": "ai_complete"}

    assert generation_factory.calls[0][1] == "Transcript: notes\n\nAnswer this briefly: summary?"
    assert speech_factory.closed
    assert generation_factory.closed
