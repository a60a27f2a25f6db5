from __future__ import annotations

import importlib.util
from pathlib import Path

SCRIPT = Path(__file__).resolve().parents[2] / "linting" / "no_runtime_singletons.py"


def _load_script():
    spec = importlib.util.spec_from_file_location("no_runtime_singletons", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_package_has_no_module_level_clients() -> None:
    assert _load_script().main() == 0


def test_lazy_client_slots_are_flagged(tmp_path: Path) -> None:
    lint = _load_script()
    sample = tmp_path / "bad.py"
    sample.write_text(
        "from google.cloud import speech_v1\n"
        "_speech_client = None\n"
        "client = speech_v1.SpeechAsyncClient()\n"
        "def get_client():\n"
        "    global _speech_client\n"
        "    return _speech_client\n"
    )

    violations = lint.collect_violations(sample, root=tmp_path)

    assert len(violations) == 4
    assert any("lazy client slot" in v for v in violations)
    assert any("SpeechAsyncClient" in v for v in violations)
