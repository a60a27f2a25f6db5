"""Real-time meeting transcription relay (Google Speech-to-Text + Gemini)."""

__all__: list[str] = []
