"""Gemini answer generation configuration (defaults, env names and prompts)."""

from __future__ import annotations

ENV_GEMINI_MODEL = "GEMINI_MODEL"
ENV_GEMINI_TEMPERATURE = "GEMINI_TEMPERATURE"

DEFAULT_GEMINI_MODEL = "gemini-3-flash-preview"

SYSTEM_PROMPT = (
    "You are a concise meeting assistant. Give SHORT, direct answers. No preamble, no repetition, "
    "no unnecessary explanation. If asked a question, answer it directly in 1-3 sentences. "
    "If no question, give 2-3 bullet points max."
)

USER_PROMPT_WITH_QUESTION = "Transcript: {transcript}\n\nAnswer this briefly: {question}"
USER_PROMPT_WITHOUT_QUESTION = (
    "Transcript: {transcript}\n\nBriefly answer any questions asked, or give 2-3 key points."
)

__all__ = [
    "DEFAULT_GEMINI_MODEL",
    "ENV_GEMINI_MODEL",
    "ENV_GEMINI_TEMPERATURE",
    "SYSTEM_PROMPT",
    "USER_PROMPT_WITHOUT_QUESTION",
    "USER_PROMPT_WITH_QUESTION",
]
