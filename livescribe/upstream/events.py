"""Typed events emitted by an upstream speech channel."""

from __future__ import annotations

from typing import Union
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TranscriptResult:
    text: str
    is_final: bool
    confidence: float | None = None


@dataclass(frozen=True, slots=True)
class ChannelError:
    message: str


@dataclass(frozen=True, slots=True)
class ChannelEnd:
    pass


# A channel's event sequence ends with exactly one ChannelError or ChannelEnd.
SpeechEvent = Union[TranscriptResult, ChannelError, ChannelEnd]

__all__ = ["ChannelEnd", "ChannelError", "SpeechEvent", "TranscriptResult"]
