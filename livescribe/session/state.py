"""Transcription session lifecycle states."""

from __future__ import annotations

import enum


class SessionState(enum.Enum):
    IDLE = "idle"
    STARTING = "starting"
    STREAMING = "streaming"
    RESTARTING = "restarting"
    STOPPED = "stopped"


__all__ = ["SessionState"]
