"""Upstream services.

Keep this module dependency-light: the Google SDK clients are imported only by
`upstream.speech` and `upstream.generation`, so sessions and tests can run
against the protocols alone.
"""

from .events import ChannelEnd, SpeechEvent, ChannelError, TranscriptResult
from .protocols import SpeechChannel, SpeechChannelFactory, GenerationChannelFactory

__all__ = [
    "ChannelEnd",
    "ChannelError",
    "GenerationChannelFactory",
    "SpeechChannel",
    "SpeechChannelFactory",
    "SpeechEvent",
    "TranscriptResult",
]
