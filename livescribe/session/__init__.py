from .sink import OutboundSink
from .state import SessionState
from .generation import build_user_prompt, run_answer_request
from .transcription import TranscriptionSession, is_timeout_error

__all__ = [
    "OutboundSink",
    "SessionState",
    "TranscriptionSession",
    "build_user_prompt",
    "is_timeout_error",
    "run_answer_request",
]
