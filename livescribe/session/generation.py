"""On-demand answer generation over the accumulated transcript."""

from __future__ import annotations

import logging

from livescribe.upstream.protocols import GenerationChannelFactory
from livescribe.config.generation import SYSTEM_PROMPT, USER_PROMPT_WITH_QUESTION, USER_PROMPT_WITHOUT_QUESTION

from .sink import OutboundSink
from .messages import ai_chunk_message, ai_error_message, ai_complete_message

logger = logging.getLogger(__name__)


def build_user_prompt(transcript: str, question: str | None) -> str:
    if question:
        return USER_PROMPT_WITH_QUESTION.format(transcript=transcript, question=question)
    return USER_PROMPT_WITHOUT_QUESTION.format(transcript=transcript)


async def run_answer_request(
    outbound: OutboundSink,
    generation_factory: GenerationChannelFactory,
    *,
    transcript: str,
    question: str | None = None,
) -> bool:
    """Stream one answer to the client as ai_chunk* followed by ai_complete or ai_error.

    Returns True on completion. There is no retry; the client reissues on failure.
    """
    user_prompt = build_user_prompt(transcript, question)
    chunks = 0
    try:
        async for text in generation_factory.stream(SYSTEM_PROMPT, user_prompt):
            if not text:
                continue
            if not await outbound.send(ai_chunk_message(text)):
                logger.info("Client gone; abandoning AI request after %d chunk(s)", chunks)
                return False
            chunks += 1
    except Exception as exc:
        logger.error("AI request error after %d chunk(s): %s", chunks, exc)
        await outbound.send(ai_error_message(str(exc) or type(exc).__name__))
        return False

    await outbound.send(ai_complete_message())
    logger.info("AI request complete (%d chunk(s))", chunks)
    return True


__all__ = ["build_user_prompt", "run_answer_request"]
