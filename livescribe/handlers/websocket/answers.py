"""Per-connection dispatch of AI answer requests."""

from __future__ import annotations

import math
import asyncio
import logging
import contextlib

from livescribe.errors import RateLimitError
from livescribe.session.sink import OutboundSink
from livescribe.config.websocket import WS_ERROR_AI_BUSY
from livescribe.session.messages import ai_error_message
from livescribe.session.generation import run_answer_request
from livescribe.handlers.limits import SlidingWindowRateLimiter
from livescribe.upstream.protocols import GenerationChannelFactory

from .parser import AnswerRequest

logger = logging.getLogger(__name__)


class AnswerDispatcher:
    """Runs answer requests in the background, one at a time.

    A request arriving while another is streaming is rejected with `ai_error`; the
    running one continues untouched. Answers never block the audio path.
    """

    def __init__(
        self,
        outbound: OutboundSink,
        generation_factory: GenerationChannelFactory,
        *,
        limiter: SlidingWindowRateLimiter,
    ) -> None:
        self._outbound = outbound
        self._generation_factory = generation_factory
        self._limiter = limiter
        self._task: asyncio.Task | None = None

    @property
    def busy(self) -> bool:
        return self._task is not None and not self._task.done()

    async def submit(self, request: AnswerRequest) -> bool:
        if self.busy:
            logger.info("Rejecting AI request: another one is in progress")
            await self._outbound.send(ai_error_message(WS_ERROR_AI_BUSY))
            return False

        try:
            self._limiter.consume()
        except RateLimitError as exc:
            retry_in_s = int(max(1, math.ceil(float(exc.retry_in))))
            await self._outbound.send(
                ai_error_message(
                    f"AI request rate limit: at most {exc.limit} per {int(exc.window_seconds)} seconds; "
                    f"retry in {retry_in_s} seconds"
                )
            )
            return False

        logger.info("AI request received: %s", request.question or "no specific question")
        self._task = asyncio.create_task(
            run_answer_request(
                self._outbound,
                self._generation_factory,
                transcript=request.context,
                question=request.question,
            )
        )
        return True

    async def cancel(self) -> None:
        task, self._task = self._task, None
        if task is None or task.done():
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError, Exception):
            await task


__all__ = ["AnswerDispatcher"]
