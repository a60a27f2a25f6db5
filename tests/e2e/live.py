#!/usr/bin/env python3
"""Manual client for /api/transcribe against a running server.

Streams a WebM/Opus (or raw) audio file in fixed-size chunks, prints transcripts
as they arrive, then asks for an answer over the final transcript. Lines typed on
stdin while streaming are sent as `ai_request` questions.
"""

from __future__ import annotations

import sys
import asyncio
import argparse
import contextlib
from pathlib import Path

import orjson
import websockets

if __package__ in {None, ""}:
    sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from tests.params.env import build_ws_url, derive_default_server  # noqa: E402


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Stream an audio file to /api/transcribe")
    p.add_argument("file", help="Audio file encoded as the server expects (default WEBM_OPUS)")
    p.add_argument("--server", default=derive_default_server(), help="host:port or ws://host:port")
    p.add_argument("--secure", action="store_true")
    p.add_argument("--chunk-bytes", type=int, default=4096)
    p.add_argument("--interval", type=float, default=0.1, help="Seconds between chunks")
    p.add_argument("--question", default=None, help="Question for the closing ai_request")
    p.add_argument("--linger", type=float, default=5.0, help="Seconds to wait for results after the last chunk")
    return p.parse_args()


class TranscriptLog:
    def __init__(self) -> None:
        self.finals: list[str] = []
        self.answer_done = asyncio.Event()

    def text(self) -> str:
        return " ".join(self.finals)


async def _recv_printer(ws, log: TranscriptLog) -> None:
    async for raw in ws:
        msg = orjson.loads(raw)
        kind = msg.get("type")
        if kind == "transcript":
            if msg.get("isFinal"):
                log.finals.append(msg.get("text", ""))
                print(f"[final {msg.get('confidence', 0):.2f}] {msg.get('text')}")
            else:
                print(f"[interim] {msg.get('text')}")
        elif kind == "ai_chunk":
            print(msg.get("text", ""), end="", flush=True)
        elif kind in {"ai_complete", "ai_error"}:
            if kind == "ai_error":
                print(f"\n[ai_error] {msg.get('message')}")
            else:
                print()
            log.answer_done.set()
        else:
            print(f"<< {raw}")


async def _ask(ws, log: TranscriptLog, question: str | None) -> None:
    log.answer_done.clear()
    payload: dict[str, str] = {"type": "ai_request", "context": log.text()}
    if question:
        payload["question"] = question
    await ws.send(orjson.dumps(payload).decode("utf-8"))


async def _stdin_questions(ws, log: TranscriptLog) -> None:
    loop = asyncio.get_running_loop()
    while True:
        line = await loop.run_in_executor(None, sys.stdin.readline)
        if not line:
            return
        line = line.strip()
        if line:
            await _ask(ws, log, line)


async def run(args: argparse.Namespace) -> int:
    path = Path(args.file)
    if not path.is_file():
        print(f"audio file not found: {path}", file=sys.stderr)
        return 1

    data = path.read_bytes()
    url = build_ws_url(args.server, secure=args.secure)
    log = TranscriptLog()
    print(f"connecting to {url} ({len(data)} bytes of audio)")

    async with websockets.connect(url, max_size=None) as ws:
        printer = asyncio.create_task(_recv_printer(ws, log))
        questions = asyncio.create_task(_stdin_questions(ws, log))
        try:
            step = max(1, int(args.chunk_bytes))
            for offset in range(0, len(data), step):
                await ws.send(data[offset : offset + step])
                await asyncio.sleep(args.interval)

            await asyncio.sleep(args.linger)
            await _ask(ws, log, args.question)
            with contextlib.suppress(asyncio.TimeoutError):
                await asyncio.wait_for(log.answer_done.wait(), timeout=60.0)
        finally:
            questions.cancel()
            printer.cancel()
            with contextlib.suppress(asyncio.CancelledError, websockets.ConnectionClosed):
                await printer
    return 0


def main() -> None:
    args = parse_args()
    try:
        raise SystemExit(asyncio.run(run(args)))
    except KeyboardInterrupt:
        raise SystemExit(130) from None


if __name__ == "__main__":
    main()
