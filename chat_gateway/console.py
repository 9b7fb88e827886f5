#!/usr/bin/env python3
"""
Ask the agent one question from the terminal.

Shows a "searching" placeholder, clears it when the answer starts, then prints
the answer line by line. Without usable API keys the canned test reply is shown.

Run from project root:

    python -m chat_gateway.console "What do you think about the iPhone 17?"
    python -m chat_gateway.console "what about Beijing" --thread-id 1
"""

import argparse
import asyncio
import logging
import sys

from chat_gateway.agent.registry import get_registry
from chat_gateway.core.config import CONSOLE_LINE_DELAY, FALLBACK_DELAY
from chat_gateway.core.errors import UpstreamError
from chat_gateway.services.aggregator import StreamAggregator, reveal_lines
from chat_gateway.services.credentials import credentials_configured, fallback_response

logger = logging.getLogger(__name__)

PLACEHOLDER = "🔍 正在查询中，请稍候..."
# ANSI: clear screen, cursor home
CLEAR_SCREEN = "\033[2J\033[H"


def _write_line(line: str) -> None:
    sys.stdout.write(line + "\n")
    sys.stdout.flush()


def _clear() -> None:
    sys.stdout.write(CLEAR_SCREEN)
    sys.stdout.flush()


async def ask(question: str, thread_id: str, line_delay: float = CONSOLE_LINE_DELAY) -> str:
    """Run one question through the selected pipeline and print the answer. Returns the answer."""
    _write_line(PLACEHOLDER)
    if not credentials_configured():
        await asyncio.sleep(FALLBACK_DELAY)
        answer = fallback_response(question)
        _clear()
    else:
        registry = get_registry()
        pipeline = registry.select(question)

        async def on_first() -> None:
            _clear()

        async with registry.store.lock(thread_id):
            answer = await StreamAggregator().aggregate(
                pipeline.events(question, registry.store.config(thread_id)),
                on_first=on_first,
            )
    await reveal_lines(answer, _write_line, line_delay)
    return answer


def main() -> int:
    parser = argparse.ArgumentParser(description="Ask the agent one question from the terminal.")
    parser.add_argument("question", help="Message to send to the agent")
    parser.add_argument("--thread-id", default="1", help="Conversation thread id (default: 1)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable INFO logging")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)
    if not args.question.strip():
        logger.error("Question cannot be empty")
        return 1
    try:
        asyncio.run(ask(args.question, args.thread_id))
    except UpstreamError as e:
        logger.error("Agent failed: %s", e.message)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
