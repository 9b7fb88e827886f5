"""
Stream aggregation: reduce a pipeline's upstream events to the final assistant answer.

Only assistant events without tool calls count toward the answer; tool results,
tool-call requests, and other messages are consumed and dropped. Fragments are
concatenated in arrival order.

States: WAITING_FIRST_CHUNK → STREAMING → DONE.
"""

import asyncio
import logging
from enum import Enum
from typing import AsyncIterable, Awaitable, Callable

from chat_gateway.agent.events import Role, UpstreamEvent
from chat_gateway.core.config import CONSOLE_LINE_DELAY

logger = logging.getLogger(__name__)


class AggregatorState(str, Enum):
    WAITING_FIRST_CHUNK = "waiting_first_chunk"
    STREAMING = "streaming"
    DONE = "done"


def is_answer_event(event: UpstreamEvent) -> bool:
    """True for user-visible answer text (assistant, no tool calls, non-empty)."""
    return event.role is Role.ASSISTANT and not event.has_tool_calls and bool(event.content)


class StreamAggregator:
    def __init__(self) -> None:
        self.state = AggregatorState.WAITING_FIRST_CHUNK
        self._parts: list[str] = []
        self.discarded = 0

    def feed(self, event: UpstreamEvent) -> bool:
        """
        Consume one event. Returns True only for the event that moves the machine
        to STREAMING (the caller's cue to signal "thinking done").
        """
        if self.state is AggregatorState.DONE:
            raise RuntimeError("aggregator already finished")
        if not is_answer_event(event):
            self.discarded += 1
            return False
        self._parts.append(event.content)
        if self.state is AggregatorState.WAITING_FIRST_CHUNK:
            self.state = AggregatorState.STREAMING
            return True
        return False

    @property
    def text(self) -> str:
        return "".join(self._parts)

    def finish(self) -> str:
        if self.state is AggregatorState.DONE:
            raise RuntimeError("aggregator already finished")
        self.state = AggregatorState.DONE
        out = self.text
        logger.info(
            "[aggregator:finish] OUT fragments=%d discarded=%d answer_len=%d",
            len(self._parts), self.discarded, len(out),
        )
        return out

    async def aggregate(
        self,
        events: AsyncIterable[UpstreamEvent],
        on_first: Callable[[], Awaitable[None]] | None = None,
    ) -> str:
        """Drive the machine over an event stream; await on_first at the first answer fragment."""
        async for event in events:
            if self.feed(event) and on_first is not None:
                await on_first()
        return self.finish()


async def reveal_lines(
    text: str,
    write: Callable[[str], None],
    delay: float = CONSOLE_LINE_DELAY,
) -> None:
    """Write text one line at a time with a fixed pause after each line."""
    for line in text.split("\n"):
        write(line)
        await asyncio.sleep(delay)
