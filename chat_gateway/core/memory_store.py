"""
In-memory conversation store shared by both agent pipelines. Keyed by thread_id.

History itself lives in the langgraph checkpointer; this wrapper owns its lifecycle:
per-thread locks so same-thread requests run one at a time, access tracking, and
idle-thread expiry (disabled when ttl_seconds <= 0).
"""

import asyncio
import logging
import threading
import time
from typing import Any, Callable

from langgraph.checkpoint.memory import MemorySaver

from chat_gateway.core.config import THREAD_TTL_SECONDS

logger = logging.getLogger(__name__)


class ConversationStore:
    def __init__(
        self,
        ttl_seconds: float = THREAD_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.checkpointer = MemorySaver()
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        # thread_id -> last access time
        self._last_seen: dict[str, float] = {}
        self._locks: dict[str, asyncio.Lock] = {}
        self._guard = threading.Lock()

    def config(self, thread_id: str) -> dict[str, Any]:
        """Return the runnable config scoping a pipeline run to thread_id."""
        self.evict_expired()
        with self._guard:
            self._last_seen[thread_id] = self._clock()
        return {"configurable": {"thread_id": thread_id}}

    def lock(self, thread_id: str) -> asyncio.Lock:
        with self._guard:
            lock = self._locks.get(thread_id)
            if lock is None:
                lock = self._locks[thread_id] = asyncio.Lock()
        return lock

    def threads(self) -> list[str]:
        with self._guard:
            return list(self._last_seen)

    def clear(self, thread_id: str) -> None:
        """Drop a thread's history, lock, and access record."""
        with self._guard:
            self._last_seen.pop(thread_id, None)
            lock = self._locks.get(thread_id)
            if lock is not None and not lock.locked():
                del self._locks[thread_id]
        self.checkpointer.delete_thread(thread_id)
        logger.info("[memory_store:clear] thread_id=%s", thread_id[:16])

    def evict_expired(self) -> list[str]:
        """Delete threads idle longer than ttl_seconds. Returns the evicted ids."""
        if self.ttl_seconds <= 0:
            return []
        now = self._clock()
        with self._guard:
            expired = [
                tid
                for tid, seen in self._last_seen.items()
                if now - seen > self.ttl_seconds and not (tid in self._locks and self._locks[tid].locked())
            ]
        for tid in expired:
            self.clear(tid)
        if expired:
            logger.info("[memory_store:evict_expired] OUT evicted=%d", len(expired))
        return expired
