"""
Per-source mutual exclusion.

Serializes delete-then-ingest work on the same source across concurrent
requests. Locks are taken in sorted order so overlapping batches cannot
deadlock, and are forgotten once no task holds or waits on them.

Dependencies: asyncio, contextlib
System role: Concurrency control for re-ingestion
"""

import asyncio
from contextlib import AsyncExitStack, asynccontextmanager
from typing import AsyncIterator, Iterable


class SourceLockRegistry:
    """Keyed asyncio locks, one per document source."""

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}
        self._users: dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._locks)

    @asynccontextmanager
    async def _hold_one(self, source: str) -> AsyncIterator[None]:
        lock = self._locks.setdefault(source, asyncio.Lock())
        self._users[source] = self._users.get(source, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._users[source] -= 1
            if not self._users[source]:
                del self._users[source]
                del self._locks[source]

    @asynccontextmanager
    async def hold(self, sources: Iterable[str]) -> AsyncIterator[None]:
        """
        Hold the locks of every given source for the duration of the block.

        Args:
            sources: Sources touched by the batch (duplicates ignored)
        """
        async with AsyncExitStack() as stack:
            for source in sorted(set(sources)):
                await stack.enter_async_context(self._hold_one(source))
            yield
