import asyncio
import weakref
from contextlib import asynccontextmanager
from typing import AsyncIterator


class ActorLocks:
    """One asyncio.Lock per actor so balance read-modify-write never interleaves."""

    def __init__(self):
        # Locks belong to the loop they were first awaited on
        self._locks: weakref.WeakKeyDictionary = weakref.WeakKeyDictionary()

    def _lock_for(self, actor_id: int | str) -> asyncio.Lock:
        loop_locks = self._locks.setdefault(asyncio.get_running_loop(), {})
        key = str(actor_id)
        if key not in loop_locks:
            loop_locks[key] = asyncio.Lock()
        return loop_locks[key]

    @asynccontextmanager
    async def hold(self, *actor_ids: int | str) -> AsyncIterator[None]:
        # Always acquire in the same order so two trades can't deadlock
        keys = sorted({str(actor_id) for actor_id in actor_ids})
        acquired: list[asyncio.Lock] = []
        try:
            for key in keys:
                lock = self._lock_for(key)
                await lock.acquire()
                acquired.append(lock)
            yield
        finally:
            for lock in reversed(acquired):
                lock.release()
