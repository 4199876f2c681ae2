"""
Per-order mutual exclusion
"""
import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict


class OrderLocks:
    """
    One asyncio.Lock per order ID

    Mutations of the same order run one after another; different orders
    are not blocked by each other. A lock exists only while some caller
    holds or waits for it, so unknown or deleted order IDs leave nothing
    behind.
    """

    def __init__(self):
        self._locks: Dict[str, asyncio.Lock] = {}
        self._holders: Dict[str, int] = {}

    @asynccontextmanager
    async def hold(self, order_id: str) -> AsyncIterator[None]:
        lock = self._locks.setdefault(order_id, asyncio.Lock())
        self._holders[order_id] = self._holders.get(order_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._holders[order_id] -= 1
            if not self._holders[order_id]:
                del self._holders[order_id]
                del self._locks[order_id]

    def __len__(self) -> int:
        return len(self._locks)
