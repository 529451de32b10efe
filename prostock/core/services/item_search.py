"""
Debounced item search.

Typing in an autocomplete box produces a burst of queries; only the last
one, after a quiet period, should reach the backend.
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

from prostock.config import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class DebouncedSearch(Generic[T]):
    """
    Coalesces rapid calls to an async search function.

    Each call cancels the pending one. A superseded call returns None;
    the surviving call returns the search result.
    """

    def __init__(self, search: Callable[[str], Awaitable[T]], debounce_ms: int = 300):
        self._search = search
        self._delay = debounce_ms / 1000
        self._pending: asyncio.Task[T] | None = None

    async def __call__(self, query: str) -> T | None:
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()

        task = asyncio.create_task(self._delayed(query))
        self._pending = task
        try:
            await asyncio.wait({task})
        except asyncio.CancelledError:
            task.cancel()
            raise

        if task.cancelled():
            logger.debug("search_superseded", query=query)
            return None
        return task.result()

    async def _delayed(self, query: str) -> T:
        await asyncio.sleep(self._delay)
        return await self._search(query)
