"""Item autocomplete use case."""

from prostock.application.context import AppContext
from prostock.config import get_logger
from prostock.core.entities import InventoryItem
from prostock.core.services import DebouncedSearch

logger = get_logger(__name__)


class SearchItemsUseCase:
    """Backend item search with a minimum query length and a result cap."""

    def __init__(self, context: AppContext):
        self._ctx = context
        self._settings = context.settings.search

    async def execute(self, query: str) -> list[InventoryItem]:
        self._ctx.require_user()
        query = query.strip()
        if len(query) < self._settings.min_query_length:
            return []

        items = await self._ctx.backend.search_items(query)
        logger.debug("item_search", query=query, results=len(items))
        return items[: self._settings.max_results]

    def debounced(self) -> DebouncedSearch[list[InventoryItem]]:
        """
        The session's shared search-as-you-type function.

        Every caller gets the same instance, so a newer query supersedes an
        older one still waiting out the debounce delay.
        """
        if self._ctx.item_search is None:
            self._ctx.item_search = DebouncedSearch(self.execute, debounce_ms=self._settings.debounce_ms)
        return self._ctx.item_search
