"""
Client-side cache of inventory, suppliers and dashboard statistics.

The three datasets are fetched together and swapped in as one immutable
snapshot, so readers never see inventory from one refresh next to stats
from another. Only one refresh runs at a time; a refresh requested while
another is in flight is dropped.
"""

import asyncio
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from prostock.config import get_logger
from prostock.core.entities import DashboardStats, InventoryItem, Supplier
from prostock.core.exceptions import ItemNotFoundError, ProStockError
from prostock.core.interfaces.backend import IStockDataSource
from prostock.core.interfaces.notifier import INotifier, NotificationLevel

logger = get_logger(__name__)


class RefreshOutcome(str, Enum):
    """What a refresh() call did."""

    COMPLETED = "completed"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class CacheSnapshot:
    """Datasets from one successful refresh."""

    inventory: tuple[InventoryItem, ...] = ()
    suppliers: tuple[Supplier, ...] = ()
    stats: DashboardStats = field(default_factory=DashboardStats)
    refreshed_at: datetime | None = None


class StockCache:
    """Last-known-good copy of the backend datasets."""

    def __init__(
        self,
        source: IStockDataSource,
        notifier: INotifier | None = None,
        refresh_timeout: float = 60.0,
    ):
        self._source = source
        self._notifier = notifier
        self._refresh_timeout = refresh_timeout
        self._snapshot = CacheSnapshot()
        self._loading = False
        self._task: asyncio.Task[RefreshOutcome] | None = None

    @property
    def snapshot(self) -> CacheSnapshot:
        return self._snapshot

    @property
    def inventory(self) -> list[InventoryItem]:
        return list(self._snapshot.inventory)

    @property
    def suppliers(self) -> list[Supplier]:
        return list(self._snapshot.suppliers)

    @property
    def stats(self) -> DashboardStats:
        return self._snapshot.stats

    @property
    def refreshed_at(self) -> datetime | None:
        return self._snapshot.refreshed_at

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def is_refreshing(self) -> bool:
        return self._task is not None and not self._task.done()

    def get_item(self, item_id: str) -> InventoryItem | None:
        for item in self._snapshot.inventory:
            if item.id == item_id:
                return item
        return None

    def require_item(self, item_id: str) -> InventoryItem:
        item = self.get_item(item_id)
        if item is None:
            raise ItemNotFoundError(item_id)
        return item

    async def refresh(self) -> RefreshOutcome:
        """
        Re-fetch every dataset and swap them in together.

        Returns SKIPPED without touching the backend when a refresh is
        already running. On failure the previous snapshot stays in place.
        """
        if self.is_refreshing:
            logger.debug("cache_refresh_skipped")
            return RefreshOutcome.SKIPPED

        self._task = asyncio.create_task(self._run_refresh())
        return await self._task

    async def wait_idle(self) -> None:
        """Wait for an in-flight refresh, if any, to finish."""
        task = self._task
        if task is not None and not task.done():
            await asyncio.wait({task})

    def clear(self) -> None:
        """Forget every dataset (used on logout)."""
        self._snapshot = CacheSnapshot()

    async def _run_refresh(self) -> RefreshOutcome:
        self._loading = True
        started = datetime.now()
        logger.info("cache_refresh_started")
        try:
            inventory, suppliers, stats = await asyncio.wait_for(
                asyncio.gather(
                    self._source.get_inventory(),
                    self._source.get_suppliers(),
                    self._source.get_dashboard_stats(),
                ),
                timeout=self._refresh_timeout,
            )
        except asyncio.TimeoutError:
            logger.warning("cache_refresh_timeout", timeout=self._refresh_timeout)
            self._notify(
                f"Refreshing data timed out after {self._refresh_timeout:g} seconds",
                NotificationLevel.ERROR,
            )
            return RefreshOutcome.FAILED
        except ProStockError as e:
            logger.warning("cache_refresh_failed", error=e.message, code=e.code)
            self._notify(e.message, NotificationLevel.ERROR)
            return RefreshOutcome.FAILED
        finally:
            self._loading = False

        self._snapshot = CacheSnapshot(
            inventory=tuple(inventory),
            suppliers=tuple(suppliers),
            stats=stats,
            refreshed_at=datetime.now(),
        )
        logger.info(
            "cache_refresh_completed",
            items=len(inventory),
            suppliers=len(suppliers),
            duration_ms=round((datetime.now() - started).total_seconds() * 1000, 2),
        )
        return RefreshOutcome.COMPLETED

    def _notify(self, message: str, level: NotificationLevel) -> None:
        if self._notifier is not None:
            self._notifier.notify(message, level)
