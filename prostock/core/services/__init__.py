"""
Core business logic services.

Layer-pure services that depend only on:
- prostock/core/entities/*
- prostock/core/interfaces/*
- prostock/core/exceptions.py

NO infrastructure imports. All dependencies injected via constructor.
"""

from prostock.core.services.cart import CartBuilder, CartFlow, EntryState
from prostock.core.services.inventory_assistant import InventoryAssistant
from prostock.core.services.item_search import DebouncedSearch
from prostock.core.services.notifications import Notification, NotificationCenter
from prostock.core.services.report_reconstructor import (
    BalancedMovement,
    ReconstructedReport,
    reconstruct_report,
)
from prostock.core.services.stock_cache import CacheSnapshot, RefreshOutcome, StockCache
from prostock.core.services.stock_validator import (
    StockSufficiencyValidator,
    SufficiencyResult,
    check_sufficiency,
)
from prostock.core.services.transaction_export import ExportFilter, filter_records, to_row
from prostock.core.services.unit_conversion import (
    build_unit_options,
    find_unit,
    from_base,
    to_base,
)

__all__ = [
    # Unit conversion
    "build_unit_options",
    "find_unit",
    "to_base",
    "from_base",
    # Stock cache
    "StockCache",
    "CacheSnapshot",
    "RefreshOutcome",
    # Cart
    "CartBuilder",
    "CartFlow",
    "EntryState",
    # Sufficiency
    "StockSufficiencyValidator",
    "SufficiencyResult",
    "check_sufficiency",
    # Reports
    "reconstruct_report",
    "ReconstructedReport",
    "BalancedMovement",
    # Export
    "ExportFilter",
    "filter_records",
    "to_row",
    # Search
    "DebouncedSearch",
    # Notifications
    "NotificationCenter",
    "Notification",
    # Assistant
    "InventoryAssistant",
]
