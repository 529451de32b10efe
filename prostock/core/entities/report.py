"""Aggregates computed by the backend: dashboard statistics and stock history."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from prostock.core.entities.inventory import InventoryItem
from prostock.core.entities.transaction import Transaction


class TopItem(BaseModel):
    """Most issued item over the dashboard window."""

    name: str
    total: float = 0.0


class DashboardStats(BaseModel):
    """Warehouse pulse shown on the dashboard."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_items: int = 0
    total_stock: float = 0.0
    low_stock_items: int = 0
    transactions_in_today: int = 0
    transactions_out_today: int = 0
    top_items_out: list[TopItem] = Field(default_factory=list)
    low_stock_list: list[InventoryItem] = Field(default_factory=list)


class HistoricalStockReport(BaseModel):
    """Backend summary of one item's movements over a date range."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    item_id: str
    item_name: str = ""
    opening_stock: float = 0.0
    total_in: float = 0.0
    total_out: float = 0.0
    total_adjustment: float = 0.0
    closing_stock: float = 0.0
    movements: list[Transaction] = Field(default_factory=list)

    @field_validator("item_id", mode="before")
    @classmethod
    def _coerce_id(cls, v: Any) -> Any:
        return "" if v is None else str(v)
