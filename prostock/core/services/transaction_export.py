"""Filtering and row layout for the transaction audit export."""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Any

from prostock.core.entities import TransactionRecord, TransactionType

EXPORT_COLUMNS: tuple[str, ...] = (
    "INPUT_TIME",
    "TRANSACTION_DATE",
    "TYPE",
    "ITEM_CODE",
    "ITEM_NAME",
    "QTY_INPUT",
    "UNIT_INPUT",
    "QTY_BASE",
    "STOCK_BEFORE",
    "STOCK_AFTER",
    "SUPPLIER/LOCATION",
    "DELIVERY_NOTE/FORM",
    "OPERATOR",
)

COLUMN_WIDTHS: tuple[int, ...] = (20, 15, 10, 15, 30, 10, 15, 10, 15, 15, 25, 20, 15)

_MISSING = "-"


@dataclass(frozen=True)
class ExportFilter:
    """Which ledger rows to export. The end date is inclusive."""

    start_date: date
    end_date: date
    item_id: str | None = None
    type: TransactionType | None = None

    @property
    def window(self) -> tuple[datetime, datetime]:
        start = datetime.combine(self.start_date, time.min)
        end = datetime.combine(self.end_date, time.min) + timedelta(days=1)
        return start, end

    def matches(self, record: TransactionRecord) -> bool:
        if record.timestamp is None:
            return False
        start, end = self.window
        if not start <= record.timestamp <= end:
            return False
        if self.item_id and record.item_code != self.item_id:
            return False
        if self.type is not None and record.type != self.type:
            return False
        return True


def filter_records(records: list[TransactionRecord], export_filter: ExportFilter) -> list[TransactionRecord]:
    return [r for r in records if export_filter.matches(r)]


def to_row(record: TransactionRecord) -> list[Any]:
    """Map one ledger row onto EXPORT_COLUMNS."""
    return [
        record.timestamp.strftime("%Y-%m-%d %H:%M:%S") if record.timestamp else _MISSING,
        record.transaction_date.strftime("%Y-%m-%d") if record.transaction_date else _MISSING,
        record.type.value if record.type else _MISSING,
        record.item_code or _MISSING,
        record.item_name or _MISSING,
        record.input_quantity,
        record.input_unit or _MISSING,
        record.base_quantity,
        record.stock_before if record.stock_before is not None else _MISSING,
        record.stock_after if record.stock_after is not None else _MISSING,
        record.supplier or record.remarks or _MISSING,
        record.delivery_note or record.form_number or _MISSING,
        record.user or _MISSING,
    ]
