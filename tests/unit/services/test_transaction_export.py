"""Tests for export filtering and row layout."""

from datetime import date, datetime

import pytest

from prostock.core.entities import TransactionRecord, TransactionType
from prostock.core.services import ExportFilter, filter_records, to_row
from prostock.core.services.transaction_export import COLUMN_WIDTHS, EXPORT_COLUMNS


def _record(ts: datetime | None, code: str = "1001", type_: str = "IN", **extra) -> TransactionRecord:
    return TransactionRecord(timestamp=ts, item_code=code, type=type_, **extra)


@pytest.fixture
def records() -> list[TransactionRecord]:
    return [
        _record(datetime(2024, 2, 29, 23, 59), code="early"),
        _record(datetime(2024, 3, 1, 0, 0), code="first"),
        _record(datetime(2024, 3, 15, 12, 0), code="1002", type_="OUT"),
        _record(datetime(2024, 3, 31, 23, 59), code="last"),
        _record(datetime(2024, 4, 1, 8, 0), code="late"),
        _record(None, code="undated"),
    ]


class TestExportFilter:
    def test_end_date_is_inclusive(self, records):
        selected = filter_records(records, ExportFilter(date(2024, 3, 1), date(2024, 3, 31)))
        assert [r.item_code for r in selected] == ["first", "1002", "last"]

    def test_item_filter(self, records):
        selected = filter_records(records, ExportFilter(date(2024, 3, 1), date(2024, 3, 31), item_id="1002"))
        assert [r.item_code for r in selected] == ["1002"]

    def test_type_filter(self, records):
        f = ExportFilter(date(2024, 3, 1), date(2024, 3, 31), type=TransactionType.IN)
        assert [r.item_code for r in filter_records(records, f)] == ["first", "last"]

    def test_single_day(self, records):
        f = ExportFilter(date(2024, 3, 15), date(2024, 3, 15))
        assert [r.item_code for r in filter_records(records, f)] == ["1002"]

    def test_window(self):
        start, end = ExportFilter(date(2024, 3, 1), date(2024, 3, 31)).window
        assert start == datetime(2024, 3, 1)
        assert end == datetime(2024, 4, 1)


class TestToRow:
    def test_full_row(self):
        record = TransactionRecord.model_validate(
            {
                "Timestamp": "2024-03-05T10:00:00Z",
                "Tgl": "2024-03-05",
                "type": "OUT",
                "Kode": "1001",
                "Nama": "Copy Paper A4",
                "QtyInput": 2,
                "SatuanInput": "Box",
                "QtyDefault": 24,
                "StokSebelum": 100,
                "StokSesudah": 76,
                "KeteranganGlobal": "Warehouse B",
                "NoForm": "F-9",
                "User": "budi",
            }
        )
        assert to_row(record) == [
            "2024-03-05 10:00:00",
            "2024-03-05",
            "OUT",
            "1001",
            "Copy Paper A4",
            2,
            "Box",
            24,
            100,
            76,
            "Warehouse B",
            "F-9",
            "budi",
        ]

    def test_missing_values_become_dash(self):
        row = to_row(TransactionRecord())
        assert row[0] == "-"
        assert row[2] == "-"
        assert row[8] == "-"
        assert row[12] == "-"

    def test_layout_matches_headers(self):
        assert len(EXPORT_COLUMNS) == len(COLUMN_WIDTHS) == len(to_row(TransactionRecord()))
