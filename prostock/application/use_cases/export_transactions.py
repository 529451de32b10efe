"""Excel export of the transaction ledger."""

import time
from dataclasses import dataclass
from pathlib import Path

from prostock.application.context import AppContext
from prostock.application.dto.requests import ExportRequest
from prostock.config import get_logger
from prostock.core.exceptions import NoRecordsToExportError, ValidationError
from prostock.core.services import ExportFilter, filter_records, to_row
from prostock.core.services.transaction_export import COLUMN_WIDTHS, EXPORT_COLUMNS
from prostock.infrastructure.export import build_workbook, save_workbook, workbook_bytes

logger = get_logger(__name__)

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@dataclass
class ExportResult:
    """A rendered workbook."""

    filename: str
    content: bytes
    row_count: int
    path: Path | None = None


class ExportTransactionsUseCase:
    """Filter the ledger and render it as an .xlsx workbook."""

    def __init__(self, context: AppContext):
        self._ctx = context

    async def execute(self, request: ExportRequest) -> ExportResult:
        self._ctx.require_user()
        if request.start_date > request.end_date:
            raise ValidationError("start_date", "Start date must not be after end date", request.start_date)

        export_filter = ExportFilter(
            start_date=request.start_date,
            end_date=request.end_date,
            item_id=request.item_id or None,
            type=request.type,
        )

        logger.info(
            "export_started",
            start_date=request.start_date.isoformat(),
            end_date=request.end_date.isoformat(),
            item_id=request.item_id,
            type=request.type.value if request.type else None,
        )

        records = await self._ctx.backend.get_transactions()
        matched = filter_records(records, export_filter)
        if not matched:
            self._ctx.notifier.notify("No records found for the selected filter")
            raise NoRecordsToExportError()

        settings = self._ctx.settings.export
        wb = build_workbook(
            headers=EXPORT_COLUMNS,
            rows=(to_row(r) for r in matched),
            sheet_name=settings.sheet_name,
            widths=COLUMN_WIDTHS,
        )
        filename = f"Export_Inventory_{int(time.time() * 1000)}.xlsx"

        path = save_workbook(wb, settings.output_dir / filename) if request.save else None
        result = ExportResult(
            filename=filename,
            content=workbook_bytes(wb),
            row_count=len(matched),
            path=path,
        )

        self._ctx.notifier.success("Data exported to Excel")
        logger.info("export_complete", rows=result.row_count, filename=filename)
        return result
