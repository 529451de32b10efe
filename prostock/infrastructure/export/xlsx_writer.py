"""Excel workbook writer for tabular exports (openpyxl)."""

from collections.abc import Iterable, Sequence
from io import BytesIO
from pathlib import Path
from typing import Any

import openpyxl
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from prostock.config import get_logger

logger = get_logger(__name__)

# Excel caps sheet titles at 31 characters
_MAX_TITLE = 31


def build_workbook(
    headers: Sequence[str],
    rows: Iterable[Sequence[Any]],
    sheet_name: str,
    widths: Sequence[int] | None = None,
) -> openpyxl.Workbook:
    """Single-sheet workbook with a bold header row."""
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = sheet_name[:_MAX_TITLE]

    ws.append(list(headers))
    for cell in ws[1]:
        cell.font = Font(bold=True)
    ws.freeze_panes = "A2"

    for row in rows:
        ws.append(list(row))

    for index, width in enumerate(widths or (), start=1):
        ws.column_dimensions[get_column_letter(index)].width = width

    return wb


def workbook_bytes(wb: openpyxl.Workbook) -> bytes:
    buffer = BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


def save_workbook(wb: openpyxl.Workbook, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(path)
    logger.info("workbook_saved", path=str(path))
    return path
