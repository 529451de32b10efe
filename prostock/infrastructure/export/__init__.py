"""Spreadsheet export infrastructure."""

from prostock.infrastructure.export.xlsx_writer import build_workbook, save_workbook, workbook_bytes

__all__ = ["build_workbook", "workbook_bytes", "save_workbook"]
