"""
Spreadsheet exchange format (.xlsx)
"""
from .codec import (
    COLUMNS,
    PLAYER_FIELDS,
    XLSX_MIME_TYPE,
    SpreadsheetError,
    WorkbookBlob,
    to_number,
    write_workbook,
    read_workbook,
)

__all__ = [
    "COLUMNS",
    "PLAYER_FIELDS",
    "XLSX_MIME_TYPE",
    "SpreadsheetError",
    "WorkbookBlob",
    "to_number",
    "write_workbook",
    "read_workbook",
]
