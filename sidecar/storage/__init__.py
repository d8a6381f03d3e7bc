"""Persistent storage: the xlsx log of generated clinical histories."""

from storage.spreadsheet import (
    HistoryEntry,
    HistoryWorkbook,
    get_data_dir,
    get_workbook,
)

__all__ = [
    "HistoryEntry",
    "HistoryWorkbook",
    "get_data_dir",
    "get_workbook",
]
