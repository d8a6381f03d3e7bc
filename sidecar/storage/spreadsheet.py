"""Spreadsheet log of generated clinical histories (clinical-histories.xlsx)."""

from __future__ import annotations

import io
import logging
import os
import secrets
import string
import threading
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

import openpyxl
import platformdirs
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from api.models import HistoryListItem, SystemStats
from reporting.options import GenerationOptions

logger = logging.getLogger(__name__)

WORKBOOK_NAME = "clinical-histories.xlsx"
HISTORY_SHEET = "Clinical Histories"
HEADERS = [
    "ID", "Date", "Time", "File Name", "File Size", "Processing Time (ms)",
    "Output Format", "Detail Level", "ICD-10 Included", "Medications Included",
    "Extracted Text", "Clinical History",
]
EXTRACTED_TEXT_LIMIT = 1000
_ID_ALPHABET = string.ascii_uppercase + string.digits


def get_data_dir() -> str:
    """DATA_DIR if set, otherwise the OS user data directory."""
    data_dir = os.getenv("DATA_DIR") or platformdirs.user_data_dir("ClinicalHistory")
    os.makedirs(data_dir, exist_ok=True)
    return data_dir


def truncate_text(text: Optional[str], limit: int = EXTRACTED_TEXT_LIMIT) -> Optional[str]:
    if not text or len(text) <= limit:
        return text
    return text[:limit] + "... [truncated]"


def generate_history_id(now: Optional[datetime] = None) -> str:
    now = now or datetime.now()
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(6))
    return f"CH-{now:%Y%m%d}-{suffix}"


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def _as_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _auto_size_columns(worksheet: Worksheet) -> None:
    for col_idx, column in enumerate(worksheet.columns, 1):
        width = 10
        for cell in column:
            if cell.value is not None:
                width = max(width, min(len(str(cell.value)), 50))
        worksheet.column_dimensions[get_column_letter(col_idx)].width = width


@dataclass
class HistoryEntry:
    """One processed document, as logged to the workbook."""

    file_name: str
    file_size: int
    extracted_text: str
    clinical_history: str
    options: GenerationOptions = field(default_factory=GenerationOptions)
    processing_time_ms: int = 0
    timestamp: datetime = field(default_factory=datetime.now)

    def to_row(self, history_id: str) -> list[Any]:
        return [
            history_id,
            f"{self.timestamp:%Y-%m-%d}",
            f"{self.timestamp:%H:%M:%S}",
            self.file_name,
            self.file_size,
            self.processing_time_ms,
            self.options.output_format,
            self.options.detail_level,
            _yes_no(self.options.include_icd10),
            _yes_no(self.options.include_medications),
            truncate_text(self.extracted_text),
            self.clinical_history,
        ]


class HistoryWorkbook:
    """Append-only xlsx log with listing, lookup, stats and a summary report."""

    def __init__(self, path: str | None = None) -> None:
        self._path = path or os.path.join(get_data_dir(), WORKBOOK_NAME)
        self._lock = threading.Lock()

    @property
    def path(self) -> str:
        return self._path

    def exists(self) -> bool:
        return os.path.exists(self._path)

    def _load_or_create(self) -> openpyxl.Workbook:
        if self.exists():
            workbook = openpyxl.load_workbook(self._path)
            if HISTORY_SHEET not in workbook.sheetnames:
                workbook.create_sheet(HISTORY_SHEET).append(HEADERS)
            return workbook

        workbook = openpyxl.Workbook()
        sheet = workbook.active
        sheet.title = HISTORY_SHEET
        sheet.append(HEADERS)
        return workbook

    def _records(self) -> list[list[Any]]:
        """Data rows of the history sheet, header excluded."""
        if not self.exists():
            return []
        workbook = openpyxl.load_workbook(self._path, read_only=True)
        try:
            if HISTORY_SHEET not in workbook.sheetnames:
                return []
            rows = workbook[HISTORY_SHEET].iter_rows(min_row=2, values_only=True)
            return [list(row) for row in rows if row and row[0] is not None]
        finally:
            workbook.close()

    def save_entry(self, entry: HistoryEntry) -> str:
        logger.info("Saving clinical history to workbook: %s", entry.file_name)
        with self._lock:
            workbook = self._load_or_create()
            sheet = workbook[HISTORY_SHEET]
            history_id = generate_history_id(entry.timestamp)
            sheet.append(entry.to_row(history_id))
            _auto_size_columns(sheet)
            os.makedirs(os.path.dirname(self._path) or ".", exist_ok=True)
            workbook.save(self._path)
        logger.info("Saved clinical history with ID: %s", history_id)
        return history_id

    def list_histories(self) -> list[HistoryListItem]:
        return [
            HistoryListItem(
                id=str(row[0]),
                date=row[1],
                time=row[2],
                file_name=row[3],
                output_format=row[6],
                detail_level=row[7],
                clinical_history=row[11],
            )
            for row in self._records()
        ]

    def get_history(self, history_id: str) -> Optional[HistoryListItem]:
        for item in self.list_histories():
            if item.id == history_id:
                return item
        return None

    def get_stats(self) -> SystemStats:
        records = self._records()
        if not records:
            return SystemStats()

        processing_times = [_as_int(row[5]) for row in records]
        last = records[-1]
        return SystemStats(
            processed_count=len(records),
            histories_generated=len(records),
            avg_processing_time=round(sum(processing_times) / len(processing_times)),
            success_rate=100,
            total_file_size=sum(_as_int(row[4]) for row in records),
            last_processed=f"{last[1]} {last[2]}",
        )

    def _summary_rows(self, records: list[list[Any]], now: datetime) -> list[list[Any]]:
        generated = f"{now:%Y-%m-%d %H:%M:%S}"
        if not records:
            return [
                ["Clinical Histories Summary"],
                ["No data available"],
                [],
                ["Generated:", generated],
            ]

        stats = self.get_stats()
        formats = Counter(row[6] or "Unknown" for row in records)
        daily = Counter(row[1] for row in records)

        rows: list[list[Any]] = [
            ["CLINICAL HISTORIES SUMMARY REPORT"],
            ["Generated:", generated],
            [],
            ["OVERALL STATISTICS"],
            ["Total Documents Processed:", stats.processed_count],
            ["Total Clinical Histories Generated:", stats.histories_generated],
            ["Average Processing Time (ms):", stats.avg_processing_time],
            ["Success Rate:", f"{stats.success_rate}%"],
            ["Total File Size Processed (bytes):", stats.total_file_size],
            ["Last Processed:", stats.last_processed or "N/A"],
            [],
            ["OUTPUT FORMAT DISTRIBUTION"],
        ]
        rows += [[f"{fmt}:", count] for fmt, count in formats.items()]
        rows += [[], ["DAILY PROCESSING VOLUME"]]
        rows += [[f"{date}:", count] for date, count in daily.items()]
        rows += [[], ["RECENT ACTIVITY"]]
        rows += [[f"{row[1]} {row[2]}", row[3]] for row in records[-5:]]
        return rows

    def build_report(self, now: Optional[datetime] = None) -> bytes:
        """The log with a leading Summary sheet, serialized as xlsx bytes."""
        now = now or datetime.now()
        with self._lock:
            if not self.exists():
                workbook = openpyxl.Workbook()
                sheet = workbook.active
                sheet.title = "Report"
                sheet.append(["No clinical histories processed yet."])
            else:
                records = self._records()
                workbook = openpyxl.load_workbook(self._path)
                summary = workbook.create_sheet("Summary", 0)
                for row in self._summary_rows(records, now):
                    summary.append(row)
                workbook.active = 0

            buffer = io.BytesIO()
            workbook.save(buffer)
        return buffer.getvalue()


_workbook_instance: HistoryWorkbook | None = None


def get_workbook() -> HistoryWorkbook:
    """Return the singleton HistoryWorkbook instance."""
    global _workbook_instance
    if _workbook_instance is None:
        _workbook_instance = HistoryWorkbook()
    return _workbook_instance
