from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel

from reporting.options import GenerationOptions, OutputFormat

__all__ = [
    "GenerationOptions",
    "HealthResponse",
    "HistoryListItem",
    "OutputFormat",
    "SystemStats",
    "UploadItemResult",
    "UploadResponse",
    "UploadStatus",
]


class UploadStatus(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


class UploadItemResult(BaseModel):
    file_name: str
    status: UploadStatus
    clinical_history: Optional[str] = None
    history_id: Optional[str] = None
    error: Optional[str] = None


class UploadResponse(BaseModel):
    success: bool
    results: list[UploadItemResult]
    total_processed: int
    total_errors: int


class HistoryListItem(BaseModel):
    id: str
    file_name: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    output_format: Optional[str] = None
    detail_level: Optional[str] = None
    clinical_history: Optional[str] = None


class SystemStats(BaseModel):
    processed_count: int = 0
    histories_generated: int = 0
    avg_processing_time: int = 0
    success_rate: int = 100
    total_file_size: int = 0
    last_processed: Optional[str] = None


class HealthResponse(BaseModel):
    status: str
    timestamp: str
