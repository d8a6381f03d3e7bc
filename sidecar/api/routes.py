import logging
import os
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, Response, UploadFile

from api.models import (
    GenerationOptions,
    HealthResponse,
    HistoryListItem,
    SystemStats,
    UploadItemResult,
    UploadResponse,
    UploadStatus,
)
from api.rate_limit import UPLOAD_RATE_LIMIT, limiter
from clinical import ClinicalHistoryGenerator
from extraction.documents import SUPPORTED_EXTENSIONS, extract_document_text, is_supported
from storage import HistoryEntry, HistoryWorkbook, get_workbook

_logger = logging.getLogger(__name__)

MAX_FILES = 10
MAX_FILE_SIZE = 50 * 1024 * 1024

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

router = APIRouter(prefix="/api")

_generator = ClinicalHistoryGenerator()


def get_generator() -> ClinicalHistoryGenerator:
    return _generator


def _attachment(filename: str) -> dict[str, str]:
    return {"Content-Disposition": f'attachment; filename="{filename}"'}


@router.get("/health", response_model=HealthResponse)
async def health_check():
    return HealthResponse(
        status="ok",
        timestamp=datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
    )


@router.get("/stats", response_model=SystemStats)
def get_stats(workbook: HistoryWorkbook = Depends(get_workbook)):
    try:
        return workbook.get_stats()
    except Exception as e:
        _logger.exception("Error getting system stats: %s", e)
        raise HTTPException(status_code=500, detail="Failed to get system statistics.")


@router.post("/upload", response_model=UploadResponse)
@limiter.limit(UPLOAD_RATE_LIMIT)
async def upload_documents(
    request: Request,
    documents: list[UploadFile] = File(default=[]),
    output_format: str = Form("soap", alias="outputFormat"),
    detail_level: str = Form("standard", alias="detailLevel"),
    include_icd10: bool = Form(False, alias="includeICD10"),
    include_medications: bool = Form(False, alias="includeMedications"),
    workbook: HistoryWorkbook = Depends(get_workbook),
    generator: ClinicalHistoryGenerator = Depends(get_generator),
):
    """Generate a clinical history for each uploaded PDF, DOCX or TXT file.

    Request-level problems (no files, too many, unsupported type, oversized
    file) reject the whole batch. A file that fails to decode, generate or
    save becomes an error entry and the rest of the batch continues.
    """
    if not documents:
        raise HTTPException(status_code=400, detail="No files uploaded.")
    if len(documents) > MAX_FILES:
        raise HTTPException(
            status_code=400,
            detail=f"Too many files. Maximum is {MAX_FILES} per upload.",
        )
    for document in documents:
        if not is_supported(document.filename or ""):
            raise HTTPException(
                status_code=400,
                detail=(
                    f"Invalid file type: {document.filename}. "
                    f"Only {', '.join(SUPPORTED_EXTENSIONS)} files are allowed."
                ),
            )

    # Size-check the whole batch before anything is generated or saved
    contents: list[bytes] = []
    for document in documents:
        content = await document.read()
        if len(content) > MAX_FILE_SIZE:
            raise HTTPException(status_code=400, detail="File too large. Maximum size is 50MB.")
        contents.append(content)

    options = GenerationOptions(
        output_format=output_format or "soap",
        detail_level=detail_level or "standard",
        include_icd10=include_icd10,
        include_medications=include_medications,
    )

    results: list[UploadItemResult] = []
    for document, content in zip(documents, contents):
        file_name = document.filename or "document"
        start = time.monotonic()
        try:
            _logger.info("Processing file: %s", file_name)
            text = extract_document_text(content, file_name)
            history = generator.generate(text, file_name, options)
            history_id = workbook.save_entry(HistoryEntry(
                file_name=file_name,
                file_size=len(content),
                extracted_text=text,
                clinical_history=history,
                options=options,
                processing_time_ms=round((time.monotonic() - start) * 1000),
            ))
        except Exception as e:
            _logger.exception("Error processing file %s", file_name)
            results.append(UploadItemResult(
                file_name=file_name,
                status=UploadStatus.ERROR,
                error=str(e),
            ))
            continue

        results.append(UploadItemResult(
            file_name=file_name,
            status=UploadStatus.SUCCESS,
            clinical_history=history,
            history_id=history_id,
        ))

    succeeded = sum(1 for r in results if r.status == UploadStatus.SUCCESS)
    return UploadResponse(
        success=True,
        results=results,
        total_processed=succeeded,
        total_errors=len(results) - succeeded,
    )


@router.get("/download/excel")
def download_excel(workbook: HistoryWorkbook = Depends(get_workbook)):
    try:
        content = workbook.build_report()
    except Exception as e:
        _logger.exception("Excel download error: %s", e)
        raise HTTPException(status_code=500, detail="Failed to generate Excel report.")

    filename = f"clinical-histories-{datetime.now():%Y-%m-%d-%H%M}.xlsx"
    return Response(content=content, media_type=XLSX_MEDIA_TYPE, headers=_attachment(filename))


@router.get("/download/history/{history_id}")
def download_history(history_id: str, workbook: HistoryWorkbook = Depends(get_workbook)):
    try:
        history = workbook.get_history(history_id)
    except Exception as e:
        _logger.exception("History download error: %s", e)
        raise HTTPException(status_code=500, detail="Failed to download clinical history.")

    if history is None:
        raise HTTPException(status_code=404, detail="Clinical history not found.")

    stem = os.path.splitext(history.file_name or history.id)[0]
    return Response(
        content=history.clinical_history or "",
        media_type="text/plain; charset=utf-8",
        headers=_attachment(f"{stem}-clinical-history.txt"),
    )


@router.get("/histories", response_model=list[HistoryListItem])
def list_histories(workbook: HistoryWorkbook = Depends(get_workbook)):
    try:
        return workbook.list_histories()
    except Exception as e:
        _logger.exception("Error getting histories: %s", e)
        raise HTTPException(status_code=500, detail="Failed to retrieve clinical histories.")
