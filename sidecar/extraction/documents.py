"""Decode uploaded TXT, DOCX and PDF bytes into plain text."""

from __future__ import annotations

import io
import logging
import os

import docx
import fitz

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = (".txt", ".docx", ".pdf")

PDF_FALLBACK_TEXT = (
    "[PDF Content - Text extraction failed]\n\n"
    "This PDF document contains medical information that requires manual review. "
    "Please process the original document directly."
)


class UnsupportedDocumentError(ValueError):
    """Raised for a file type the decoder does not handle."""


def document_extension(filename: str) -> str:
    return os.path.splitext((filename or "").lower())[1]


def is_supported(filename: str) -> bool:
    return document_extension(filename) in SUPPORTED_EXTENSIONS


def _text_from_txt(content: bytes) -> str:
    return content.decode("utf-8", errors="replace").strip()


def _text_from_docx(content: bytes) -> str:
    document = docx.Document(io.BytesIO(content))
    paragraphs = [p.text for p in document.paragraphs if p.text.strip()]
    return "\n".join(paragraphs).strip()


def _text_from_pdf(content: bytes, filename: str) -> str:
    """Extract the text layer; unreadable PDFs yield a manual-review notice."""
    if content[:4] != b"%PDF":
        logger.warning("PDF extraction failed for %s, using fallback: missing %%PDF header", filename)
        return PDF_FALLBACK_TEXT
    try:
        with fitz.open(stream=content, filetype="pdf") as doc:
            pages = [page.get_text() for page in doc]
    except Exception as exc:
        logger.warning("PDF extraction failed for %s, using fallback: %s", filename, exc)
        return PDF_FALLBACK_TEXT

    text = "\n".join(pages).strip()
    if not text:
        logger.warning("PDF %s has no text layer, using fallback", filename)
        return PDF_FALLBACK_TEXT
    return text


def extract_document_text(content: bytes, filename: str) -> str:
    """Return the plain text of an uploaded document.

    Raises UnsupportedDocumentError for anything other than .txt, .docx or
    .pdf. DOCX decoding errors propagate to the caller.
    """
    if not content:
        raise UnsupportedDocumentError(f"Uploaded file is empty: {filename}")
    ext = document_extension(filename)
    if ext == ".txt":
        return _text_from_txt(content)
    if ext == ".docx":
        return _text_from_docx(content)
    if ext == ".pdf":
        return _text_from_pdf(content, filename)
    raise UnsupportedDocumentError(
        f"Unsupported file type: {ext or filename}. Accepted: {', '.join(SUPPORTED_EXTENSIONS)}"
    )
