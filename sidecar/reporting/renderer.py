"""Select a template for the requested format and append the metadata footer."""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional

from extraction.medical_info import MedicalInfo
from knowledge import DEFAULT_KNOWLEDGE_BASE, MedicalKnowledgeBase
from reporting.options import GenerationOptions, OutputFormat
from reporting.templates import render_narrative, render_soap, render_structured

GENERATOR_NAME = "Clinical History AI Agent v1.0"

Template = Callable[[MedicalInfo, GenerationOptions, MedicalKnowledgeBase, datetime], str]

TEMPLATES: dict[OutputFormat, Template] = {
    OutputFormat.SOAP: render_soap,
    OutputFormat.NARRATIVE: render_narrative,
    OutputFormat.STRUCTURED: render_structured,
}

_FOOTER_DISCLAIMERS = (
    "This clinical history is AI-generated from source documentation",
    "All information should be verified through direct patient assessment",
    "Clinical correlation and professional judgment are required",
    "This tool is for clinical decision support only",
    "Always follow institutional protocols and guidelines",
)


def _included(flag: bool) -> str:
    return "Included" if flag else "Not included"


def metadata_footer(
    file_name: str,
    options: GenerationOptions,
    fmt: OutputFormat,
    generated_at: datetime,
) -> str:
    lines = [
        "DOCUMENT METADATA:",
        "=================",
        f"Source File: {file_name}",
        f"Generated: {generated_at:%Y-%m-%d %H:%M:%S}",
        f"Format: {fmt.value.upper()}",
        f"Detail Level: {options.detail_level or 'standard'}",
        f"ICD-10 Codes: {_included(options.include_icd10)}",
        f"Medications: {_included(options.include_medications)}",
        f"Generator: {GENERATOR_NAME}",
        "",
        "IMPORTANT DISCLAIMERS:",
        "=====================",
    ]
    lines.extend(f"• {item}" for item in _FOOTER_DISCLAIMERS)
    return "\n".join(lines)


def render_report(
    record: MedicalInfo,
    options: GenerationOptions,
    file_name: str,
    generated_at: Optional[datetime] = None,
    knowledge_base: MedicalKnowledgeBase = DEFAULT_KNOWLEDGE_BASE,
) -> str:
    """Render an enriched record in the requested format, footer included.

    An unknown or missing format falls back to SOAP; the footer names the
    format actually used.
    """
    if generated_at is None:
        generated_at = datetime.now()
    fmt = options.resolved_format
    body = TEMPLATES[fmt](record, options, knowledge_base, generated_at)
    return body + "\n\n" + metadata_footer(file_name, options, fmt, generated_at)
