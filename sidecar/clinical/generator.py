"""
Clinical history generation entry point.

Pipeline: normalize -> extract -> enrich -> render (+ metadata footer).
Stateless per call; the knowledge base is read-only so one generator can be
shared across concurrent uploads.
"""

from __future__ import annotations

import logging
import os
import time
from datetime import datetime
from typing import Optional

from clinical.reasoner import ClinicalReasoner
from extraction.medical_info import MedicalInfoExtractor
from extraction.normalizer import normalize_text
from knowledge import DEFAULT_KNOWLEDGE_BASE, MedicalKnowledgeBase
from reporting import render_report
from reporting.options import GenerationOptions

logger = logging.getLogger(__name__)

MAX_INPUT_CHARS = int(os.getenv("CLINICAL_MAX_INPUT_CHARS", "200000"))


class GenerationError(Exception):
    """Wraps any failure inside the pipeline with the source file name."""

    def __init__(self, file_name: str, cause: BaseException) -> None:
        self.file_name = file_name
        self.cause = cause
        super().__init__(f"Failed to generate clinical history for {file_name}: {cause}")


class ClinicalHistoryGenerator:
    def __init__(
        self,
        knowledge_base: MedicalKnowledgeBase = DEFAULT_KNOWLEDGE_BASE,
        extractor: Optional[MedicalInfoExtractor] = None,
        reasoner: Optional[ClinicalReasoner] = None,
        max_input_chars: int = MAX_INPUT_CHARS,
    ) -> None:
        self.knowledge_base = knowledge_base
        self.extractor = extractor or MedicalInfoExtractor(knowledge_base)
        self.reasoner = reasoner or ClinicalReasoner()
        self.max_input_chars = max_input_chars

    def generate(
        self,
        text: Optional[str],
        file_name: str,
        options: Optional[GenerationOptions] = None,
        generated_at: Optional[datetime] = None,
    ) -> str:
        """Turn raw document text into a formatted clinical history report.

        Raises GenerationError on any internal failure; no partial report is
        returned.
        """
        options = options or GenerationOptions()
        start = time.monotonic()
        logger.info("Generating clinical history for %s", file_name)

        try:
            text = text or ""
            if len(text) > self.max_input_chars:
                logger.warning(
                    "Input for %s truncated from %d to %d characters",
                    file_name, len(text), self.max_input_chars,
                )
                text = text[: self.max_input_chars]

            normalized = normalize_text(text)
            record = self.extractor.extract(normalized)
            record = self.reasoner.enrich(record)
            report = render_report(
                record,
                options,
                file_name,
                generated_at=generated_at,
                knowledge_base=self.knowledge_base,
            )
        except Exception as exc:
            logger.exception("Clinical history generation failed for %s", file_name)
            raise GenerationError(file_name, exc) from exc

        logger.info(
            "Clinical history generated for %s in %.0f ms",
            file_name, (time.monotonic() - start) * 1000,
        )
        return report
