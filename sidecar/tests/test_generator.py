"""Tests for the ClinicalHistoryGenerator entry point."""

import logging
from datetime import datetime

import pytest

from clinical import ClinicalHistoryGenerator, GenerationError
from extraction.medical_info import MedicalInfo
from reporting.options import GenerationOptions

FIXED_TIME = datetime(2026, 10, 18, 9, 0, 0)


class _ExplodingReasoner:
    def enrich(self, info: MedicalInfo) -> MedicalInfo:
        raise RuntimeError("boom")


class TestGenerate:
    def test_none_text_renders_placeholder_report(self):
        report = ClinicalHistoryGenerator().generate(None, "blank.txt", generated_at=FIXED_TIME)
        assert "Chief Complaint: General medical evaluation" in report
        assert "Source File: blank.txt" in report

    def test_default_options(self):
        report = ClinicalHistoryGenerator().generate("Cough.", "a.txt", generated_at=FIXED_TIME)
        assert "Format: SOAP" in report
        assert "Detail Level: standard" in report

    def test_uses_current_time_when_not_given(self):
        report = ClinicalHistoryGenerator().generate("Cough.", "a.txt")
        assert f"Generated: {datetime.now():%Y-%m-%d}" in report


class TestInputCap:
    def test_long_input_truncated(self, caplog):
        generator = ClinicalHistoryGenerator(max_input_chars=20)
        text = "chest pain " + "x" * 100 + " hypertension"
        with caplog.at_level(logging.WARNING, logger="clinical.generator"):
            report = generator.generate(
                text, "long.txt", GenerationOptions(include_icd10=True), generated_at=FIXED_TIME,
            )
        assert "Chief Complaint: Chest pain" in report
        assert "I10" not in report
        assert any("truncated" in r.getMessage() for r in caplog.records)

    def test_short_input_untouched(self, caplog):
        with caplog.at_level(logging.WARNING, logger="clinical.generator"):
            ClinicalHistoryGenerator(max_input_chars=1000).generate("Cough.", "a.txt")
        assert not any("truncated" in r.getMessage() for r in caplog.records)


class TestFailures:
    def test_internal_error_wrapped(self):
        generator = ClinicalHistoryGenerator(reasoner=_ExplodingReasoner())
        with pytest.raises(GenerationError) as exc_info:
            generator.generate("Cough.", "broken.txt")
        assert str(exc_info.value) == "Failed to generate clinical history for broken.txt: boom"
        assert exc_info.value.file_name == "broken.txt"
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_failure_logged_with_file_name(self, caplog):
        generator = ClinicalHistoryGenerator(reasoner=_ExplodingReasoner())
        with caplog.at_level(logging.ERROR, logger="clinical.generator"):
            with pytest.raises(GenerationError):
                generator.generate("Cough.", "broken.txt")
        assert any("broken.txt" in r.getMessage() for r in caplog.records)
