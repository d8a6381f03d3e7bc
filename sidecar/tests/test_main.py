"""Tests for app-level logging setup and PHI scrubbing."""

import logging
import os
import tempfile
from logging.handlers import RotatingFileHandler

import pytest

from main import _scrub_phi, configure_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


def test_configure_logging_writes_combined_and_error_logs(restore_root_logger):
    with tempfile.TemporaryDirectory() as tmp:
        configure_logging(tmp)
        logging.getLogger("clinical.generator").info("generated")
        logging.getLogger("clinical.generator").error("failed")
        for handler in logging.getLogger().handlers:
            handler.flush()

        file_handlers = [h for h in logging.getLogger().handlers if isinstance(h, RotatingFileHandler)]
        assert len(file_handlers) == 2

        with open(os.path.join(tmp, "combined.log")) as f:
            combined = f.read()
        with open(os.path.join(tmp, "error.log")) as f:
            errors = f.read()
        for handler in file_handlers:
            handler.close()

    assert "generated" in combined and "failed" in combined
    assert "failed" in errors and "generated" not in errors


class TestScrubPhi:
    def test_labeled_name(self):
        assert "Jane" not in _scrub_phi("Patient: Jane Doe presented")

    def test_file_name(self):
        assert "smith_john.pdf" not in _scrub_phi("Failed on smith_john.pdf today")

    def test_dates_and_ssn(self):
        scrubbed = _scrub_phi("DOB 01/02/1960 SSN 123-45-6789")
        assert "1960" not in scrubbed
        assert "6789" not in scrubbed

    def test_clinical_text_untouched(self):
        assert _scrub_phi("chest pain for 2 days") == "chest pain for 2 days"
