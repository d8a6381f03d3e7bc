"""HTTP tests for the /api routes using FastAPI's TestClient."""

import io
import logging
import os
import tempfile

import openpyxl
import pytest
from fastapi.testclient import TestClient

from main import create_app
from storage import HistoryWorkbook, get_workbook

SCENARIO = b"62-year-old male with hypertension presents with chest pain for 2 days. BP: 150/90."


@pytest.fixture
def workbook():
    with tempfile.TemporaryDirectory() as tmp:
        yield HistoryWorkbook(path=os.path.join(tmp, "clinical-histories.xlsx"))


@pytest.fixture
def client(workbook):
    app = create_app()
    app.dependency_overrides[get_workbook] = lambda: workbook
    return TestClient(app)


def _upload(client, *files, **form):
    data = {"outputFormat": "soap", "includeICD10": "true", "includeMedications": "false"}
    data.update(form)
    return client.post(
        "/api/upload",
        files=[("documents", f) for f in files],
        data=data,
    )


class TestHealth:
    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["timestamp"].endswith("Z")

    def test_no_cache_headers(self, client):
        response = client.get("/api/health")
        assert "no-store" in response.headers["cache-control"]

    def test_requests_are_audited(self, client, caplog):
        with caplog.at_level(logging.INFO, logger="audit"):
            client.get("/api/health")
        assert any(
            "method=GET path=/api/health status=200" in r.getMessage() for r in caplog.records
        )


class TestUpload:
    def test_single_text_file(self, client, workbook):
        response = _upload(client, ("note.txt", SCENARIO, "text/plain"))
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["total_processed"] == 1
        assert body["total_errors"] == 0

        result = body["results"][0]
        assert result["status"] == "success"
        assert result["file_name"] == "note.txt"
        assert result["history_id"].startswith("CH-")
        assert "Chief Complaint: Chest pain" in result["clinical_history"]
        assert "Hypertension (I10)" in result["clinical_history"]
        assert "BP: 150/90 mmHg" in result["clinical_history"]
        assert len(workbook.list_histories()) == 1

    def test_flags_default_off(self, client):
        response = client.post(
            "/api/upload", files=[("documents", ("note.txt", SCENARIO, "text/plain"))],
        )
        history = response.json()["results"][0]["clinical_history"]
        assert "I10" not in history
        assert "ICD-10 Codes: Not included" in history

    def test_mixed_batch_continues(self, client, workbook):
        response = _upload(
            client,
            ("empty.txt", b"", "text/plain"),
            ("note.txt", SCENARIO, "text/plain"),
        )
        assert response.status_code == 200
        body = response.json()
        assert body["total_processed"] == 1
        assert body["total_errors"] == 1
        failed, succeeded = body["results"]
        assert failed["status"] == "error"
        assert "empty" in failed["error"]
        assert failed["clinical_history"] is None
        assert succeeded["status"] == "success"
        assert len(workbook.list_histories()) == 1

    def test_no_files(self, client):
        response = client.post("/api/upload", data={"outputFormat": "soap"})
        assert response.status_code == 400

    def test_unsupported_type(self, client):
        response = _upload(client, ("setup.exe", b"MZ", "application/octet-stream"))
        assert response.status_code == 400
        assert "setup.exe" in response.json()["detail"]

    def test_too_many_files(self, client):
        files = [(f"n{i}.txt", b"cough", "text/plain") for i in range(11)]
        assert _upload(client, *files).status_code == 400

    def test_oversized_file_rejects_batch_before_saving(self, client, workbook, monkeypatch):
        monkeypatch.setattr("api.routes.MAX_FILE_SIZE", 200)
        response = _upload(
            client,
            ("a.txt", SCENARIO, "text/plain"),
            ("b.txt", b"x" * 500, "text/plain"),
        )
        assert response.status_code == 400
        assert "too large" in response.json()["detail"]
        assert workbook.list_histories() == []


class TestHistories:
    def test_list_and_download(self, client):
        uploaded = _upload(client, ("visit.note.txt", SCENARIO, "text/plain")).json()["results"][0]

        listing = client.get("/api/histories")
        assert listing.status_code == 200
        items = listing.json()
        assert [item["id"] for item in items] == [uploaded["history_id"]]
        assert items[0]["file_name"] == "visit.note.txt"

        download = client.get(f"/api/download/history/{uploaded['history_id']}")
        assert download.status_code == 200
        assert download.headers["content-type"].startswith("text/plain")
        assert download.headers["content-disposition"] == (
            'attachment; filename="visit.note-clinical-history.txt"'
        )
        assert download.text == uploaded["clinical_history"]

    def test_unknown_history(self, client):
        assert client.get("/api/download/history/CH-20260101-XXXXXX").status_code == 404

    def test_stats(self, client):
        assert client.get("/api/stats").json()["processed_count"] == 0
        _upload(client, ("note.txt", SCENARIO, "text/plain"))
        stats = client.get("/api/stats").json()
        assert stats["processed_count"] == 1
        assert stats["total_file_size"] == len(SCENARIO)
        assert stats["success_rate"] == 100


class TestExcelDownload:
    def test_empty_report(self, client):
        response = client.get("/api/download/excel")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith(
            "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
        )
        assert 'filename="clinical-histories-' in response.headers["content-disposition"]
        report = openpyxl.load_workbook(io.BytesIO(response.content))
        assert report.sheetnames == ["Report"]

    def test_report_with_entries(self, client):
        _upload(client, ("note.txt", SCENARIO, "text/plain"))
        report = openpyxl.load_workbook(io.BytesIO(client.get("/api/download/excel").content))
        assert report.sheetnames[0] == "Summary"
