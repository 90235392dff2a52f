from __future__ import annotations

import io
from pathlib import Path
from urllib.parse import quote

import pytest
from fastapi.testclient import TestClient
from pypdf import PdfReader

from apps.backend.app.main import RECOVERED_HEADER, _content_disposition, app


client = TestClient(app)


def test_index_serves_upload_form() -> None:
    response = client.get("/")

    assert response.status_code == 200
    assert 'action="/recover"' in response.text
    assert 'type="file"' in response.text


def test_health() -> None:
    assert client.get("/health").json() == {"status": "ok"}


def test_recover_returns_repaired_pdf(lost_annotations_pdf: bytes) -> None:
    files = {"file": ("notes.pdf", lost_annotations_pdf, "application/pdf")}

    response = client.post("/recover", files=files)

    assert response.status_code == 200
    assert response.headers.get("content-type") == "application/pdf"
    assert response.headers.get(RECOVERED_HEADER) == "2"
    assert "notes_recovered.pdf" in response.headers.get("content-disposition", "")
    reader = PdfReader(io.BytesIO(response.content))
    assert len(reader.pages[0]["/Annots"]) == 4


def test_recover_encodes_non_ascii_filename(lost_annotations_pdf: bytes) -> None:
    files = {"file": ("日本語.pdf", lost_annotations_pdf, "application/pdf")}

    response = client.post("/recover", files=files)

    assert response.status_code == 200
    assert response.headers.get(RECOVERED_HEADER) == "2"
    expected = quote("日本語_recovered.pdf")
    assert response.headers["content-disposition"] == f"attachment; filename*=utf-8''{expected}"


@pytest.mark.parametrize(
    ("filename", "expected"),
    [
        ("notes_recovered.pdf", 'attachment; filename="notes_recovered.pdf"'),
        ('say "hi".pdf', "attachment; filename*=utf-8''say%20%22hi%22.pdf"),
        ("résumé.pdf", "attachment; filename*=utf-8''r%C3%A9sum%C3%A9.pdf"),
    ],
)
def test_content_disposition(filename: str, expected: str) -> None:
    assert _content_disposition(filename) == expected


def test_recover_without_lost_annotations(sample_pdf: Path) -> None:
    files = {"file": ("sample.pdf", sample_pdf.read_bytes(), "application/pdf")}

    response = client.post("/recover", files=files)

    assert response.status_code == 422
    detail = response.json()["detail"]
    assert detail["message"] == "Unable to recover annotations."
    assert len(detail["reasons"]) == 3


def test_recover_rejects_empty_upload() -> None:
    files = {"file": ("empty.pdf", b"", "application/pdf")}

    response = client.post("/recover", files=files)

    assert response.status_code == 400
    assert "is empty" in response.text


def test_recover_rejects_invalid_pdf() -> None:
    files = {"file": ("broken.pdf", b"not a pdf", "application/pdf")}

    response = client.post("/recover", files=files)

    assert response.status_code == 400
    assert "PDF" in response.json()["detail"]
