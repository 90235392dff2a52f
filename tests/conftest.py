from __future__ import annotations

import io
from pathlib import Path
from typing import Callable
import sys

import pytest
from pypdf import PdfWriter
from pypdf.generic import ArrayObject, DictionaryObject, NameObject, NumberObject, TextStringObject

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from pdf_annotation_fixer.backends.memory import MemoryDocument  # noqa: E402
from pdf_annotation_fixer.types import ObjectRef  # noqa: E402


def text_annotation(index: int) -> DictionaryObject:
    return DictionaryObject(
        {
            NameObject("/Type"): NameObject("/Annot"),
            NameObject("/Subtype"): NameObject("/Text"),
            NameObject("/Rect"): ArrayObject(
                [NumberObject(10), NumberObject(10), NumberObject(30), NumberObject(30)]
            ),
            NameObject("/Contents"): TextStringObject(f"note {index}"),
        }
    )


def build_lost_annotations_pdf(
    *, kept: int = 2, total: int = 4, user_password: str | None = None
) -> bytes:
    """Two-page PDF whose first page only keeps ``kept`` of ``total`` annotations.

    The complete list survives as an orphaned array object. The file is
    encrypted when ``user_password`` is given.
    """

    writer = PdfWriter()
    first_page = writer.add_blank_page(width=200, height=200)
    writer.add_blank_page(width=200, height=200)
    annotations = [writer._add_object(text_annotation(index)) for index in range(total)]
    writer._add_object(ArrayObject(annotations))
    first_page[NameObject("/Annots")] = ArrayObject(annotations[:kept])
    if user_password is not None:
        writer.encrypt(user_password=user_password, owner_password="owner")
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


def annotation(index: int) -> dict:
    return {"/Type": "/Annot", "/Subtype": "/Text", "/Contents": f"note {index}"}


@pytest.fixture()
def lost_annotations_pdf() -> bytes:
    return build_lost_annotations_pdf()


@pytest.fixture()
def lost_annotations_file(tmp_path: Path, lost_annotations_pdf: bytes) -> Path:
    pdf_path = tmp_path / "notes.pdf"
    pdf_path.write_bytes(lost_annotations_pdf)
    return pdf_path


@pytest.fixture()
def sample_pdf(tmp_path: Path) -> Path:
    pdf_path = tmp_path / "sample.pdf"
    writer = PdfWriter()
    for _ in range(3):
        writer.add_blank_page(width=200, height=200)
    writer.add_metadata({"/Producer": "pdf-annotation-fixer-tests", "/Title": "Sample"})
    with pdf_path.open("wb") as stream:
        writer.write(stream)
    return pdf_path


@pytest.fixture()
def document_factory() -> Callable[..., MemoryDocument]:
    """Build a two-page in-memory document with four annotation objects.

    Objects 1-4 are annotations, 10 and 11 are pages, and ``extra`` objects
    are merged in last so tests can add candidate arrays or override pages.
    """

    def _create(page_annots=None, *, extra: dict | None = None) -> MemoryDocument:
        objects = {ObjectRef(number): annotation(number) for number in range(1, 5)}
        first_page = {"/Type": "/Page"}
        if page_annots is not None:
            first_page["/Annots"] = page_annots
        objects[ObjectRef(10)] = first_page
        objects[ObjectRef(11)] = {"/Type": "/Page"}
        objects.update(extra or {})
        return MemoryDocument(objects=objects, pages={1: ObjectRef(10), 2: ObjectRef(11)})

    return _create


@pytest.fixture()
def pdf_builder() -> Callable[..., bytes]:
    return build_lost_annotations_pdf
