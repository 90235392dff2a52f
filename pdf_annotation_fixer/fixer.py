"""Parse, repair and serialize PDF documents.

These helpers are the entry points used by the CLI and the web form.  They
accept paths, raw bytes or binary streams and never emit partially written
output: the repaired document is serialized into memory first and only
handed back (or written to disk) once every step succeeded.
"""

from __future__ import annotations

import io
from pathlib import Path
from typing import Optional, Tuple

from .backends.base import DocumentBackend, DocumentModel
from .backends.pypdf_backend import PypdfBackend
from .exceptions import AnnotationFixerError, OutputExistsError, SerializeError
from .recovery import build_candidate_pool, current_annotations, plan_repairs, recover_annotations
from .types import DocumentReport, FixResult, PageAnnotations
from .utils import PdfSource, get_logger, read_source, recovered_filename, resolve_path

LOGGER = get_logger("pdf_annotation_fixer.fixer")


def _load(source: PdfSource, backend: Optional[DocumentBackend]) -> DocumentModel:
    backend = backend or PypdfBackend()
    return backend.load(read_source(source))


def _serialize(document: DocumentModel) -> bytes:
    buffer = io.BytesIO()
    try:
        document.save(buffer)
    except AnnotationFixerError:
        raise
    except Exception as exc:
        raise SerializeError(f"Unable to save PDF document. Error: {exc}") from exc
    return buffer.getvalue()


def fix_pdf_annotations(
    source: PdfSource,
    *,
    backend: Optional[DocumentBackend] = None,
) -> FixResult:
    """Recover lost annotations of the document in ``source``.

    Args:
        source: Path, raw bytes or binary stream holding the PDF.
        backend: Document backend used to parse and serialize the document.
            Defaults to :class:`PypdfBackend`.

    Returns:
        The serialized document together with the applied page repairs.

    Raises:
        ParseError: If the input is not a valid document.
        PageError: If a page or its annotation list is malformed.
        SerializeError: If the repaired document cannot be written.
    """

    document = _load(source, backend)
    result = recover_annotations(document)
    output = _serialize(result.document)
    return FixResult(output=output, repairs=result.repairs)


def default_output_path(input_path: str | Path) -> Path:
    """Return ``<stem>_recovered.pdf`` next to ``input_path``."""

    resolved = resolve_path(input_path)
    return resolved.with_name(recovered_filename(resolved.name))


def fix_pdf_file(
    input_path: str | Path,
    output_path: str | Path | None = None,
    *,
    overwrite: bool = False,
    backend: Optional[DocumentBackend] = None,
) -> Tuple[Path, FixResult]:
    """Recover annotations of ``input_path`` and write the result to ``output_path``.

    The output file is only created after the document was repaired and
    serialized successfully.
    """

    source = resolve_path(input_path)
    destination = resolve_path(output_path) if output_path is not None else default_output_path(source)
    if destination.exists() and not overwrite:
        raise OutputExistsError(f"Output file already exists: {destination}")

    LOGGER.debug("Recovering annotations of %s into %s", source, destination)
    result = fix_pdf_annotations(source, backend=backend)

    destination.parent.mkdir(parents=True, exist_ok=True)
    mode = "wb" if overwrite else "xb"
    try:
        with destination.open(mode) as handle:
            handle.write(result.output)
    except FileExistsError as exc:
        raise OutputExistsError(f"Output file already exists: {destination}") from exc
    return destination, result


def inspect_pdf(
    source: PdfSource,
    *,
    backend: Optional[DocumentBackend] = None,
) -> DocumentReport:
    """Describe annotations and pending repairs without modifying anything."""

    document = _load(source, backend)
    pool = build_candidate_pool(document)
    pages = []
    for page_number, page_ref in document.get_pages().items():
        annotations = current_annotations(document, page_number, page_ref)
        pages.append(
            PageAnnotations(
                page_number=page_number,
                page_ref=page_ref,
                annotation_count=None if annotations is None else len(annotations),
            )
        )
    return DocumentReport(
        page_count=len(pages),
        candidate_count=len(pool),
        pages=pages,
        repairs=plan_repairs(document, pool),
    )
