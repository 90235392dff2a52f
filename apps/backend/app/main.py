"""FastAPI application exposing annotation recovery as an upload form."""

from __future__ import annotations

from urllib.parse import quote

from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import HTMLResponse, JSONResponse, Response

from pdf_annotation_fixer import FixResult, fix_pdf_annotations
from pdf_annotation_fixer.exceptions import AnnotationFixerError, SerializeError
from pdf_annotation_fixer.utils import get_logger, recovered_filename

LOGGER = get_logger("pdf_annotation_fixer.web")

RECOVERED_HEADER = "X-Recovered-Annotations"

NO_RECOVERY_REASONS = [
    "The PDF contains no annotations",
    "The PDF contains no lost annotations",
    "The annotations are lost in such a way that this site can't recover",
]

INDEX_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>PDF Annotation Recovery</title>
</head>
<body>
  <h1>PDF Annotation Recovery</h1>
  <p>Recover PDF annotations in two simple steps:</p>
  <form action="/recover" method="post" enctype="multipart/form-data">
    <label>1. Choose PDF to Recover Annotations
      <input type="file" name="file" accept=".pdf" required>
    </label>
    <button type="submit">2. Save Recovered PDF</button>
  </form>
</body>
</html>
"""

app = FastAPI(title="PDF Annotation Recovery", version="1.0.0")


def _content_disposition(filename: str) -> str:
    """Attachment header for ``filename``, RFC 5987 encoded when not plain ASCII."""

    quoted = quote(filename)
    if quoted != filename:
        return f"attachment; filename*=utf-8''{quoted}"
    return f'attachment; filename="{filename}"'


@app.get("/", response_class=HTMLResponse)
async def index() -> HTMLResponse:
    """Serve the upload form."""
    return HTMLResponse(INDEX_HTML)


@app.get("/health", response_class=JSONResponse)
async def health() -> dict[str, str]:
    """Lightweight health endpoint for uptime checks."""
    return {"status": "ok"}


@app.post(
    "/recover",
    summary="Recover lost annotations",
    response_description="The recovered PDF document.",
)
async def recover(
    file: UploadFile = File(..., description="PDF whose annotations should be recovered."),
) -> Response:
    """Recover lost annotations of the uploaded PDF.

    The number of recovered annotations is reported in the
    ``X-Recovered-Annotations`` header.  A document in which nothing could be
    recovered is answered with 422 so the form never offers an unchanged
    copy as a download.
    """

    contents = await file.read()
    if not contents:
        raise HTTPException(status_code=400, detail=f"File '{file.filename}' is empty.")

    try:
        result: FixResult = await run_in_threadpool(fix_pdf_annotations, contents)
    except SerializeError as exc:
        LOGGER.error("Failed to save recovered copy of %s: %s", file.filename, exc)
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    except AnnotationFixerError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    if not result.success:
        raise HTTPException(
            status_code=422,
            detail={
                "message": "Unable to recover annotations.",
                "reasons": NO_RECOVERY_REASONS,
            },
        )

    filename = recovered_filename(file.filename)
    LOGGER.info("Recovered %d annotation(s) in %s", result.recovered, file.filename)
    return Response(
        content=result.output,
        media_type="application/pdf",
        headers={
            "Content-Disposition": _content_disposition(filename),
            RECOVERED_HEADER: str(result.recovered),
        },
    )
