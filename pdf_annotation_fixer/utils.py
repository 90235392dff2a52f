"""Utilities shared by the fixer, the CLI and the web form."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import BinaryIO, Union

PdfSource = Union[str, Path, bytes, bytearray, BinaryIO]

RECOVERED_SUFFIX = "_recovered"


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.propagate = False
    return logger


def set_log_level(level: int) -> None:
    """Apply ``level`` to the package logger and its children."""

    logging.getLogger("pdf_annotation_fixer").setLevel(level)


def resolve_path(path: str | Path | None) -> Path:
    if path is None:
        raise ValueError("Path must not be None")
    return Path(path).expanduser().resolve()


def read_source(source: PdfSource) -> bytes:
    """Return the raw bytes of ``source`` (path, bytes or binary stream)."""

    if isinstance(source, (bytes, bytearray)):
        return bytes(source)
    if isinstance(source, (str, Path)):
        return resolve_path(source).read_bytes()
    return source.read()


def recovered_filename(filename: str | None, default: str = "document.pdf") -> str:
    """Return the download name for a recovered copy of ``filename``.

    >>> recovered_filename("report.pdf")
    'report_recovered.pdf'
    """

    name = Path(filename).name if filename else ""
    if not name:
        name = default
    path = Path(name)
    suffix = path.suffix or ".pdf"
    return f"{path.stem}{RECOVERED_SUFFIX}{suffix}"
