"""Backend abstractions for PDF Annotation Fixer."""

from .base import ANNOTS_KEY, DocumentBackend, DocumentModel
from .memory import MemoryBackend, MemoryDocument
from .pypdf_backend import PypdfBackend, PypdfDocument

__all__ = [
    "ANNOTS_KEY",
    "DocumentBackend",
    "DocumentModel",
    "MemoryBackend",
    "MemoryDocument",
    "PypdfBackend",
    "PypdfDocument",
]
