"""Backend protocol for the document object graph."""

from __future__ import annotations

from typing import Any, BinaryIO, Iterable, Mapping, Protocol, Sequence

from ..types import ObjectRef

ANNOTS_KEY = "/Annots"


class DocumentModel(Protocol):
    """Graph of indirect objects as seen by the annotation recoverer.

    Values are normalized: ``None`` for null, ``list`` for arrays, ``dict``
    keyed by name strings for dictionaries, :class:`ObjectRef` for indirect
    references and :class:`~pdf_annotation_fixer.types.Stream` for streams.
    """

    def iter_objects(self) -> Iterable[tuple[ObjectRef, Any]]:
        """Yield every object of the graph in ascending identifier order."""

    def get_object(self, ref: ObjectRef) -> Any:
        """Return the object stored under ``ref``; raise ``KeyError`` if absent."""

    def get_pages(self) -> Mapping[int, ObjectRef]:
        """Return the 1-based page number to page identifier mapping."""

    def set_annotations(self, page_ref: ObjectRef, references: Sequence[ObjectRef]) -> None:
        """Replace the annotation list of the page stored under ``page_ref``."""

    def save(self, stream: BinaryIO) -> None:
        """Serialize the graph into ``stream``."""


class DocumentBackend(Protocol):
    """Protocol for parsing raw bytes into a :class:`DocumentModel`."""

    def load(self, data: bytes) -> DocumentModel:
        """Parse ``data``; raise :class:`~pdf_annotation_fixer.exceptions.ParseError` on failure."""
