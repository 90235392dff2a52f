"""pypdf backend implementation for PDF Annotation Fixer."""

from __future__ import annotations

import io
from typing import Any, BinaryIO, Dict, FrozenSet, Iterable, List, Mapping, Sequence

from pypdf import PdfReader, PdfWriter
from pypdf.errors import PdfReadError
from pypdf.generic import (
    ArrayObject,
    BooleanObject,
    DictionaryObject,
    IndirectObject,
    NameObject,
    NullObject,
    StreamObject,
)

from ..exceptions import ParseError
from ..types import ObjectRef, Stream
from ..utils import get_logger
from .base import ANNOTS_KEY, DocumentBackend, DocumentModel

LOGGER = get_logger("pdf_annotation_fixer.backends.pypdf")


def normalize(value: Any) -> Any:
    """Convert a direct pypdf object into the neutral object model."""

    if isinstance(value, IndirectObject):
        return ObjectRef(value.idnum, value.generation)
    if value is None or isinstance(value, NullObject):
        return None
    if isinstance(value, BooleanObject):
        return bool(value.value)
    if isinstance(value, StreamObject):
        dictionary = {str(key): normalize(item) for key, item in value.items()}
        return Stream(dictionary, value._data or b"")
    if isinstance(value, DictionaryObject):
        return {str(key): normalize(item) for key, item in value.items()}
    if isinstance(value, ArrayObject):
        return [normalize(item) for item in value]
    return value


class PypdfDocument(DocumentModel):
    """Document graph backed by a :class:`pypdf.PdfReader`.

    Mutations are applied to the reader's resolved objects, which the writer
    picks up when the document is cloned in :meth:`save`.
    """

    def __init__(self, reader: PdfReader, pages: Dict[int, ObjectRef]) -> None:
        self.reader = reader
        self._pages = pages
        self._refs: List[ObjectRef] | None = None
        self._known: FrozenSet[ObjectRef] = frozenset()

    def object_refs(self) -> List[ObjectRef]:
        """Identifiers of all in-use objects listed by the cross-reference data."""

        if self._refs is None:
            refs = set()
            for generation, entries in self.reader.xref.items():
                refs.update(ObjectRef(number, generation) for number in entries)
            refs.update(ObjectRef(number, 0) for number in self.reader.xref_objStm)
            self._refs = sorted(refs)
            self._known = frozenset(refs)
        return self._refs

    def _resolve(self, ref: ObjectRef) -> Any:
        self.object_refs()
        if ref not in self._known:
            raise KeyError(ref)
        obj = self.reader.get_object(IndirectObject(ref.number, ref.generation, self.reader))
        if obj is None:
            raise KeyError(ref)
        return obj

    def iter_objects(self) -> Iterable[tuple[ObjectRef, Any]]:
        for ref in self.object_refs():
            try:
                obj = self._resolve(ref)
            except (PdfReadError, KeyError) as exc:
                LOGGER.warning("Skipping unreadable object %s: %s", ref, exc)
                continue
            yield ref, normalize(obj)

    def get_object(self, ref: ObjectRef) -> Any:
        return normalize(self._resolve(ref))

    def get_pages(self) -> Mapping[int, ObjectRef]:
        return dict(self._pages)

    def set_annotations(self, page_ref: ObjectRef, references: Sequence[ObjectRef]) -> None:
        page = self._resolve(page_ref)
        page[NameObject(ANNOTS_KEY)] = self._reference_array(references)
        # Flattened page copies held by the reader mirror the resolved object.
        for flattened in self.reader.pages:
            indirect = flattened.indirect_reference
            if flattened is page or indirect is None:
                continue
            if (indirect.idnum, indirect.generation) == page_ref:
                flattened[NameObject(ANNOTS_KEY)] = self._reference_array(references)

    def _reference_array(self, references: Sequence[ObjectRef]) -> ArrayObject:
        return ArrayObject(
            [IndirectObject(ref.number, ref.generation, self.reader) for ref in references]
        )

    def save(self, stream: BinaryIO) -> None:
        writer = PdfWriter(clone_from=self.reader)
        writer.write(stream)


class PypdfBackend(DocumentBackend):
    """Backend implementation that uses `pypdf` under the hood."""

    def load(self, data: bytes) -> PypdfDocument:
        try:
            reader = PdfReader(io.BytesIO(data))
        except PdfReadError as exc:
            raise ParseError(f"Corrupted or invalid PDF file. Error: {exc}") from exc
        except Exception as exc:
            raise ParseError(f"Unexpected error reading PDF. Error: {exc}") from exc

        if reader.is_encrypted:
            LOGGER.debug("Attempting to decrypt encrypted PDF with the empty password")
            try:
                decrypted = reader.decrypt("")
            except Exception as exc:
                raise ParseError(f"Unable to decrypt encrypted PDF. Error: {exc}") from exc
            if not decrypted:
                raise ParseError("PDF is encrypted and cannot be opened without a password.")

        try:
            pages = self._collect_pages(reader)
        except ParseError:
            raise
        except Exception as exc:
            raise ParseError(f"Unable to read the page tree. Error: {exc}") from exc

        return PypdfDocument(reader, pages)

    @staticmethod
    def _collect_pages(reader: PdfReader) -> Dict[int, ObjectRef]:
        pages: Dict[int, ObjectRef] = {}
        for number, page in enumerate(reader.pages, start=1):
            indirect = page.indirect_reference
            if indirect is None:
                raise ParseError(f"Page {number} is not an indirect object.")
            pages[number] = ObjectRef(indirect.idnum, indirect.generation)
        return pages
