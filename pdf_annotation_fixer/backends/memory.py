"""In-memory document graph backend.

The graph is a plain mapping from :class:`ObjectRef` to normalized values.
It is serialized as JSON, with indirect references written as
``{"$ref": [number, generation]}``.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, BinaryIO, Dict, Iterable, Mapping, Sequence

from ..exceptions import ParseError
from ..types import ObjectRef, Stream
from .base import ANNOTS_KEY, DocumentBackend, DocumentModel


def _encode(value: Any) -> Any:
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, ObjectRef):
        return {"$ref": [value.number, value.generation]}
    if isinstance(value, Stream):
        return {"$stream": _encode(value.dictionary), "data": value.data.hex()}
    if isinstance(value, (bytes, bytearray)):
        return {"$bytes": bytes(value).hex()}
    if isinstance(value, list):
        return [_encode(item) for item in value]
    if isinstance(value, dict):
        return {str(key): _encode(item) for key, item in value.items()}
    raise TypeError(f"Cannot serialize value of type {type(value).__name__}")


def _decode(value: Any) -> Any:
    if isinstance(value, list):
        return [_decode(item) for item in value]
    if isinstance(value, dict):
        if "$ref" in value:
            number, generation = value["$ref"]
            return ObjectRef(int(number), int(generation))
        if "$stream" in value:
            return Stream(_decode(value["$stream"]), bytes.fromhex(value.get("data", "")))
        if "$bytes" in value:
            return bytes.fromhex(value["$bytes"])
        return {key: _decode(item) for key, item in value.items()}
    return value


def _parse_ref(key: str) -> ObjectRef:
    number, generation = key.split()
    return ObjectRef(int(number), int(generation))


@dataclass
class MemoryDocument(DocumentModel):
    """Document graph held entirely in Python objects."""

    objects: Dict[ObjectRef, Any] = field(default_factory=dict)
    pages: Dict[int, ObjectRef] = field(default_factory=dict)

    def iter_objects(self) -> Iterable[tuple[ObjectRef, Any]]:
        for ref in sorted(self.objects):
            yield ref, self.objects[ref]

    def get_object(self, ref: ObjectRef) -> Any:
        return self.objects[ref]

    def get_pages(self) -> Mapping[int, ObjectRef]:
        return dict(self.pages)

    def set_annotations(self, page_ref: ObjectRef, references: Sequence[ObjectRef]) -> None:
        page = self.objects[page_ref]
        page[ANNOTS_KEY] = list(references)

    def save(self, stream: BinaryIO) -> None:
        payload = {
            "objects": {f"{ref.number} {ref.generation}": _encode(value) for ref, value in self.iter_objects()},
            "pages": {str(number): [ref.number, ref.generation] for number, ref in self.pages.items()},
        }
        stream.write(json.dumps(payload, sort_keys=True).encode("utf-8"))


class MemoryBackend(DocumentBackend):
    """Backend reading the JSON rendition written by :meth:`MemoryDocument.save`."""

    def load(self, data: bytes) -> MemoryDocument:
        try:
            payload = json.loads(data.decode("utf-8"))
            objects = {_parse_ref(key): _decode(value) for key, value in payload["objects"].items()}
            pages = {
                int(number): ObjectRef(int(ref[0]), int(ref[1]))
                for number, ref in payload.get("pages", {}).items()
            }
        except (UnicodeDecodeError, ValueError, KeyError, TypeError, AttributeError) as exc:
            raise ParseError(f"Corrupted or invalid document graph. Error: {exc}") from exc
        return MemoryDocument(objects=objects, pages=pages)
