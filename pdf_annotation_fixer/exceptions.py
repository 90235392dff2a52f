"""
Custom exceptions for PDF Annotation Fixer.

Every error is terminal: the operation that raised it produces no output.
"""

from __future__ import annotations

from typing import Optional

from pdf_annotation_fixer.types import ObjectRef


class AnnotationFixerError(Exception):
    """Base exception for all PDF Annotation Fixer errors."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    @property
    def default_message(self) -> str:
        return "An unknown annotation recovery error occurred."


class ParseError(AnnotationFixerError):
    """Raised when the input bytes do not form a valid document."""

    @property
    def default_message(self) -> str:
        return "Unable to parse PDF document."


class SerializeError(AnnotationFixerError):
    """Raised when the repaired document cannot be written back to bytes."""

    @property
    def default_message(self) -> str:
        return "Unable to save PDF document."


class OutputExistsError(AnnotationFixerError):
    """Raised when the output file already exists and overwriting is disabled."""

    @property
    def default_message(self) -> str:
        return "Output file already exists."


class PageError(AnnotationFixerError):
    """Base class for errors tied to a single page of the document."""

    def __init__(
        self,
        message: str = "",
        *,
        page_number: Optional[int] = None,
        object_ref: Optional[ObjectRef] = None,
    ) -> None:
        self.page_number = page_number
        self.object_ref = object_ref
        super().__init__(message)

    def _describe(self, detail: str) -> str:
        if self.page_number is None:
            return detail
        where = f"page {self.page_number}"
        if self.object_ref is not None:
            where = f"{where} ({self.object_ref})"
        return f"{detail}: {where}"


class UnresolvedPageError(PageError):
    """Raised when a page identifier does not resolve to an object."""

    @property
    def default_message(self) -> str:
        return self._describe("Unable to get page object")


class NotADictionaryError(PageError):
    """Raised when a resolved page object is not a dictionary."""

    @property
    def default_message(self) -> str:
        return self._describe("Page object is not a dictionary")


class InvalidAnnotationListError(PageError):
    """Raised when /Annots is neither an array nor a single reference."""

    @property
    def default_message(self) -> str:
        return self._describe("Annotations are neither an array nor a single reference")
