"""
Type definitions and dataclasses for PDF Annotation Fixer.

This module defines the neutral object model shared by every document
backend as well as the result structures returned by the recoverer and the
service layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, NamedTuple, Optional, Tuple


class ObjectRef(NamedTuple):
    """Identifier of an indirect object, also used as a reference value."""

    number: int
    generation: int = 0

    def __str__(self) -> str:
        return f"{self.number} {self.generation} R"


@dataclass
class Stream:
    """
    Stream object: a dictionary plus an opaque binary payload.

    Attributes:
        dictionary: Stream dictionary, keyed by name strings
        data: Raw stream payload
    """
    dictionary: Dict[str, Any]
    data: bytes = b""


@dataclass(frozen=True)
class CandidateArray:
    """
    A reference array found in the document graph.

    Attributes:
        source: Identifier of the object holding the array
        references: Array elements in their original order
        members: Set form of ``references`` used for comparison
    """
    source: ObjectRef
    references: Tuple[ObjectRef, ...]
    members: FrozenSet[ObjectRef]

    @classmethod
    def from_array(cls, source: ObjectRef, references: List[ObjectRef]) -> "CandidateArray":
        return cls(source=source, references=tuple(references), members=frozenset(references))


@dataclass(frozen=True)
class PageRepair:
    """
    A planned (or applied) replacement of one page's annotation list.

    Attributes:
        page_number: 1-based page number
        page_ref: Identifier of the page dictionary
        current: Live annotation identifiers before the repair
        replacement: Candidate array the annotation list is restored from
    """
    page_number: int
    page_ref: ObjectRef
    current: FrozenSet[ObjectRef]
    replacement: CandidateArray

    @property
    def added(self) -> int:
        return len(self.replacement.members) - len(self.current)


@dataclass
class RecoveryResult:
    """Outcome of a recovery run over a document model."""

    document: Any
    repairs: List[PageRepair] = field(default_factory=list)

    @property
    def recovered(self) -> int:
        return sum(repair.added for repair in self.repairs)


@dataclass
class FixResult:
    """
    Result of fixing a serialized PDF.

    Attributes:
        output: Serialized repaired document
        repairs: Page repairs applied to the document
    """
    output: bytes
    repairs: List[PageRepair] = field(default_factory=list)

    @property
    def recovered(self) -> int:
        return sum(repair.added for repair in self.repairs)

    @property
    def success(self) -> bool:
        return self.recovered > 0

    def __str__(self) -> str:
        return f"FixResult(recovered={self.recovered}, pages={len(self.repairs)})"


@dataclass
class PageAnnotations:
    """Annotation summary of one page; ``annotation_count`` is None without /Annots."""

    page_number: int
    page_ref: ObjectRef
    annotation_count: Optional[int] = None


@dataclass
class DocumentReport:
    """
    Read-only analysis of a document.

    Attributes:
        page_count: Number of pages in the page tree
        candidate_count: Number of reference arrays in the document
        pages: Per-page annotation summary
        repairs: Repairs that recovery would apply
    """
    page_count: int
    candidate_count: int
    pages: List[PageAnnotations] = field(default_factory=list)
    repairs: List[PageRepair] = field(default_factory=list)

    @property
    def recoverable(self) -> int:
        return sum(repair.added for repair in self.repairs)
