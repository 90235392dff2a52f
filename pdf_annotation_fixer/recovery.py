"""Annotation recovery heuristic.

Pages whose ``/Annots`` array was truncated are restored from another
reference array of the same document that strictly contains the page's
remaining annotations.  The candidate pool is every indirect object that is
an array made only of indirect references; the first candidate (in the
document model's enumeration order) whose reference set is a proper
superset of the page's live annotations wins.

All pages are analysed before the first mutation, so a structural error
leaves the document untouched and null entries are always classified
against the original graph.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import FrozenSet, Iterable, List, Optional, Tuple

from .backends.base import ANNOTS_KEY, DocumentModel
from .exceptions import InvalidAnnotationListError, NotADictionaryError, UnresolvedPageError
from .types import CandidateArray, ObjectRef, PageRepair, RecoveryResult
from .utils import get_logger

LOGGER = get_logger("pdf_annotation_fixer.recovery")

__all__ = [
    "build_candidate_pool",
    "current_annotations",
    "find_superset",
    "plan_repairs",
    "recover_annotations",
    "repair",
]


def build_candidate_pool(document: DocumentModel) -> List[CandidateArray]:
    """Collect every array object whose elements are all indirect references."""

    pool: List[CandidateArray] = []
    for object_ref, value in document.iter_objects():
        if not isinstance(value, list):
            continue
        if all(isinstance(item, ObjectRef) for item in value):
            pool.append(CandidateArray.from_array(object_ref, value))
    LOGGER.debug("Candidate pool holds %d reference array(s)", len(pool))
    return pool


def _is_null(document: DocumentModel, ref: ObjectRef) -> bool:
    try:
        return document.get_object(ref) is None
    except KeyError:
        return False


def current_annotations(
    document: DocumentModel,
    page_number: int,
    page_ref: ObjectRef,
) -> Optional[FrozenSet[ObjectRef]]:
    """Return the live annotation references of a page, or None without /Annots.

    Array entries pointing at null objects are ignored; entries that are not
    indirect references do not take part in the comparison.
    """

    try:
        page = document.get_object(page_ref)
    except KeyError as exc:
        raise UnresolvedPageError(page_number=page_number, object_ref=page_ref) from exc
    if not isinstance(page, Mapping):
        raise NotADictionaryError(page_number=page_number, object_ref=page_ref)

    if ANNOTS_KEY not in page:
        return None
    annotations = page[ANNOTS_KEY]
    if isinstance(annotations, ObjectRef):
        return frozenset((annotations,))
    if isinstance(annotations, list):
        return frozenset(
            item
            for item in annotations
            if isinstance(item, ObjectRef) and not _is_null(document, item)
        )
    raise InvalidAnnotationListError(page_number=page_number, object_ref=page_ref)


def find_superset(
    current: FrozenSet[ObjectRef],
    pool: Iterable[CandidateArray],
) -> Optional[CandidateArray]:
    """Return the first candidate whose members strictly contain ``current``."""

    for candidate in pool:
        if len(current) != len(candidate.members) and current <= candidate.members:
            return candidate
    return None


def plan_repairs(
    document: DocumentModel,
    pool: Optional[List[CandidateArray]] = None,
) -> List[PageRepair]:
    """Analyse every page without mutating the document."""

    if pool is None:
        pool = build_candidate_pool(document)

    repairs: List[PageRepair] = []
    for page_number, page_ref in document.get_pages().items():
        current = current_annotations(document, page_number, page_ref)
        if current is None:
            continue
        candidate = find_superset(current, pool)
        if candidate is None:
            continue
        repairs.append(
            PageRepair(
                page_number=page_number,
                page_ref=page_ref,
                current=current,
                replacement=candidate,
            )
        )
    return repairs


def recover_annotations(document: DocumentModel) -> RecoveryResult:
    """Restore truncated annotation lists in place and describe what changed."""

    repairs = plan_repairs(document)
    for page_repair in repairs:
        LOGGER.info(
            "Page %d: restoring %d annotation(s) from array %s",
            page_repair.page_number,
            page_repair.added,
            page_repair.replacement.source,
        )
        document.set_annotations(page_repair.page_ref, page_repair.replacement.references)

    result = RecoveryResult(document=document, repairs=repairs)
    LOGGER.debug("Recovered %d annotation(s) on %d page(s)", result.recovered, len(repairs))
    return result


def repair(document: DocumentModel) -> Tuple[DocumentModel, int]:
    """Repair ``document`` in place; return it with the number of annotations added."""

    result = recover_annotations(document)
    return result.document, result.recovered
