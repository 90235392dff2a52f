"""
PDF Annotation Fixer - recover annotations lost from PDF pages.

Some PDF editors leave a page's /Annots array truncated while the full list
of annotation references survives elsewhere in the file as an orphaned
array.  This library finds such arrays and restores them as the page's
annotation list.

Quick Start:
    >>> from pdf_annotation_fixer import fix_pdf_file
    >>> output_path, result = fix_pdf_file('notes.pdf')
    >>> result.recovered
    3

Main Functions:
    - fix_pdf_annotations: Repair a PDF given as path, bytes or stream
    - fix_pdf_file: Repair a PDF file and write the recovered copy
    - inspect_pdf: Report annotations and pending repairs without writing
    - repair: Run the heuristic on an already loaded document model

Exceptions:
    - AnnotationFixerError: Base exception
    - ParseError: Input is not a valid document
    - UnresolvedPageError: Page identifier does not resolve
    - NotADictionaryError: Page object is not a dictionary
    - InvalidAnnotationListError: /Annots is neither array nor reference
    - SerializeError: Repaired document cannot be written
    - OutputExistsError: Output file exists and overwriting is disabled

For CLI usage, use the 'pdf-annotation-fixer' command after installation.
"""

# Core functions
from pdf_annotation_fixer.fixer import (
    default_output_path,
    fix_pdf_annotations,
    fix_pdf_file,
    inspect_pdf,
)
from pdf_annotation_fixer.recovery import recover_annotations, repair

# Backends
from pdf_annotation_fixer.backends import (
    DocumentBackend,
    DocumentModel,
    MemoryBackend,
    MemoryDocument,
    PypdfBackend,
)

# Data types
from pdf_annotation_fixer.types import (
    CandidateArray,
    DocumentReport,
    FixResult,
    ObjectRef,
    PageAnnotations,
    PageRepair,
    RecoveryResult,
    Stream,
)

# Exceptions
from pdf_annotation_fixer.exceptions import (
    AnnotationFixerError,
    InvalidAnnotationListError,
    NotADictionaryError,
    OutputExistsError,
    PageError,
    ParseError,
    SerializeError,
    UnresolvedPageError,
)

__version__ = "1.0.0"
__license__ = "MIT"

__all__ = [
    # Main functions
    "fix_pdf_annotations",
    "fix_pdf_file",
    "inspect_pdf",
    "default_output_path",
    "recover_annotations",
    "repair",
    # Backends
    "DocumentBackend",
    "DocumentModel",
    "MemoryBackend",
    "MemoryDocument",
    "PypdfBackend",
    # Data types
    "CandidateArray",
    "DocumentReport",
    "FixResult",
    "ObjectRef",
    "PageAnnotations",
    "PageRepair",
    "RecoveryResult",
    "Stream",
    # Exceptions
    "AnnotationFixerError",
    "InvalidAnnotationListError",
    "NotADictionaryError",
    "OutputExistsError",
    "PageError",
    "ParseError",
    "SerializeError",
    "UnresolvedPageError",
    # Version info
    "__version__",
]
