"""
Tailoring Context

Responsibilities:
- Orchestrates one tailoring request: fetch, select, render, cite, persist
- Builds citations tracing each document back to its source bullets
- Defines the tailored document model and the tailoring errors

Owns: TailorEngine, TailoredDocument, Citation, tailoring errors
Never: Talks to a store directly (store functions are injected)
"""

from proofoffit.contexts.tailoring.citations import build_citations
from proofoffit.contexts.tailoring.document_data_structure import (
    Citation,
    DocumentMetadata,
    TailoredDocument,
    TailorRequest,
)
from proofoffit.contexts.tailoring.exceptions import (
    JobNotFoundError,
    PersistenceError,
    ProfileNotFoundError,
    TailoringError,
)
from proofoffit.contexts.tailoring.engine import TailorEngine, tailor_document

__all__ = [
    "build_citations",
    "Citation",
    "DocumentMetadata",
    "TailoredDocument",
    "TailorRequest",
    "JobNotFoundError",
    "PersistenceError",
    "ProfileNotFoundError",
    "TailoringError",
    "TailorEngine",
    "tailor_document",
]
