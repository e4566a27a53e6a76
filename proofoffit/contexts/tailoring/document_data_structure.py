"""
Tailored document data structures.

A TailoredDocument is created once per tailoring request and never mutated
afterwards; regenerating produces a new document with a new id. Citations are
frozen copies of the bullets a document was built from.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from proofoffit.contexts.templating.document_types import DocumentType, TailorPreferences

DOCUMENT_VERSION = "1.0"


def new_document_id() -> str:
    return f"tailored-{uuid.uuid4().hex}"


@dataclass(frozen=True)
class Citation:
    """Links one generated document to one source bullet."""

    id: str
    bullet_id: str
    text: str
    criterion: str
    evidence_type: str
    link: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Citation":
        return cls(
            id=data["id"],
            bullet_id=data.get("bullet_id") or data.get("bulletId"),
            text=data["text"],
            criterion=data["criterion"],
            evidence_type=data.get("evidence_type") or data.get("evidenceType"),
            link=data.get("link"),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "bullet_id": self.bullet_id,
            "text": self.text,
            "criterion": self.criterion,
            "evidence_type": self.evidence_type,
            "link": self.link,
        }


@dataclass(frozen=True)
class DocumentMetadata:
    job_id: str
    candidate_id: str
    created_at: datetime = field(default_factory=datetime.now)
    version: str = DOCUMENT_VERSION

    def to_dict(self) -> dict:
        return {
            "job_id": self.job_id,
            "candidate_id": self.candidate_id,
            "created_at": self.created_at.isoformat(),
            "version": self.version,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DocumentMetadata":
        created_at = data["created_at"]
        if isinstance(created_at, str):
            created_at = datetime.fromisoformat(created_at)
        return cls(
            job_id=data["job_id"],
            candidate_id=data["candidate_id"],
            created_at=created_at,
            version=data.get("version", DOCUMENT_VERSION),
        )


@dataclass(frozen=True)
class TailoredDocument:
    """
    A generated resume, cover letter or outreach email.

    Attributes:
        id: Unique document identifier ("tailored-<hex>")
        type: Document type
        content: Rendered text
        citations: One citation per bullet the document was rendered from
        metadata: Job, candidate, creation time and format version
    """

    id: str
    type: DocumentType
    content: str
    citations: tuple[Citation, ...]
    metadata: DocumentMetadata

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.type.value,
            "content": self.content,
            "citations": [c.to_dict() for c in self.citations],
            "metadata": self.metadata.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TailoredDocument":
        return cls(
            id=data["id"],
            type=DocumentType.parse(data["type"]),
            content=data["content"],
            citations=tuple(Citation.from_dict(c) for c in data.get("citations", [])),
            metadata=DocumentMetadata.from_dict(data["metadata"]),
        )


@dataclass
class TailorRequest:
    """
    One request to tailor a document.

    document_type may be given as a string; it is validated when the request
    is processed, before any store access.
    """

    job_id: str
    candidate_id: str
    document_type: object
    preferences: Optional[TailorPreferences] = None

    @classmethod
    def from_dict(cls, data: dict) -> "TailorRequest":
        preferences = data.get("preferences")
        return cls(
            job_id=data.get("job_id") or data.get("jobId"),
            candidate_id=data.get("candidate_id") or data.get("candidateId"),
            document_type=data.get("document_type") or data.get("documentType"),
            preferences=TailorPreferences.from_dict(preferences) if preferences is not None else None,
        )
