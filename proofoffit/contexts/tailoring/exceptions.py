"""Domain errors raised while tailoring a document."""

from typing import Optional


class TailoringError(Exception):
    """Base class for tailoring failures."""


class JobNotFoundError(TailoringError):
    """
    Raised when the requested job does not exist.

    Attributes:
        job_id: Identifier that was looked up
    """

    def __init__(self, job_id: str):
        self.job_id = job_id
        super().__init__(f"Job not found: {job_id}")


class ProfileNotFoundError(TailoringError):
    """
    Raised when the requested candidate profile does not exist.

    Attributes:
        candidate_id: Identifier that was looked up
    """

    def __init__(self, candidate_id: str):
        self.candidate_id = candidate_id
        super().__init__(f"Candidate profile not found: {candidate_id}")


class PersistenceError(TailoringError):
    """
    Raised when a generated document cannot be stored.

    The document is not kept anywhere else; callers must retry the whole
    tailoring request.

    Attributes:
        message: Error description
        document_id: Identifier of the document that failed to save
        original_error: The underlying store error, if any
    """

    def __init__(
        self,
        message: str,
        document_id: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.document_id = document_id
        self.original_error = original_error

        parts = [message]
        if document_id:
            parts.append(f"Document: {document_id}")
        if original_error:
            parts.append(f"Original error: {original_error}")

        super().__init__("\n".join(parts))
