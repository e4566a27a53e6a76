"""Custom exceptions for the templating context."""

from typing import Iterable, Optional


class UnsupportedDocumentTypeError(ValueError):
    """
    Raised when a document type has no template.

    Attributes:
        document_type: The rejected value
        supported: Names of the supported document types
    """

    def __init__(self, document_type, supported: Optional[Iterable[str]] = None):
        self.document_type = document_type
        self.supported = list(supported) if supported else []

        message = f"Unsupported document type: {document_type!r}"
        if self.supported:
            message += f" (expected one of: {', '.join(self.supported)})"

        super().__init__(message)
