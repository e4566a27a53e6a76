"""
Document types and rendering preferences.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from proofoffit.contexts.templating.exceptions import UnsupportedDocumentTypeError


class DocumentType(Enum):
    """Kinds of tailored document, each backed by one template."""

    RESUME = "resume"
    COVER_LETTER = "cover_letter"
    EMAIL = "email"

    @classmethod
    def parse(cls, value) -> "DocumentType":
        """
        Resolve a DocumentType from an enum member or its string value.

        Raises:
            UnsupportedDocumentTypeError: If value names no supported type
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnsupportedDocumentTypeError(value, supported=[t.value for t in cls]) from None


class Tone(Enum):
    PROFESSIONAL = "professional"
    CASUAL = "casual"
    ENTHUSIASTIC = "enthusiastic"


class DocumentLength(Enum):
    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"


@dataclass
class TailorPreferences:
    """
    Caller preferences for a generated document.

    All three are accepted and validated. The templates currently use fixed
    wording, so none of them changes the rendered text.
    """

    tone: Tone = Tone.PROFESSIONAL
    length: Optional[DocumentLength] = None
    focus: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "TailorPreferences":
        """
        Build preferences from plain values.

        Raises:
            ValueError: If tone or length is not a recognized value
        """
        data = data or {}
        tone = data.get("tone")
        length = data.get("length")
        return cls(
            tone=Tone(tone) if tone else Tone.PROFESSIONAL,
            length=DocumentLength(length) if length else None,
            focus=list(data.get("focus") or []),
        )

    def to_dict(self) -> dict:
        return {
            "tone": self.tone.value,
            "length": self.length.value if self.length else None,
            "focus": list(self.focus),
        }
