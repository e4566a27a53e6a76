"""
Candidate evidence data structures for the Intake context.

A candidate's experience is stored as atomic evidence statements ("bullets"),
each carrying free text and a small fixed set of classification tags. The
Targeting context scores bullets; nothing in this package edits them.
"""

from dataclasses import dataclass, field
from typing import Iterator, Optional

# Tag fields in the order their values are concatenated for matching
TAG_FIELDS = ("criterion", "tool", "evidence_type", "metric", "domain", "link")

# Accepted spellings for tag keys in stored records
_TAG_KEY_ALIASES = {"evidenceType": "evidence_type"}


@dataclass
class BulletTags:
    """Classification tags attached to a bullet. Every field is optional."""

    criterion: Optional[str] = None
    tool: Optional[str] = None
    evidence_type: Optional[str] = None
    metric: Optional[str] = None
    domain: Optional[str] = None
    link: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "BulletTags":
        """Build tags from a stored mapping, accepting camelCase keys and ignoring unknown ones."""
        if not data:
            return cls()
        normalized = {_TAG_KEY_ALIASES.get(key, key): value for key, value in data.items()}
        return cls(**{name: normalized.get(name) for name in TAG_FIELDS})

    def values(self) -> Iterator[str]:
        """Yield present tag values in TAG_FIELDS order."""
        for name in TAG_FIELDS:
            value = getattr(self, name)
            if value is not None:
                yield str(value)

    def to_dict(self) -> dict:
        return {name: getattr(self, name) for name in TAG_FIELDS if getattr(self, name) is not None}


@dataclass
class Bullet:
    """An atomic evidence statement describing one accomplishment."""

    id: str
    text: str
    tags: BulletTags = field(default_factory=BulletTags)

    @classmethod
    def from_dict(cls, data: dict) -> "Bullet":
        return cls(
            id=str(data["id"]),
            text=data["text"],
            tags=BulletTags.from_dict(data.get("tags")),
        )

    def to_dict(self) -> dict:
        return {"id": self.id, "text": self.text, "tags": self.tags.to_dict()}


@dataclass
class CandidateProfile:
    """
    A candidate's display identity and evidence bullets.

    Attributes:
        id: Profile identifier
        email: Contact email (preferred resume heading)
        display_name: Human-readable name (heading fallback)
        bullets: Evidence bullets in stored order
    """

    id: str
    email: Optional[str] = None
    display_name: Optional[str] = None
    bullets: list[Bullet] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "CandidateProfile":
        """
        Build a profile from a stored record.

        The email may sit at the top level or under a nested "user" mapping.
        """
        user = data.get("user") or {}
        return cls(
            id=str(data["id"]),
            email=data.get("email") or user.get("email"),
            display_name=data.get("display_name") or data.get("displayName") or user.get("name"),
            bullets=[Bullet.from_dict(b) for b in data.get("bullets") or []],
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "email": self.email,
            "display_name": self.display_name,
            "bullets": [b.to_dict() for b in self.bullets],
        }
