"""
Job data structures for the Intake context.

Provides JobRecord, the job-side input to targeting and templating: identity
fields (title, organization) plus ordered must-have and preferred requirement
lists.
"""

import re
from dataclasses import dataclass, field
from typing import Optional

HEADING_PATTERN = re.compile(r"^#{1,6}\s+(.+?)\s*#*\s*$")
BOLD_HEADING_PATTERN = re.compile(r"^\*\*([^*]+?)\*\*:?\s*$")
BULLET_PATTERN = re.compile(r"^[\*\-]\s+(.+)$")
METADATA_PATTERN = re.compile(
    r"^\*{0,2}(?P<key>Company|Organization|Role|Title|Location|Work Mode)\*{0,2}\s*:"
    r"\s*\*{0,2}\s*(?P<value>.+?)\s*$",
    re.IGNORECASE,
)

# Checked in this order: "Preferred Requirements" is a preferred section
PREFERRED_SECTION_PATTERN = re.compile(r"preferred|nice[\s-]to[\s-]have|bonus|desired", re.IGNORECASE)
REQUIRED_SECTION_PATTERN = re.compile(
    r"required|must[\s-]have|minimum|basic qualifications|requirements", re.IGNORECASE
)


def _first_present(data: dict, *keys, default=None):
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return default


@dataclass
class JobRequirements:
    """Ordered requirement strings attached to a job. Both lists may be empty."""

    must_have: list[str] = field(default_factory=list)
    preferred: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "JobRequirements":
        """Accepts must_have/mustHave keys; None entries are dropped."""
        data = data or {}
        must_have = _first_present(data, "must_have", "mustHave", default=[])
        preferred = _first_present(data, "preferred", default=[])
        return cls(
            must_have=[str(r) for r in must_have if r is not None],
            preferred=[str(r) for r in preferred if r is not None],
        )

    def all(self) -> list[str]:
        """Must-have requirements followed by preferred ones."""
        return [*self.must_have, *self.preferred]

    def to_dict(self) -> dict:
        return {"must_have": list(self.must_have), "preferred": list(self.preferred)}


@dataclass
class JobRecord:
    """
    A job posting as seen by the tailoring pipeline.

    Factory methods:
        from_dict(data) - Build from a stored record (camelCase or snake_case keys)
        from_markdown(text, job_id) - Parse a markdown job posting
    """

    id: str
    title: str = ""
    organization: str = ""
    requirements: JobRequirements = field(default_factory=JobRequirements)
    location: Optional[str] = None
    description: Optional[str] = None
    work_type: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "JobRecord":
        return cls(
            id=str(data["id"]),
            title=data.get("title") or "",
            organization=_first_present(data, "organization", "org", default=""),
            requirements=JobRequirements.from_dict(data.get("requirements")),
            location=data.get("location"),
            description=data.get("description"),
            work_type=_first_present(data, "work_type", "workType"),
        )

    @classmethod
    def from_markdown(cls, text: str, job_id: str) -> "JobRecord":
        """
        Parse a markdown job posting.

        The title comes from a Role/Title metadata line, falling back to the
        first heading. Bullets under headings that look like required or
        preferred qualifications become the requirement lists.

        Args:
            text: Markdown job posting
            job_id: Identifier to assign to the record

        Returns:
            JobRecord with requirements extracted from qualification sections
        """
        metadata: dict[str, str] = {}
        first_heading = None
        current_section = None
        must_have: list[str] = []
        preferred: list[str] = []

        for raw_line in text.splitlines():
            line = raw_line.strip()
            if not line:
                continue

            metadata_match = METADATA_PATTERN.match(line)
            if metadata_match:
                metadata.setdefault(metadata_match.group("key").title(), metadata_match.group("value"))
                continue

            heading_match = HEADING_PATTERN.match(line) or BOLD_HEADING_PATTERN.match(line)
            if heading_match:
                heading = heading_match.group(1).strip()
                if first_heading is None:
                    first_heading = heading
                current_section = _classify_section(heading)
                continue

            bullet_match = BULLET_PATTERN.match(line)
            if bullet_match and current_section == "must_have":
                must_have.append(bullet_match.group(1).strip())
            elif bullet_match and current_section == "preferred":
                preferred.append(bullet_match.group(1).strip())

        return cls(
            id=job_id,
            title=metadata.get("Role") or metadata.get("Title") or first_heading or "",
            organization=metadata.get("Company") or metadata.get("Organization") or "",
            requirements=JobRequirements(must_have=must_have, preferred=preferred),
            location=metadata.get("Location"),
            description=text,
            work_type=metadata.get("Work Mode"),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "organization": self.organization,
            "requirements": self.requirements.to_dict(),
            "location": self.location,
            "description": self.description,
            "work_type": self.work_type,
        }


def _classify_section(heading: str) -> Optional[str]:
    if PREFERRED_SECTION_PATTERN.search(heading):
        return "preferred"
    if REQUIRED_SECTION_PATTERN.search(heading):
        return "must_have"
    return None
