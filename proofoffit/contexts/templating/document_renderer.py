"""
Document rendering.

Fills the fixed per-type templates with a job's identity fields, the
candidate's display identity, and a ranked bullet subset. Rendering is
deterministic: the same inputs always produce the same text.
"""

from typing import Optional, Sequence

from proofoffit.contexts.intake.evidence_data_structure import Bullet, CandidateProfile
from proofoffit.contexts.intake.job_data_structure import JobRecord
from proofoffit.contexts.targeting.relevance import map_to_requirement
from proofoffit.contexts.templating.document_types import DocumentType, TailorPreferences
from proofoffit.contexts.templating.highlights import (
    cover_letter_highlights,
    extract_tools,
    key_skills,
    resume_highlights,
)
from proofoffit.contexts.templating.registries import TemplateRegistry

DEFAULT_HEADING = "Professional Resume"
DEFAULT_DOMAIN = "technology"

# Bullets shown per document type, and key skills named in summaries
DEFAULT_BULLET_COUNTS = {
    DocumentType.RESUME: 6,
    DocumentType.COVER_LETTER: 3,
    DocumentType.EMAIL: 2,
}
DEFAULT_KEY_SKILLS = 3


class DocumentRenderer:
    """
    Renders resumes, cover letters and outreach emails from ranked bullets.

    Attributes:
        registry: Template registry supplying one template per document type
        bullet_counts: Number of top bullets each document type shows
        key_skill_count: Number of tools named as key skills
    """

    def __init__(
        self,
        registry: TemplateRegistry = None,
        bullet_counts: dict = None,
        key_skill_count: int = DEFAULT_KEY_SKILLS,
    ):
        self.registry = registry or TemplateRegistry()
        self.bullet_counts = {**DEFAULT_BULLET_COUNTS, **(bullet_counts or {})}
        self.key_skill_count = key_skill_count

    @classmethod
    def from_config(cls, rendering_config, registry: TemplateRegistry = None) -> "DocumentRenderer":
        """Build from the `rendering` section of the tailoring config."""
        return cls(
            registry=registry,
            bullet_counts={
                DocumentType.RESUME: int(rendering_config.resume_bullets),
                DocumentType.COVER_LETTER: int(rendering_config.cover_letter_bullets),
                DocumentType.EMAIL: int(rendering_config.email_bullets),
            },
            key_skill_count=int(rendering_config.key_skills),
        )

    def render(
        self,
        document_type,
        job: JobRecord,
        profile: CandidateProfile,
        bullets: Sequence[Bullet],
        preferences: Optional[TailorPreferences] = None,
    ) -> str:
        """
        Render one document.

        Args:
            document_type: DocumentType or its string value
            job: Job whose title, organization and requirements are referenced
            profile: Candidate whose display identity heads the resume
            bullets: Ranked bullets, best first
            preferences: Accepted for every type; wording does not depend on them

        Returns:
            Rendered document text

        Raises:
            UnsupportedDocumentTypeError: If document_type is not recognized
        """
        document_type = DocumentType.parse(document_type)
        preferences = preferences or TailorPreferences()

        bullets = list(bullets)
        top_bullets = bullets[: self.bullet_counts[document_type]]

        context = {
            "job": job,
            "tone": preferences.tone.value,
            "key_skills": key_skills(bullets, self.key_skill_count),
            "top_bullets": top_bullets,
        }

        if document_type is DocumentType.RESUME:
            context.update(
                heading=profile.email or profile.display_name or DEFAULT_HEADING,
                domain=job.organization or DEFAULT_DOMAIN,
                technical_skills=extract_tools(bullets),
                highlights=resume_highlights(bullets),
            )
        elif document_type is DocumentType.COVER_LETTER:
            context.update(
                fit_items=[
                    {"text": bullet.text, "requirement": map_to_requirement(bullet, job.requirements)}
                    for bullet in top_bullets
                ],
                highlights=cover_letter_highlights(bullets),
            )

        template = self.registry.get_template(document_type.value)
        return template.render(**context)


def render_document(
    document_type,
    job: JobRecord,
    profile: CandidateProfile,
    bullets: Sequence[Bullet],
    preferences: Optional[TailorPreferences] = None,
) -> str:
    """Render one document with default template settings. See DocumentRenderer.render."""
    return DocumentRenderer().render(document_type, job, profile, bullets, preferences)
