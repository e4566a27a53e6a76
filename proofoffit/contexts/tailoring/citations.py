"""Citation building: one traceability record per bullet used in a document."""

from typing import Sequence

from proofoffit.contexts.intake.evidence_data_structure import Bullet
from proofoffit.contexts.tailoring.document_data_structure import Citation

DEFAULT_CRITERION = "General"
DEFAULT_EVIDENCE_TYPE = "experience"


def build_citations(bullets: Sequence[Bullet]) -> list[Citation]:
    """
    Build citations for the bullets a document was rendered from.

    Args:
        bullets: The selected bullets, in ranked order (not the candidate's full set)

    Returns:
        One Citation per bullet, same order, ids "citation-0", "citation-1", ...
    """
    return [
        Citation(
            id=f"citation-{index}",
            bullet_id=bullet.id,
            text=bullet.text,
            criterion=bullet.tags.criterion or DEFAULT_CRITERION,
            evidence_type=bullet.tags.evidence_type or DEFAULT_EVIDENCE_TYPE,
            link=bullet.tags.link,
        )
        for index, bullet in enumerate(bullets)
    ]
