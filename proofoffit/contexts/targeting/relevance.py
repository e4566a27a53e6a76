"""
Relevance scoring and bullet selection.

Scores every evidence bullet against a job's requirement strings with keyword
heuristics and returns the top-ranked subset. Pure functions: the input
bullets are never modified and every call builds fresh ScoredBullet objects.

Scoring, per requirement r (compared lower-cased):
- r appears in the bullet text or in the joined tag values: +text_match_score
- the bullet's criterion contains r, or r contains the criterion: +criterion_match_score
- the bullet is a "result" with a metric: +result_metric_bonus

The result/metric bonus is added on every requirement iteration, not once per
bullet, so it compounds with the number of requirements.
"""

from dataclasses import dataclass, field, replace
from typing import Iterable, Sequence

from proofoffit.contexts.intake.evidence_data_structure import Bullet
from proofoffit.contexts.intake.job_data_structure import JobRequirements

DEFAULT_MAX_BULLETS = 8
FALLBACK_REQUIREMENT = "relevant experience"


@dataclass(frozen=True)
class ScoringWeights:
    """Points awarded by each scoring rule."""

    text_match_score: int = 10
    criterion_match_score: int = 8
    result_metric_bonus: int = 5

    @classmethod
    def from_config(cls, selection_config) -> "ScoringWeights":
        """Build from the `selection` section of the tailoring config."""
        return cls(
            text_match_score=int(selection_config.text_match_score),
            criterion_match_score=int(selection_config.criterion_match_score),
            result_metric_bonus=int(selection_config.result_metric_bonus),
        )


@dataclass
class ScoredBullet(Bullet):
    """A bullet annotated with its relevance to one job. Never persisted."""

    relevance_score: int = 0
    matched_criteria: list[str] = field(default_factory=list)


def score_bullet(
    bullet: Bullet, requirements: Sequence[str], weights: ScoringWeights = ScoringWeights()
) -> ScoredBullet:
    """
    Score one bullet against an ordered list of requirement strings.

    matched_criteria records the original requirement string once per rule
    that fired, so a requirement can appear twice.
    """
    scored = ScoredBullet(id=bullet.id, text=bullet.text, tags=replace(bullet.tags))

    bullet_text = bullet.text.lower()
    bullet_tags = " ".join(bullet.tags.values()).lower()
    criterion = bullet.tags.criterion.lower() if bullet.tags.criterion else None
    is_measured_result = bullet.tags.evidence_type == "result" and bool(bullet.tags.metric)

    for requirement in requirements:
        requirement_lower = requirement.lower()

        if requirement_lower in bullet_text or requirement_lower in bullet_tags:
            scored.relevance_score += weights.text_match_score
            scored.matched_criteria.append(requirement)

        if criterion and (requirement_lower in criterion or criterion in requirement_lower):
            scored.relevance_score += weights.criterion_match_score
            scored.matched_criteria.append(requirement)

        if is_measured_result:
            scored.relevance_score += weights.result_metric_bonus

    return scored


def select_relevant_bullets(
    bullets: Iterable[Bullet],
    requirements: JobRequirements,
    limit: int = DEFAULT_MAX_BULLETS,
    weights: ScoringWeights = ScoringWeights(),
) -> list[ScoredBullet]:
    """
    Rank bullets by relevance to a job and keep the best ones.

    Args:
        bullets: Candidate bullets in stored order
        requirements: Job requirements (must-have then preferred)
        limit: Maximum number of bullets returned
        weights: Points per scoring rule

    Returns:
        ScoredBullets with relevance_score > 0, sorted by descending score
        (ties keep input order), at most `limit` long. Empty when either
        input is empty.
    """
    all_requirements = requirements.all()

    scored = [score_bullet(bullet, all_requirements, weights) for bullet in bullets]
    relevant = [bullet for bullet in scored if bullet.relevance_score > 0]

    # sorted() is stable, so equal scores keep their input order
    ranked = sorted(relevant, key=lambda b: b.relevance_score, reverse=True)
    return ranked[:limit]


def map_to_requirement(bullet: Bullet, requirements: JobRequirements) -> str:
    """
    Name the requirement a bullet speaks to.

    Returns:
        The first requirement (must-have before preferred) found in the
        bullet text, case-insensitively, or "relevant experience"
    """
    bullet_text = bullet.text.lower()
    for requirement in requirements.all():
        if requirement.lower() in bullet_text:
            return requirement
    return FALLBACK_REQUIREMENT
