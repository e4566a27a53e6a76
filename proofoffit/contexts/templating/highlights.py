"""
Derived one-liners and skill lists used by the document templates.

Each highlight is the text of the first bullet satisfying a predicate, or a
fixed fallback sentence when no bullet does.
"""

from typing import Callable, Iterable, Sequence

from proofoffit.contexts.intake.evidence_data_structure import Bullet

FALLBACK_EXPERIENCE = "Delivered measurable results across multiple projects"
FALLBACK_LEADERSHIP = "Demonstrated strong leadership and team collaboration skills"
FALLBACK_RESULTS = "Consistently exceeded performance expectations"
FALLBACK_VALUE_PROPOSITION = "Proven ability to drive results and exceed expectations"
FALLBACK_INNOVATION = "Track record of implementing innovative solutions"
FALLBACK_COLLABORATION = "Strong collaboration and communication skills"

LEADERSHIP_TERMS = ("led", "managed")
INNOVATION_TERMS = ("innovative", "improved", "optimized")
COLLABORATION_TERMS = ("team", "collaborat", "cross-functional")


def extract_tools(bullets: Iterable[Bullet]) -> list[str]:
    """Distinct tool tags in first-seen order."""
    tools: list[str] = []
    for bullet in bullets:
        tool = bullet.tags.tool
        if tool and tool not in tools:
            tools.append(tool)
    return tools


def key_skills(bullets: Iterable[Bullet], count: int = 3) -> str:
    """The first `count` distinct tools, comma-separated (empty string if none)."""
    return ", ".join(extract_tools(bullets)[:count])


def first_matching(bullets: Sequence[Bullet], predicate: Callable[[Bullet], bool], fallback: str) -> str:
    for bullet in bullets:
        if predicate(bullet):
            return bullet.text
    return fallback


def _is_result(bullet: Bullet) -> bool:
    return bullet.tags.evidence_type == "result"


def _shows_leadership(bullet: Bullet) -> bool:
    criterion = (bullet.tags.criterion or "").lower()
    text = bullet.text.lower()
    return "leadership" in criterion or any(term in text for term in LEADERSHIP_TERMS)


def _has_metric(bullet: Bullet) -> bool:
    return bool(bullet.tags.metric)


def _text_contains_any(terms: Sequence[str]) -> Callable[[Bullet], bool]:
    return lambda bullet: any(term in bullet.text.lower() for term in terms)


def resume_highlights(bullets: Sequence[Bullet]) -> dict[str, str]:
    """Experience, leadership and results one-liners for the resume."""
    return {
        "experience": first_matching(bullets, _is_result, FALLBACK_EXPERIENCE),
        "leadership": first_matching(bullets, _shows_leadership, FALLBACK_LEADERSHIP),
        "results": first_matching(bullets, _has_metric, FALLBACK_RESULTS),
    }


def cover_letter_highlights(bullets: Sequence[Bullet]) -> dict[str, str]:
    """Value proposition, innovation and collaboration one-liners for the cover letter."""
    return {
        "value_proposition": first_matching(bullets, _is_result, FALLBACK_VALUE_PROPOSITION),
        "innovation": first_matching(bullets, _text_contains_any(INNOVATION_TERMS), FALLBACK_INNOVATION),
        "collaboration": first_matching(
            bullets, _text_contains_any(COLLABORATION_TERMS), FALLBACK_COLLABORATION
        ),
    }
