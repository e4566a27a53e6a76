"""
Targeting Context

Responsibilities:
- Scores relevance of evidence bullets against job requirements
- Selects and ranks the bullets a tailored document will use
- Maps a bullet to the requirement it best supports

Owns: Relevance scoring, ranking, and truncation
Never: Renders document text or reads from storage
"""

from proofoffit.contexts.targeting.relevance import (
    DEFAULT_MAX_BULLETS,
    ScoredBullet,
    ScoringWeights,
    map_to_requirement,
    score_bullet,
    select_relevant_bullets,
)

__all__ = [
    "DEFAULT_MAX_BULLETS",
    "ScoredBullet",
    "ScoringWeights",
    "map_to_requirement",
    "score_bullet",
    "select_relevant_bullets",
]
