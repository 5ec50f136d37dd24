"""Importance scoring and tier assignment for aggregated candidates."""
from __future__ import annotations

from typing import Mapping

from . import CharacterCandidate, Tier

__all__ = [
    "EARLY_MENTION_BONUS",
    "EARLY_MENTION_WINDOW",
    "TIER_THRESHOLDS",
    "classify",
    "importance_score",
    "tier_for_score",
]

# (tier, minimum score), checked from the top down.
TIER_THRESHOLDS: tuple[tuple[Tier, float], ...] = (
    (Tier.PROTAGONIST, 10.0),
    (Tier.SUPPORTING, 3.0),
)

DIALOGUE_WEIGHT = 2.0
ACTION_WEIGHT = 1.5
EARLY_MENTION_WINDOW = 200
EARLY_MENTION_BONUS = 5.0


def importance_score(candidate: CharacterCandidate) -> float:
    return (
        candidate.mentions
        + candidate.dialogue_count * DIALOGUE_WEIGHT
        + candidate.action_count * ACTION_WEIGHT
    )


def tier_for_score(score: float) -> Tier:
    for tier, minimum in TIER_THRESHOLDS:
        if score >= minimum:
            return tier
    return Tier.MINOR


def classify(
    candidates: Mapping[str, CharacterCandidate],
    full_text: str,
    *,
    window: int = EARLY_MENTION_WINDOW,
    bonus: float = EARLY_MENTION_BONUS,
) -> Mapping[str, CharacterCandidate]:
    """Assign score and tier to every candidate in place.

    A name that first shows up within ``window`` characters of the text start
    (case-insensitive) gets ``bonus`` added to its score. The bonus only lifts a
    minor character to supporting; the tier cascade is not re-run on the boosted
    score, so a supporting character never becomes a protagonist this way.
    """

    lowered = full_text.lower()
    for candidate in candidates.values():
        score = importance_score(candidate)
        candidate.importance_score = score
        candidate.tier = tier_for_score(score)

        position = lowered.find(candidate.name.lower())
        if 0 <= position < window:
            candidate.importance_score += bonus
            if candidate.tier is Tier.MINOR:
                candidate.tier = Tier.SUPPORTING
    return candidates
