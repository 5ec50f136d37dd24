"""Narrative versus factual content classification."""
from __future__ import annotations

import logging

from . import Sensitivity
from .normalization import coerce_text, count_occurrences, strip_markup

__all__ = [
    "FACTUAL_MARKERS",
    "NARRATIVE_MARKERS",
    "SENSITIVITY_THRESHOLDS",
    "is_narrative",
    "narrative_score",
    "resolve_threshold",
]

logger = logging.getLogger(__name__)

NARRATIVE_MARKERS: tuple[str, ...] = (
    # speech
    "sagte",
    "meinte",
    "flüsterte",
    "rief",
    "fragte",
    "antwortete",
    # story transitions
    "es war einmal",
    "eines tages",
    "plötzlich",
    "dann geschah",
    # time
    "am nächsten tag",
    "später",
    "währenddessen",
    "schließlich",
    # perspective
    "ich dachte",
    "er sah",
    "sie fühlte",
    "wir gingen",
)

FACTUAL_MARKERS: tuple[str, ...] = (
    "wordpress",
    "plugin",
    "tutorial",
    "anleitung",
    "howto",
    "beispiel:",
    "schritt",
    "lösung",
    "problem",
    "fehler",
    "version",
    "update",
    "code",
    "function",
    "class",
)

_FACTUAL_WEIGHT = 2

SENSITIVITY_THRESHOLDS: dict[Sensitivity, int] = {
    Sensitivity.HIGH: 1,
    Sensitivity.MEDIUM: 3,
    Sensitivity.LOW: 5,
}


def resolve_threshold(sensitivity: Sensitivity | str | None) -> int:
    """Map a sensitivity setting to its score threshold, defaulting to medium."""

    if isinstance(sensitivity, Sensitivity):
        return SENSITIVITY_THRESHOLDS[sensitivity]
    try:
        level = Sensitivity(str(sensitivity).strip().lower())
    except ValueError:
        logger.debug("Unknown sensitivity %r; using medium threshold", sensitivity)
        level = Sensitivity.MEDIUM
    return SENSITIVITY_THRESHOLDS[level]


def narrative_score(text: str) -> int:
    """Return the signed narrative score of ``text``."""

    lowered = strip_markup(coerce_text(text)).lower()
    if not lowered.strip():
        return 0
    score = count_occurrences(lowered, NARRATIVE_MARKERS)
    score -= count_occurrences(lowered, FACTUAL_MARKERS) * _FACTUAL_WEIGHT
    return score


def is_narrative(text: str, sensitivity: Sensitivity | str | None = Sensitivity.MEDIUM) -> bool:
    """Decide whether ``text`` reads like narrative fiction."""

    return narrative_score(text) >= resolve_threshold(sensitivity)
