"""Story-level context: excerpt, setting, genre and time period."""
from __future__ import annotations

import re
from typing import Mapping

from . import StoryContext
from .normalization import LETTER, UPPER, count_occurrences, trim_words

__all__ = [
    "GENRE_KEYWORDS",
    "TIME_PERIOD_KEYWORDS",
    "detect_genre",
    "detect_time_period",
    "extract_setting",
    "extract_story_context",
    "score_keyword_table",
]

GENRE_KEYWORDS: dict[str, tuple[str, ...]] = {
    "fantasy": ("magie", "zauber", "drache", "elf", "zwerg", "hexe"),
    "krimi": ("mord", "detective", "verdächtig", "verbrechen", "polizei"),
    "romance": ("liebe", "herz", "kuss", "romantisch", "verliebt"),
    "science-fiction": ("raumschiff", "alien", "zukunft", "roboter", "technologie"),
    "horror": ("angst", "schrecken", "blut", "tot", "geist"),
    "abenteuer": ("reise", "expedition", "gefahr", "entdeckung", "schatz"),
}
DEFAULT_GENRE = "allgemein"

TIME_PERIOD_KEYWORDS: dict[str, tuple[str, ...]] = {
    "mittelalter": ("ritter", "burg", "schwert", "könig", "prinzessin"),
    "modern": ("handy", "computer", "auto", "internet", "smartphone"),
    "zukunft": ("jahr 2", "zukunft", "jahr 3", "raumschiff", "kolonie"),
    "vergangenheit": ("damals", "früher", "einst", "vor jahren", "alt"),
}
DEFAULT_TIME_PERIOD = "unbestimmt"

_PLACE = rf"([{UPPER}][{LETTER}]*(?:\s+[{UPPER}][{LETTER}]*)*)"
_SETTING_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(rf"\bin\s+(?:der|dem|einer|einem)\s+{_PLACE}"),
    re.compile(rf"\bam\s+{_PLACE}"),
    re.compile(rf"\bbei\s+{_PLACE}"),
)
_MIN_SETTING_CHARS = 3
_MAX_SETTING_CHARS = 50


def score_keyword_table(text: str, table: Mapping[str, tuple[str, ...]], default: str) -> str:
    """Return the table key whose keywords occur most often in ``text``.

    Ties go to the key listed first; ``default`` is returned when nothing matches.
    """

    lowered = text.lower()
    best_label = default
    best_score = 0
    for label, keywords in table.items():
        score = count_occurrences(lowered, keywords)
        if score > best_score:
            best_label = label
            best_score = score
    return best_label


def detect_genre(text: str) -> str:
    return score_keyword_table(text, GENRE_KEYWORDS, DEFAULT_GENRE)


def detect_time_period(text: str) -> str:
    return score_keyword_table(text, TIME_PERIOD_KEYWORDS, DEFAULT_TIME_PERIOD)


def extract_setting(text: str) -> tuple[str, ...]:
    """Collect capitalized place phrases following ``in der``, ``am`` or ``bei``."""

    locations: list[str] = []
    for pattern in _SETTING_PATTERNS:
        for match in pattern.finditer(text):
            location = match.group(1).strip()
            if _MIN_SETTING_CHARS < len(location) < _MAX_SETTING_CHARS and location not in locations:
                locations.append(location)
    return tuple(locations)


def extract_story_context(text: str, title: str, *, excerpt_words: int = 50) -> StoryContext:
    return StoryContext(
        title=title,
        excerpt=trim_words(text, excerpt_words),
        setting=extract_setting(text),
        genre=detect_genre(text),
        time_period=detect_time_period(text),
    )
