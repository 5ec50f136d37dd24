"""Writing-style fingerprint: tone, sentence complexity and perspective."""
from __future__ import annotations

import re

from . import WritingStyle
from .normalization import count_occurrences

__all__ = [
    "CASUAL_MARKERS",
    "FORMAL_MARKERS",
    "analyze_writing_style",
    "average_sentence_length",
    "detect_complexity",
    "detect_perspective",
    "detect_tone",
]

FORMAL_MARKERS: tuple[str, ...] = ("jedoch", "sowie", "diesbezüglich", "folglich")
CASUAL_MARKERS: tuple[str, ...] = ("echt", "mega", "krass", "ey")

_SENTENCE_SPLIT_PATTERN = re.compile(r"[.!?]+")
_HIGH_COMPLEXITY_CHARS = 100
_LOW_COMPLEXITY_CHARS = 50
_PERSPECTIVE_MIN_COUNT = 3


def detect_tone(text: str) -> str:
    lowered = text.lower()
    formal = count_occurrences(lowered, FORMAL_MARKERS)
    casual = count_occurrences(lowered, CASUAL_MARKERS)
    if formal > casual:
        return "formal"
    if casual > formal:
        return "casual"
    return "neutral"


def average_sentence_length(text: str) -> float:
    """Mean length in characters of the pieces between sentence terminators.

    The trailing piece after the last terminator counts too, even when empty.
    """

    pieces = _SENTENCE_SPLIT_PATTERN.split(text)
    return sum(len(piece) for piece in pieces) / len(pieces)


def detect_complexity(text: str) -> str:
    average = average_sentence_length(text)
    if average > _HIGH_COMPLEXITY_CHARS:
        return "high"
    if average < _LOW_COMPLEXITY_CHARS:
        return "low"
    return "medium"


def detect_perspective(text: str) -> str:
    lowered = text.lower()
    if lowered.count(" ich ") > _PERSPECTIVE_MIN_COUNT:
        return "first-person"
    if lowered.count(" du ") > _PERSPECTIVE_MIN_COUNT:
        return "second-person"
    return "third-person"


def analyze_writing_style(text: str) -> WritingStyle:
    return WritingStyle(
        tone=detect_tone(text),
        complexity=detect_complexity(text),
        perspective=detect_perspective(text),
    )
