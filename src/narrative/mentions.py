"""Candidate character extraction strategies.

Three independent scans feed the aggregator:

* dialogue attribution (quoted speech next to a speech verb and a name),
* action-verb proximity (a capitalized name directly before a verb),
* plain capitalized mentions.

Each scan returns :class:`RawMention` objects in scan order and never raises on
malformed input; text that does not fit a pattern simply yields nothing.
"""
from __future__ import annotations

import re
from typing import Iterable

from . import MentionCategory, RawMention
from .normalization import LETTER, LOWER, STOPWORDS, UPPER

__all__ = [
    "ACTION_VERBS",
    "QUOTE_MARKS",
    "SPEECH_VERBS",
    "STATE_VERBS",
    "extract_action_mentions",
    "extract_dialogue_mentions",
    "extract_mentions",
    "extract_named_mentions",
]

SPEECH_VERBS: tuple[str, ...] = (
    "sagte",
    "meinte",
    "flüsterte",
    "rief",
    "fragte",
    "antwortete",
    "erwiderte",
)
ACTION_VERBS: tuple[str, ...] = ("ging", "lief", "schaute", "sah", "dachte", "fühlte", "war", "hatte")
STATE_VERBS: tuple[str, ...] = ("war", "ist", "wurde", "hatte", "bekam", "machte")
QUOTE_MARKS = "\"“”„«»‹›"

# Quotes are capped so an unbalanced quotation mark cannot drag a match across
# the whole document.
_MAX_QUOTE_CHARS = 500

_NAME = rf"[{UPPER}][{LETTER}]+"
_QUOTE = rf"[{QUOTE_MARKS}](?P<quote>[^{QUOTE_MARKS}]{{1,{_MAX_QUOTE_CHARS}}})[{QUOTE_MARKS}]"
_SPEECH = "|".join(SPEECH_VERBS)

_DIALOGUE_PATTERNS: tuple[re.Pattern[str], ...] = (
    # "Komm her", rief Anna
    re.compile(rf"{_QUOTE}\s*,?\s*(?:{_SPEECH})\s+(?P<speaker>{_NAME})"),
    # Anna rief: "Komm her"
    re.compile(rf"\b(?P<speaker>{_NAME})\s+(?:{_SPEECH}):\s*{_QUOTE}"),
    # Anna: "Komm her"
    re.compile(rf"\b(?P<speaker>{_NAME})\s*:\s*{_QUOTE}"),
)

_ACTION_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(
        rf"\b(?P<name>[{UPPER}][{LOWER}]+(?:\s+[{UPPER}][{LOWER}]+)?)\s+(?:{'|'.join(ACTION_VERBS)})\b"
    ),
    re.compile(rf"\b(?P<name>(?:Herr|Frau|Dr\.|Prof\.)\s+{_NAME})"),
    re.compile(rf"\b(?P<name>[{UPPER}][{LETTER}]{{2,}})\s+(?:{'|'.join(STATE_VERBS)})\b"),
)

_CAPITALIZED_WORD_PATTERN = re.compile(rf"(?<!\w)([{UPPER}][{LETTER}]{{2,}})(?!\w)")


def extract_dialogue_mentions(text: str) -> list[RawMention]:
    """Find speakers of quoted speech."""

    mentions: list[RawMention] = []
    for pattern in _DIALOGUE_PATTERNS:
        for match in pattern.finditer(text):
            speaker = match.group("speaker")
            if not speaker:
                continue
            mentions.append(
                RawMention(
                    name=speaker,
                    category=MentionCategory.DIALOGUE,
                    context=match.group(0),
                    utterance=match.group("quote"),
                )
            )
    return mentions


def extract_action_mentions(text: str) -> list[RawMention]:
    """Find names that act, perceive or are described by a state verb."""

    mentions: list[RawMention] = []
    for pattern in _ACTION_PATTERNS:
        for match in pattern.finditer(text):
            mentions.append(
                RawMention(
                    name=match.group("name"),
                    category=MentionCategory.ACTION,
                    context=match.group(0),
                )
            )
    return mentions


def extract_named_mentions(text: str, stopwords: Iterable[str] | None = None) -> list[RawMention]:
    """Yield every standalone capitalized word that is not a stopword."""

    blocked = STOPWORDS if stopwords is None else frozenset(stopwords)
    mentions: list[RawMention] = []
    for match in _CAPITALIZED_WORD_PATTERN.finditer(text):
        word = match.group(1)
        if word in blocked:
            continue
        mentions.append(RawMention(name=word, category=MentionCategory.MENTION))
    return mentions


def extract_mentions(text: str, *, stopwords: Iterable[str] | None = None) -> list[RawMention]:
    """Run all three strategies over ``text`` and concatenate their results."""

    if not text:
        return []
    return [
        *extract_dialogue_mentions(text),
        *extract_action_mentions(text),
        *extract_named_mentions(text, stopwords),
    ]
