"""Merge raw mentions into one candidate per cleaned name."""
from __future__ import annotations

from typing import Iterable

from . import CharacterCandidate, MentionCategory, RawMention
from .normalization import clean_character_name, is_valid_character_name

__all__ = ["aggregate"]


def aggregate(
    raw_mentions: Iterable[RawMention],
    *,
    stopwords: Iterable[str] | None = None,
) -> dict[str, CharacterCandidate]:
    """Group mentions by cleaned name, dropping names that fail validation."""

    blocked = None if stopwords is None else frozenset(stopwords)
    candidates: dict[str, CharacterCandidate] = {}
    for mention in raw_mentions:
        name = clean_character_name(mention.name)
        if not is_valid_character_name(name, stopwords=blocked):
            continue
        candidate = candidates.get(name)
        if candidate is None:
            candidate = CharacterCandidate(name=name)
            candidates[name] = candidate
        candidate.mentions += 1
        candidate.contexts.append(mention.context)
        if mention.category is MentionCategory.DIALOGUE:
            candidate.dialogue_count += 1
        elif mention.category is MentionCategory.ACTION:
            candidate.action_count += 1
    return candidates
