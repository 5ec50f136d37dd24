"""Finalize classified candidates into character profiles."""
from __future__ import annotations

from typing import Sequence

from . import CharacterCandidate, CharacterProfile, Document, StoryContext, Tier, WritingStyle
from .context import extract_story_context
from .style import analyze_writing_style
from .traits import extract_personality_traits

__all__ = ["TIER_LABELS", "describe_character", "enrich", "tier_label"]

TIER_LABELS: dict[Tier, str] = {
    Tier.PROTAGONIST: "Hauptcharakter",
    Tier.SUPPORTING: "wichtiger Nebencharakter",
    Tier.MINOR: "Nebencharakter",
}
_FALLBACK_LABEL = "Charakter"
_DESCRIBED_TRAITS = 3
_SAMPLE_DIALOGS = 3


def tier_label(tier: Tier | None) -> str:
    if tier is None:
        return _FALLBACK_LABEL
    return TIER_LABELS.get(tier, _FALLBACK_LABEL)


def describe_character(name: str, tier: Tier | None, mentions: int, traits: Sequence[str]) -> str:
    """Render the one-paragraph German description shown for a character."""

    description = f"{name} ist ein {tier_label(tier)} in dieser Geschichte"
    if traits:
        description += " und wird als " + ", ".join(traits[:_DESCRIBED_TRAITS]) + " beschrieben"
    description += f". {name} wird {mentions} Mal in der Geschichte erwähnt."
    return description


def enrich(
    candidate: CharacterCandidate,
    full_text: str,
    document: Document,
    *,
    max_traits: int = 5,
    max_contexts: int = 10,
    excerpt_words: int = 50,
    story_context: StoryContext | None = None,
    writing_style: WritingStyle | None = None,
) -> CharacterProfile:
    """Build the final profile for one classified candidate.

    ``story_context`` and ``writing_style`` describe the whole document; callers
    enriching several candidates of one document pass them in to avoid
    recomputing them per character.
    """

    if story_context is None:
        story_context = extract_story_context(full_text, document.title, excerpt_words=excerpt_words)
    if writing_style is None:
        writing_style = analyze_writing_style(full_text)

    tier = candidate.tier or Tier.MINOR
    traits = extract_personality_traits(candidate.name, full_text, limit=max_traits)
    return CharacterProfile(
        name=candidate.name,
        tier=tier,
        importance_score=candidate.importance_score,
        mentions=candidate.mentions,
        dialogue_count=candidate.dialogue_count,
        action_count=candidate.action_count,
        contexts=tuple(candidate.contexts[:max_contexts]),
        personality_traits=traits,
        description=describe_character(candidate.name, tier, candidate.mentions, traits),
        story_context=story_context,
        writing_style=writing_style,
        sample_dialogs=tuple(candidate.contexts[:_SAMPLE_DIALOGS]),
    )
