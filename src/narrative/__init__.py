"""Core data models for the narrative character toolkit."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

__all__ = [
    "AnalysisTooExpensive",
    "CharacterCandidate",
    "CharacterProfile",
    "Document",
    "MentionCategory",
    "RawMention",
    "Sensitivity",
    "StoryContext",
    "Tier",
    "WritingStyle",
]


class AnalysisTooExpensive(RuntimeError):
    """Raised when a document is too large to analyze within the configured budget."""


class MentionCategory(Enum):
    """Extraction strategy that produced a raw mention."""

    DIALOGUE = "dialogue"
    ACTION = "action"
    MENTION = "mention"


class Tier(Enum):
    """Coarse narrative importance of a character."""

    PROTAGONIST = "protagonist"
    SUPPORTING = "supporting"
    MINOR = "minor"


class Sensitivity(Enum):
    """How eagerly a document is accepted as narrative."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True, slots=True)
class Document:
    """A post or story handed in by the host for analysis."""

    identifier: str
    title: str = ""
    body: str = ""

    @property
    def full_text(self) -> str:
        """Title and raw body joined by a blank line, before any markup stripping."""

        return f"{self.title}\n\n{self.body}"


@dataclass(frozen=True, slots=True)
class RawMention:
    """One detected occurrence of a possible character name."""

    name: str
    category: MentionCategory
    context: str = ""
    utterance: str | None = None


@dataclass(slots=True)
class CharacterCandidate:
    """Aggregation record keyed by a cleaned character name.

    Candidates are filled in place by the aggregation and importance stages and
    finalized into a :class:`CharacterProfile` once enrichment runs.
    """

    name: str
    mentions: int = 0
    dialogue_count: int = 0
    action_count: int = 0
    contexts: list[str] = field(default_factory=list)
    importance_score: float = 0.0
    tier: Tier | None = None


@dataclass(frozen=True, slots=True)
class StoryContext:
    """Document-level facts shared by every character of a story."""

    title: str
    excerpt: str
    setting: tuple[str, ...] = ()
    genre: str = "allgemein"
    time_period: str = "unbestimmt"

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "excerpt": self.excerpt,
            "setting": list(self.setting),
            "genre": self.genre,
            "time_period": self.time_period,
        }


@dataclass(frozen=True, slots=True)
class WritingStyle:
    """Coarse fingerprint of how a story is written."""

    tone: str = "neutral"
    complexity: str = "medium"
    perspective: str = "third-person"

    def to_dict(self) -> dict[str, str]:
        return {
            "tone": self.tone,
            "complexity": self.complexity,
            "perspective": self.perspective,
        }


@dataclass(frozen=True, slots=True)
class CharacterProfile:
    """Final enriched character record consumed by dialogue generation."""

    name: str
    tier: Tier
    importance_score: float
    mentions: int
    dialogue_count: int
    action_count: int
    contexts: tuple[str, ...]
    personality_traits: tuple[str, ...]
    description: str
    story_context: StoryContext
    writing_style: WritingStyle
    sample_dialogs: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable mapping of the profile."""

        return {
            "name": self.name,
            "tier": self.tier.value,
            "importance_score": self.importance_score,
            "mentions": self.mentions,
            "dialogue_count": self.dialogue_count,
            "action_count": self.action_count,
            "contexts": list(self.contexts),
            "personality_traits": list(self.personality_traits),
            "description": self.description,
            "story_context": self.story_context.to_dict(),
            "writing_style": self.writing_style.to_dict(),
            "sample_dialogs": list(self.sample_dialogs),
        }
