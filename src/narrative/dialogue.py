"""Prompt building and reply shaping around an external dialogue generator.

Nothing here talks to a model; hosts inject a :class:`DialogueGenerator` and
these helpers prepare its input and clean up its output.
"""
from __future__ import annotations

import logging
import re
import zlib
from dataclasses import dataclass
from typing import Protocol, Sequence

from . import CharacterProfile, Tier
from .enrichment import tier_label
from .normalization import trim_words

__all__ = [
    "ConversationTurn",
    "DialogueGenerationError",
    "DialogueGenerator",
    "build_character_prompt",
    "fallback_reply",
    "post_process_reply",
    "respond",
]

logger = logging.getLogger(__name__)

HISTORY_TURNS = 3
_MAX_REPLY_CHARS = 800
_TRIMMED_REPLY_WORDS = 120

_ROLE_PREFIX_PATTERN = re.compile(r"^(?:System:|Assistant:|Bot:)", re.IGNORECASE)
_WHITESPACE_PATTERN = re.compile(r"\s+")

_CONFIDENT_REPLACEMENTS: tuple[tuple[str, str], ...] = (
    ("ich denke", "ich bin mir sicher"),
    ("vielleicht", "wahrscheinlich"),
    ("ich glaube", "ich weiß"),
)

_FALLBACK_TEMPLATES: tuple[str, ...] = (
    "Entschuldigung, als {name} aus der Geschichte bin ich gerade etwas verwirrt. "
    "Könntest du deine Frage anders stellen?",
    "Es tut mir leid, aber ich als {name} kann gerade nicht richtig antworten. "
    "Vielleicht versuchst du es später nochmal?",
    "Hmm, das ist eine interessante Frage! Als {name} aus der Geschichte denke ich darüber nach, "
    "aber mir fällt gerade keine passende Antwort ein.",
)

_SYSTEM_PROMPT = """Du bist {name}, ein {label} aus der Geschichte '{title}'.

WICHTIGE CHARAKTERREGELN:
- Antworte IMMER als {name} in der ersten Person ('Ich')
- Bleibe im Charakter und in der Welt der Geschichte
- Verwende die Persönlichkeitsmerkmale: {traits}
- Antworte auf Deutsch in einem natürlichen, gesprächigen Ton
- Halte Antworten zwischen 50-150 Wörtern
- Beziehe dich auf Ereignisse und andere Charaktere aus der Geschichte
- Wenn du etwas nicht weißt, bleibe im Charakter und improvisiere passend zur Story

STORY-KONTEXT:
{excerpt}

PERSÖNLICHKEIT:
Du bist {traits} und verhältst dich entsprechend deiner Rolle in der Geschichte."""


class DialogueGenerationError(RuntimeError):
    """Raised by generators that could not produce a reply."""


@dataclass(frozen=True, slots=True)
class ConversationTurn:
    user_message: str
    reply: str


class DialogueGenerator(Protocol):
    """Turns a character profile and a user message into reply text."""

    def generate(
        self,
        profile: CharacterProfile,
        history: Sequence[ConversationTurn],
        message: str,
    ) -> str:
        ...


def build_character_prompt(
    profile: CharacterProfile,
    message: str,
    history: Sequence[ConversationTurn] = (),
) -> list[dict[str, str]]:
    """Return chat messages that make a model speak as ``profile``."""

    context = profile.story_context
    system_prompt = _SYSTEM_PROMPT.format(
        name=profile.name,
        label=tier_label(profile.tier),
        title=context.title or "der Geschichte",
        traits=", ".join(profile.personality_traits),
        excerpt=context.excerpt or "Keine weiteren Details verfügbar.",
    )
    messages = [{"role": "system", "content": system_prompt}]
    for turn in list(history)[-HISTORY_TURNS:]:
        messages.append({"role": "user", "content": turn.user_message})
        messages.append({"role": "assistant", "content": turn.reply})
    messages.append({"role": "user", "content": message})
    return messages


def post_process_reply(text: str, profile: CharacterProfile) -> str:
    """Normalize a generated reply so it reads as the character's own voice."""

    content = _ROLE_PREFIX_PATTERN.sub("", text)
    content = _WHITESPACE_PATTERN.sub(" ", content).strip()
    if len(content) > _MAX_REPLY_CHARS:
        content = trim_words(content, _TRIMMED_REPLY_WORDS)

    name = re.escape(profile.name)
    content = re.sub(rf"\b{name}\s+(ist|war|hat|hatte|geht|ging)\b", r"Ich \1", content, flags=re.IGNORECASE)
    content = re.sub(rf"\b{name}\s+", "Ich ", content, flags=re.IGNORECASE)

    if profile.tier is Tier.PROTAGONIST:
        for search, replacement in _CONFIDENT_REPLACEMENTS:
            content = re.sub(re.escape(search), replacement, content, flags=re.IGNORECASE)
    return content


def fallback_reply(profile: CharacterProfile, message: str) -> str:
    """Pick a stable in-character apology for when generation fails."""

    index = zlib.crc32((message + profile.name).encode("utf-8")) % len(_FALLBACK_TEMPLATES)
    return _FALLBACK_TEMPLATES[index].format(name=profile.name)


def respond(
    generator: DialogueGenerator,
    profile: CharacterProfile,
    message: str,
    history: Sequence[ConversationTurn] = (),
) -> str:
    """Ask ``generator`` for a reply, falling back to a canned answer on failure."""

    try:
        reply = generator.generate(profile, history, message)
        if not reply or not reply.strip():
            raise DialogueGenerationError("Generator returned an empty reply")
    except DialogueGenerationError as exc:
        logger.warning("Dialogue generation failed for %s: %s", profile.name, exc)
        return fallback_reply(profile, message)
    return post_process_reply(reply, profile)
