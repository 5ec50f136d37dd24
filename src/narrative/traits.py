"""Personality trait extraction from phrases around a character name."""
from __future__ import annotations

import re

__all__ = ["extract_personality_traits"]

# Bounded so a long run of words after "der" cannot be rescanned from every start.
_WORDS = r"([\w\s]{1,64})"
_MIN_TRAIT_CHARS = 3
_MAX_TRAIT_CHARS = 20


def _trait_patterns(name: str) -> tuple[re.Pattern[str], ...]:
    escaped = re.escape(name)
    return (
        # Anna war mutig
        re.compile(rf"\b{escaped}\s+(?:war|ist|wirkte|schien)\s+{_WORDS}", re.IGNORECASE),
        # der mutige Anna
        re.compile(rf"\bder\s+{_WORDS}\s+{escaped}", re.IGNORECASE),
        # Anna, eine Bäckerin
        re.compile(rf"\b{escaped},?\s+(?:ein|eine|der|die)\s+{_WORDS}", re.IGNORECASE),
    )


def extract_personality_traits(name: str, text: str, *, limit: int = 5) -> tuple[str, ...]:
    """Collect up to ``limit`` short descriptive phrases attached to ``name``."""

    if not name or not text or limit <= 0:
        return ()
    traits: list[str] = []
    for pattern in _trait_patterns(name):
        for match in pattern.finditer(text):
            trait = match.group(1).lower().strip()
            if _MIN_TRAIT_CHARS < len(trait) < _MAX_TRAIT_CHARS and trait not in traits:
                traits.append(trait)
    return tuple(traits[:limit])
