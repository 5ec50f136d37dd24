"""Story store contract and an in-memory reference implementation."""
from __future__ import annotations

from typing import Iterable, Protocol

from . import CharacterProfile

__all__ = ["InMemoryStoryStore", "StoryStore"]


class StoryStore(Protocol):
    """Persists character profiles per document on behalf of the host."""

    def save(self, document_id: str, profiles: Iterable[CharacterProfile]) -> None:
        ...

    def load(self, document_id: str) -> list[CharacterProfile]:
        ...


class InMemoryStoryStore:
    """Dictionary-backed store; saving replaces any previous profiles."""

    def __init__(self) -> None:
        self._profiles: dict[str, tuple[CharacterProfile, ...]] = {}

    def save(self, document_id: str, profiles: Iterable[CharacterProfile]) -> None:
        self._profiles[document_id] = tuple(profiles)

    def load(self, document_id: str) -> list[CharacterProfile]:
        return list(self._profiles.get(document_id, ()))

    def delete(self, document_id: str) -> bool:
        return self._profiles.pop(document_id, None) is not None

    def __contains__(self, document_id: object) -> bool:
        return document_id in self._profiles
