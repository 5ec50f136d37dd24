"""Tests for the in-memory story store."""
from __future__ import annotations

from src.narrative import Document
from src.narrative.pipeline import CharacterPipeline
from src.narrative.store import InMemoryStoryStore, StoryStore

STORY = Document(
    "story-7",
    "Der Ausflug",
    'Es war einmal Anna. "Komm mit", sagte Anna. Plötzlich rief Ben: "Warte!"',
)


def test_save_and_load_round_trip() -> None:
    store: StoryStore = InMemoryStoryStore()
    profiles = CharacterPipeline().analyze(STORY)

    store.save(STORY.identifier, profiles)

    assert store.load(STORY.identifier) == profiles


def test_save_replaces_previous_profiles() -> None:
    store = InMemoryStoryStore()
    pipeline = CharacterPipeline()
    store.save(STORY.identifier, pipeline.analyze(STORY))

    store.save(STORY.identifier, pipeline.reanalyze(STORY)[:1])

    assert [profile.name for profile in store.load(STORY.identifier)] == ["Anna"]


def test_unknown_document_loads_empty() -> None:
    assert InMemoryStoryStore().load("nope") == []


def test_delete_and_membership() -> None:
    store = InMemoryStoryStore()
    store.save("story-1", [])

    assert "story-1" in store
    assert store.delete("story-1") is True
    assert "story-1" not in store
    assert store.delete("story-1") is False
