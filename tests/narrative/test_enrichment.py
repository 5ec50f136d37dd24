"""Tests for traits, descriptions, story context and writing style."""
from __future__ import annotations

import time

from src.narrative import CharacterCandidate, Document, Tier
from src.narrative.context import (
    detect_genre,
    detect_time_period,
    extract_setting,
    extract_story_context,
)
from src.narrative.enrichment import describe_character, enrich
from src.narrative.style import (
    analyze_writing_style,
    average_sentence_length,
    detect_complexity,
    detect_perspective,
    detect_tone,
)
from src.narrative.traits import extract_personality_traits

TRAIT_TEXT = "Anna war mutig und klug. Der tapfere Ritter Anna lachte. Anna, eine junge Bäckerin, sang."


def test_traits_from_all_three_patterns() -> None:
    traits = extract_personality_traits("Anna", TRAIT_TEXT)

    assert traits == ("mutig und klug", "tapfere ritter", "junge bäckerin")


def test_traits_respect_limit_and_length_bounds() -> None:
    assert extract_personality_traits("Anna", TRAIT_TEXT, limit=2) == ("mutig und klug", "tapfere ritter")
    assert extract_personality_traits("Anna", "Anna ist da. Anna war ein Mensch mit sehr vielen Ideen.") == ()


def test_trait_scan_is_linear_on_long_article_runs() -> None:
    text = "Anna sagte. " + "der " * 25_000

    started = time.perf_counter()

    assert extract_personality_traits("Anna", text) == ()
    assert time.perf_counter() - started < 2.0


def test_traits_are_deduplicated() -> None:
    text = "Anna war sehr müde. Später war Anna wach. Anna war sehr müde."

    assert extract_personality_traits("Anna", text) == ("sehr müde",)


def test_description_with_traits() -> None:
    description = describe_character("Anna", Tier.SUPPORTING, 4, ("mutig", "klug"))

    assert description == (
        "Anna ist ein wichtiger Nebencharakter in dieser Geschichte und wird als mutig, klug beschrieben. "
        "Anna wird 4 Mal in der Geschichte erwähnt."
    )


def test_description_without_traits_and_trait_cap() -> None:
    assert describe_character("Max", Tier.PROTAGONIST, 12, ()) == (
        "Max ist ein Hauptcharakter in dieser Geschichte. Max wird 12 Mal in der Geschichte erwähnt."
    )
    assert describe_character("Ute", Tier.MINOR, 1, ("a1", "b2", "c3", "d4")) == (
        "Ute ist ein Nebencharakter in dieser Geschichte und wird als a1, b2, c3 beschrieben. "
        "Ute wird 1 Mal in der Geschichte erwähnt."
    )


def test_setting_collects_capitalized_places() -> None:
    text = "Sie lebte in der Alten Mühle. Wir trafen uns am Rhein und bei Tante Erna. Dann am Po."

    assert extract_setting(text) == ("Alten Mühle", "Rhein", "Tante Erna")


def test_genre_detection() -> None:
    assert detect_genre("Der Drache spie Feuer und die Hexe sprach einen Zauber.") == "fantasy"
    assert detect_genre("Magie und Mord.") == "fantasy"
    assert detect_genre("Die Polizei fand den Mord verdächtig.") == "krimi"
    assert detect_genre("Ein ganz normaler Satz.") == "allgemein"


def test_time_period_detection() -> None:
    assert detect_time_period("Der Ritter ritt zur Burg des Königs.") == "mittelalter"
    assert detect_time_period("Sie nahm ihr Smartphone und den Computer.") == "modern"
    assert detect_time_period("Ein Satz.") == "unbestimmt"


def test_story_context_excerpt_is_trimmed() -> None:
    text = " ".join(f"wort{index}" for index in range(60))

    context = extract_story_context(text, "Titel", excerpt_words=50)

    assert context.title == "Titel"
    assert context.excerpt.split()[-1] == "wort49…"
    assert len(context.excerpt.split()) == 50


def test_tone() -> None:
    assert detect_tone("Jedoch kam er, folglich blieb sie.") == "formal"
    assert detect_tone("Das war echt krass, ey.") == "casual"
    assert detect_tone("Ein Satz.") == "neutral"


def test_complexity_uses_average_sentence_length() -> None:
    assert average_sentence_length("Kurz. Knapp.") == (4 + 6 + 0) / 3
    assert detect_complexity("Kurz. Knapp.") == "low"
    assert detect_complexity("a" * 75) == "medium"
    assert detect_complexity("a" * 150) == "high"


def test_perspective_prefers_first_person() -> None:
    first = " ".join(["und ich"] * 5) + " ende"
    second = " ".join(["und du"] * 5) + " ende"

    assert detect_perspective(first) == "first-person"
    assert detect_perspective(second) == "second-person"
    assert detect_perspective(first + " " + second) == "first-person"
    assert detect_perspective("Er ging.") == "third-person"


def test_writing_style_defaults_for_empty_text() -> None:
    style = analyze_writing_style("")

    assert (style.tone, style.complexity, style.perspective) == ("neutral", "low", "third-person")


def test_enrich_builds_profile() -> None:
    candidate = CharacterCandidate(
        "Anna",
        mentions=4,
        dialogue_count=1,
        action_count=1,
        contexts=["a", "b", "c", "d"],
        importance_score=12.5,
        tier=Tier.SUPPORTING,
    )
    document = Document("doc-1", "Titel", "")

    profile = enrich(candidate, TRAIT_TEXT, document, max_contexts=2)

    assert profile.name == "Anna"
    assert profile.tier is Tier.SUPPORTING
    assert profile.importance_score == 12.5
    assert profile.contexts == ("a", "b")
    assert profile.sample_dialogs == ("a", "b", "c")
    assert profile.personality_traits[0] == "mutig und klug"
    assert profile.description.startswith("Anna ist ein wichtiger Nebencharakter")
    assert profile.story_context.title == "Titel"
    assert profile.to_dict()["tier"] == "supporting"


def test_enrich_defaults_missing_tier_to_minor() -> None:
    profile = enrich(CharacterCandidate("Ben", mentions=1), "Ben.", Document("doc-2"))

    assert profile.tier is Tier.MINOR
    assert profile.personality_traits == ()
