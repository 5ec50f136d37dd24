"""Tests for importance scoring and tier assignment."""
from __future__ import annotations

import pytest

from src.narrative import CharacterCandidate, Tier
from src.narrative.aggregation import aggregate
from src.narrative.importance import classify, importance_score, tier_for_score
from src.narrative.mentions import extract_mentions

FILLER = "x" * 300


def test_importance_score_weights_dialogue_and_action() -> None:
    candidate = CharacterCandidate("Anna", mentions=4, dialogue_count=1, action_count=1)

    assert importance_score(candidate) == pytest.approx(7.5)


@pytest.mark.parametrize(
    ("score", "tier"),
    [(12.0, Tier.PROTAGONIST), (10.0, Tier.PROTAGONIST), (9.5, Tier.SUPPORTING), (3.0, Tier.SUPPORTING), (2.5, Tier.MINOR), (0.0, Tier.MINOR)],
)
def test_tier_for_score(score: float, tier: Tier) -> None:
    assert tier_for_score(score) is tier


def test_many_plain_mentions_make_a_protagonist() -> None:
    candidates = {"Max": CharacterCandidate("Max", mentions=12)}

    classify(candidates, f"{FILLER} Max")

    assert candidates["Max"].importance_score == pytest.approx(12.0)
    assert candidates["Max"].tier is Tier.PROTAGONIST


def test_early_mention_promotes_minor_to_supporting() -> None:
    candidates = {"Lena": CharacterCandidate("Lena", mentions=1)}

    classify(candidates, "Lena kam spät nach Hause.")

    assert candidates["Lena"].importance_score == pytest.approx(6.0)
    assert candidates["Lena"].tier is Tier.SUPPORTING


def test_early_mention_bonus_never_creates_a_protagonist() -> None:
    # The bonus only lifts minor characters; a boosted supporting character stays supporting.
    candidates = {"Lena": CharacterCandidate("Lena", mentions=6)}

    classify(candidates, "Lena kam spät nach Hause.")

    assert candidates["Lena"].importance_score == pytest.approx(11.0)
    assert candidates["Lena"].tier is Tier.SUPPORTING


def test_early_mention_lookup_is_case_insensitive() -> None:
    candidates = {"Lena": CharacterCandidate("Lena", mentions=1)}

    classify(candidates, "LENA kam.")

    assert candidates["Lena"].importance_score == pytest.approx(6.0)


def test_late_mentions_get_no_bonus() -> None:
    candidates = {"Lena": CharacterCandidate("Lena", mentions=1)}

    classify(candidates, f"{FILLER} Lena")

    assert candidates["Lena"].importance_score == pytest.approx(1.0)
    assert candidates["Lena"].tier is Tier.MINOR


def test_bonus_window_and_size_are_configurable() -> None:
    candidates = {"Lena": CharacterCandidate("Lena", mentions=1)}

    classify(candidates, "Lena kam.", window=0, bonus=10.0)

    assert candidates["Lena"].importance_score == pytest.approx(1.0)
    assert candidates["Lena"].tier is Tier.MINOR


def test_dialogue_scene_scores_supporting() -> None:
    text = 'Anna sagte: "Ich gehe jetzt." Anna ging zur Tür.'
    candidates = aggregate(extract_mentions(text))

    classify(candidates, FILLER)
    anna = candidates["Anna"]
    assert anna.importance_score == pytest.approx(anna.mentions + 2 * 1 + 1.5 * 1)
    assert anna.tier is Tier.SUPPORTING

    classify(candidates, text)
    assert anna.importance_score == pytest.approx(12.5)
    assert anna.tier is Tier.SUPPORTING


def test_equal_counts_give_equal_tiers() -> None:
    candidates = {
        "Anna": CharacterCandidate("Anna", mentions=3, dialogue_count=1, action_count=2),
        "Ben": CharacterCandidate("Ben", mentions=3, dialogue_count=1, action_count=2),
    }

    classify(candidates, FILLER)

    assert candidates["Anna"].tier is candidates["Ben"].tier
    assert candidates["Anna"].importance_score == candidates["Ben"].importance_score
