"""End-to-end character analysis for a single document."""
from __future__ import annotations

import logging
from typing import Callable, Sequence

from . import AnalysisTooExpensive, CharacterProfile, Document, RawMention, Sensitivity
from .aggregation import aggregate
from .classifier import is_narrative
from .config import AnalysisConfig
from .context import extract_story_context
from .enrichment import enrich
from .importance import classify
from .mentions import extract_action_mentions, extract_dialogue_mentions, extract_named_mentions
from .normalization import coerce_text, prepare_content
from .style import analyze_writing_style

__all__ = [
    "CharacterPipeline",
    "MentionStrategy",
    "analyze",
    "classify_narrative",
    "reanalyze",
]

logger = logging.getLogger(__name__)

MentionStrategy = Callable[[str], Sequence[RawMention]]


class CharacterPipeline:
    """Composes narrative gating, extraction, scoring and enrichment.

    The pipeline keeps no state between calls; one instance can serve many
    documents, including from several threads at once.
    """

    def __init__(
        self,
        config: AnalysisConfig | None = None,
        *,
        strategies: Sequence[MentionStrategy] | None = None,
    ) -> None:
        self.config = config or AnalysisConfig()
        stopwords = self.config.stopwords
        if strategies is None:
            strategies = (
                extract_dialogue_mentions,
                extract_action_mentions,
                lambda text: extract_named_mentions(text, stopwords),
            )
        if not strategies:
            raise ValueError("CharacterPipeline requires at least one extraction strategy")
        self._strategies: tuple[MentionStrategy, ...] = tuple(strategies)

    @property
    def strategies(self) -> tuple[MentionStrategy, ...]:
        return self._strategies

    def is_narrative_document(
        self,
        document: Document,
        sensitivity: Sensitivity | str | None = None,
    ) -> bool:
        text = f"{coerce_text(document.body)} {coerce_text(document.title)}"
        return is_narrative(text, sensitivity or self.config.sensitivity)

    def analyze(
        self,
        document: Document,
        sensitivity: Sensitivity | str | None = None,
    ) -> list[CharacterProfile]:
        """Return character profiles for ``document``, or ``[]`` when it is not a story.

        Raises :class:`AnalysisTooExpensive` when the raw title and body or the
        prepared text exceed the configured size budgets.
        """

        raw_length = len(coerce_text(document.title)) + len(coerce_text(document.body))
        self._check_raw_budget(raw_length, document)
        if not self.is_narrative_document(document, sensitivity):
            logger.debug("Document %s does not look like a story", document.identifier)
            return []

        content = prepare_content(document.title, document.body)
        profiles = self._profiles_for(content, document)
        logger.info("Document %s analyzed: %d characters found", document.identifier, len(profiles))
        return profiles

    def reanalyze(
        self,
        document: Document,
        sensitivity: Sensitivity | str | None = None,
    ) -> list[CharacterProfile]:
        """Recompute profiles; callers drop any stored result they hold."""

        return self.analyze(document, sensitivity)

    def analyze_text(self, text: str) -> list[CharacterProfile]:
        """Analyze a bare string without narrative gating or document metadata."""

        document = Document(identifier="<text>")
        raw = coerce_text(text)
        self._check_raw_budget(len(raw), document)
        content = prepare_content("", raw)
        if not content:
            return []
        return self._profiles_for(content, document)

    def extract(self, content: str) -> list[RawMention]:
        mentions: list[RawMention] = []
        for strategy in self._strategies:
            mentions.extend(strategy(content))
        return mentions

    def _profiles_for(self, content: str, document: Document) -> list[CharacterProfile]:
        self._check_budget(content, document)
        config = self.config

        candidates = aggregate(self.extract(content), stopwords=config.stopwords)
        classify(
            candidates,
            content,
            window=config.early_mention_window,
            bonus=config.early_mention_bonus,
        )

        story_context = extract_story_context(content, document.title, excerpt_words=config.excerpt_words)
        writing_style = analyze_writing_style(content)
        profiles = [
            enrich(
                candidate,
                content,
                document,
                max_traits=config.max_traits,
                max_contexts=config.max_contexts,
                story_context=story_context,
                writing_style=writing_style,
            )
            for candidate in candidates.values()
        ]
        profiles.sort(key=lambda profile: (-profile.importance_score, profile.name))
        return profiles

    def _check_raw_budget(self, length: int, document: Document) -> None:
        limit = self.config.max_raw_chars
        if length > limit:
            logger.warning(
                "Document %s has %d raw characters, above the input limit of %d",
                document.identifier,
                length,
                limit,
            )
            raise AnalysisTooExpensive(
                f"Document {document.identifier} has {length} raw characters; limit is {limit}"
            )

    def _check_budget(self, content: str, document: Document) -> None:
        limit = self.config.max_input_chars
        if len(content) > limit:
            logger.warning(
                "Document %s has %d characters, above the analysis budget of %d",
                document.identifier,
                len(content),
                limit,
            )
            raise AnalysisTooExpensive(
                f"Document {document.identifier} has {len(content)} characters; limit is {limit}"
            )


def classify_narrative(text: str, sensitivity: Sensitivity | str | None = Sensitivity.MEDIUM) -> bool:
    """Decide whether ``text`` is narrative fiction at the given sensitivity."""

    return is_narrative(text, sensitivity)


def analyze(
    document: Document,
    sensitivity: Sensitivity | str | None = None,
    *,
    config: AnalysisConfig | None = None,
) -> list[CharacterProfile]:
    return CharacterPipeline(config).analyze(document, sensitivity)


def reanalyze(
    document: Document,
    sensitivity: Sensitivity | str | None = None,
    *,
    config: AnalysisConfig | None = None,
) -> list[CharacterProfile]:
    return CharacterPipeline(config).reanalyze(document, sensitivity)
