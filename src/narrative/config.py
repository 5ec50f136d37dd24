"""Configuration loading for character analysis."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml
from jsonschema import ValidationError, validate

from .normalization import STOPWORDS

__all__ = [
    "ANALYSIS_CONFIG_SCHEMA",
    "AnalysisConfig",
    "load_analysis_config",
]

_DEFAULT_CONFIG_PATH = Path("config/analysis.yaml")

ANALYSIS_CONFIG_SCHEMA: dict[str, Any] = {
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "sensitivity": {
            "type": "string",
            "enum": ["low", "medium", "high"],
            "description": "How eagerly documents are accepted as narrative",
        },
        "max_input_chars": {
            "type": "integer",
            "minimum": 1,
            "description": "Prepared text length above which analysis is refused",
        },
        "max_raw_chars": {
            "type": "integer",
            "minimum": 1,
            "description": "Raw title plus body length above which analysis is refused before any scan",
        },
        "max_traits": {"type": "integer", "minimum": 0, "maximum": 20},
        "max_contexts": {"type": "integer", "minimum": 0},
        "excerpt_words": {"type": "integer", "minimum": 1},
        "early_mention_window": {"type": "integer", "minimum": 0},
        "early_mention_bonus": {"type": "number", "minimum": 0},
        "extra_stopwords": {
            "type": "array",
            "items": {"type": "string", "minLength": 1},
        },
    },
}


@dataclass(frozen=True, slots=True)
class AnalysisConfig:
    """Tunable limits and thresholds for the character pipeline."""

    sensitivity: str = "medium"
    max_input_chars: int = 200_000
    max_raw_chars: int = 1_000_000
    max_traits: int = 5
    max_contexts: int = 10
    excerpt_words: int = 50
    early_mention_window: int = 200
    early_mention_bonus: float = 5.0
    extra_stopwords: tuple[str, ...] = ()

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "AnalysisConfig":
        """Validate ``mapping`` against the schema and build a config from it."""

        try:
            validate(instance=dict(mapping), schema=ANALYSIS_CONFIG_SCHEMA)
        except ValidationError as exc:
            raise ValueError(f"Analysis config validation failed: {exc.message}") from exc

        defaults = cls()
        return cls(
            sensitivity=str(mapping.get("sensitivity", defaults.sensitivity)),
            max_input_chars=int(mapping.get("max_input_chars", defaults.max_input_chars)),
            max_raw_chars=int(mapping.get("max_raw_chars", defaults.max_raw_chars)),
            max_traits=int(mapping.get("max_traits", defaults.max_traits)),
            max_contexts=int(mapping.get("max_contexts", defaults.max_contexts)),
            excerpt_words=int(mapping.get("excerpt_words", defaults.excerpt_words)),
            early_mention_window=int(mapping.get("early_mention_window", defaults.early_mention_window)),
            early_mention_bonus=float(mapping.get("early_mention_bonus", defaults.early_mention_bonus)),
            extra_stopwords=tuple(dict.fromkeys(str(word).strip() for word in mapping.get("extra_stopwords", ()))),
        )

    @property
    def stopwords(self) -> frozenset[str]:
        """Built-in stopwords merged with the configured extras."""

        return STOPWORDS | frozenset(self.extra_stopwords)


def load_analysis_config(path: Path | None = None) -> AnalysisConfig:
    """Load analysis configuration from YAML or fall back to defaults."""

    if path is not None:
        resolved = Path(path).expanduser()
        if not resolved.exists():
            raise FileNotFoundError(f"Analysis config '{resolved}' does not exist")
        return AnalysisConfig.from_mapping(_load_yaml(resolved))

    if _DEFAULT_CONFIG_PATH.exists():
        return AnalysisConfig.from_mapping(_load_yaml(_DEFAULT_CONFIG_PATH))

    return AnalysisConfig()


def _load_yaml(path: Path) -> Mapping[str, Any]:
    raw = path.read_text(encoding="utf-8")
    try:
        data = yaml.safe_load(raw) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in analysis config '{path}': {exc}") from exc
    if not isinstance(data, Mapping):
        raise ValueError("Analysis config must be a mapping at the top level.")
    return data
