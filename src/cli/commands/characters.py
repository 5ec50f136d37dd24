"""CLI commands for narrative character analysis."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from src.narrative import AnalysisTooExpensive, CharacterProfile, Document
from src.narrative.classifier import narrative_score, resolve_threshold
from src.narrative.config import load_analysis_config
from src.narrative.pipeline import CharacterPipeline

OUTPUT_TEXT = "text"
OUTPUT_JSON = "json"
SENSITIVITY_CHOICES = ("low", "medium", "high")


def register_commands(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    """Add character analysis subcommands to the main CLI parser."""

    analyze_parser = subparsers.add_parser(
        "analyze",
        description="Extract character profiles from a story file.",
        help="Extract character profiles from a story file.",
    )
    analyze_parser.add_argument("--input", type=Path, required=True, help="Story text or HTML file.")
    analyze_parser.add_argument("--title", default=None, help="Story title. Defaults to the file stem.")
    analyze_parser.add_argument(
        "--sensitivity",
        choices=SENSITIVITY_CHOICES,
        help="Narrative detection sensitivity. Defaults to the configured value.",
    )
    analyze_parser.add_argument("--config", type=Path, help="Path to analysis configuration YAML.")
    analyze_parser.add_argument(
        "--output-format",
        choices=[OUTPUT_TEXT, OUTPUT_JSON],
        default=OUTPUT_TEXT,
        help="Output format: friendly text or JSON.",
    )
    analyze_parser.set_defaults(func=analyze_cli, command="analyze")

    classify_parser = subparsers.add_parser(
        "classify",
        description="Report whether a file reads like narrative fiction.",
        help="Report whether a file reads like narrative fiction.",
    )
    classify_parser.add_argument("--input", type=Path, required=True, help="Text or HTML file.")
    classify_parser.add_argument(
        "--sensitivity",
        choices=SENSITIVITY_CHOICES,
        default="medium",
        help="Narrative detection sensitivity.",
    )
    classify_parser.set_defaults(func=classify_cli, command="classify")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Narrative character analysis.")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    register_commands(subparsers)
    return parser


def analyze_cli(args: argparse.Namespace) -> int:
    """Analyze one file and print its character profiles."""

    try:
        config = load_analysis_config(args.config)
        body = _read_input(args.input)
    except (FileNotFoundError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    title = args.title if args.title is not None else args.input.stem
    document = Document(identifier=str(args.input), title=title, body=body)
    pipeline = CharacterPipeline(config)
    try:
        profiles = pipeline.analyze(document, args.sensitivity)
    except AnalysisTooExpensive as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if args.output_format == OUTPUT_JSON:
        print(json.dumps([profile.to_dict() for profile in profiles], indent=2, ensure_ascii=False))
        return 0

    if not profiles:
        print(f"No characters found in {args.input}.")
        return 0
    for profile in profiles:
        print(_format_profile(profile))
    return 0


def classify_cli(args: argparse.Namespace) -> int:
    """Print whether a file is narrative along with its score."""

    try:
        text = _read_input(args.input)
    except FileNotFoundError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    score = narrative_score(text)
    threshold = resolve_threshold(args.sensitivity)
    verdict = "narrative" if score >= threshold else "non-narrative"
    print(f"{verdict} (score {score}, threshold {threshold})")
    return 0


def _read_input(path: Path) -> str:
    resolved = path.expanduser()
    if not resolved.exists():
        raise FileNotFoundError(f"Input '{resolved}' does not exist")
    return resolved.read_bytes().decode("utf-8", errors="ignore")


def _format_profile(profile: CharacterProfile) -> str:
    traits = ", ".join(profile.personality_traits) or "-"
    return (
        f"{profile.name} [{profile.tier.value}] score={profile.importance_score:g} "
        f"mentions={profile.mentions} traits={traits}\n  {profile.description}"
    )
