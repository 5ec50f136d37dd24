"""Shared text preparation and name normalization helpers."""
from __future__ import annotations

import html
import logging
import re
from typing import Iterable

__all__ = [
    "LETTER",
    "LOWER",
    "UPPER",
    "STOPWORDS",
    "RESERVED_TERMS",
    "clean_character_name",
    "coerce_text",
    "count_occurrences",
    "is_valid_character_name",
    "prepare_content",
    "remove_script_blocks",
    "strip_markup",
    "trim_words",
]

logger = logging.getLogger(__name__)

# Character classes for capitalized German names, including the Latin-1 letters
# (Ä, Ö, Ü, ß, accented vowels) that plain A-Z misses.
UPPER = "A-ZÀ-ÖØ-Þ"
LOWER = "a-zß-öø-ÿ"
LETTER = UPPER + LOWER

STOPWORDS: frozenset[str] = frozenset(
    {
        "Der",
        "Die",
        "Das",
        "Ein",
        "Eine",
        "Einen",
        "Einer",
        "Eines",
        "Und",
        "Oder",
        "Aber",
        "Wenn",
        "Dann",
        "Also",
        "Jedoch",
        "Sie",
        "Er",
        "Es",
        "Wir",
        "Ihr",
        "Ich",
        "Du",
        "WordPress",
        "Plugin",
        "Blog",
        "Post",
        "Seite",
        "Website",
    }
)

RESERVED_TERMS: frozenset[str] = frozenset(
    {"WordPress", "Plugin", "Widget", "Admin", "User", "Post", "Page"}
)

# Opening delimiters are excluded inside each match so an unclosed bracket or
# tag is given up at the next opener instead of rescanning to the end of text.
_SHORTCODE_PATTERN = re.compile(r"\[[^\[\]]*\]")
_BLOCK_OPEN_PATTERN = re.compile(r"<(script|style)\b[^<>]*>", re.IGNORECASE)
_BLOCK_CLOSE_PATTERNS: dict[str, re.Pattern[str]] = {
    "script": re.compile(r"</script\s*>", re.IGNORECASE),
    "style": re.compile(r"</style\s*>", re.IGNORECASE),
}
_TAG_PATTERN = re.compile(r"<[^<>]*>")
_WHITESPACE_PATTERN = re.compile(r"\s+")
_TITLE_PREFIX_PATTERN = re.compile(r"^(?:Herr|Frau|Dr\.|Prof\.)\s+")
_NAME_PUNCTUATION_PATTERN = re.compile(r"[.,;:!?]")
_UPPER_START_PATTERN = re.compile(rf"^[{UPPER}]")
_DIGIT_PATTERN = re.compile(r"\d")


def coerce_text(value: object) -> str:
    """Return ``value`` as text, dropping bytes that do not decode."""

    if value is None:
        return ""
    if isinstance(value, str):
        # Lone surrogates cannot be matched reliably, so they are dropped.
        return value.encode("utf-8", errors="ignore").decode("utf-8")
    if isinstance(value, (bytes, bytearray)):
        raw = bytes(value)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError:
            logger.debug("Dropping undecodable bytes from a %d byte segment", len(raw))
            return raw.decode("utf-8", errors="ignore")
    return str(value)


def remove_script_blocks(text: str) -> str:
    """Replace closed ``<script>``/``<style>`` blocks with a space in one pass.

    An opener without a matching closing tag is left for the tag stripper. Once
    a closing tag is known to be missing, later openers of that kind are not
    searched again, so the scan stays linear in the text length.
    """

    pieces: list[str] = []
    position = 0
    unclosed: set[str] = set()
    while True:
        opener = _BLOCK_OPEN_PATTERN.search(text, position)
        if opener is None:
            break
        kind = opener.group(1).lower()
        closer = None
        if kind not in unclosed:
            closer = _BLOCK_CLOSE_PATTERNS[kind].search(text, opener.end())
            if closer is None:
                unclosed.add(kind)
        if closer is None:
            pieces.append(text[position : opener.end()])
            position = opener.end()
            continue
        pieces.append(text[position : opener.start()])
        pieces.append(" ")
        position = closer.end()
    pieces.append(text[position:])
    return "".join(pieces)


def strip_markup(text: str) -> str:
    """Remove HTML tags, script/style blocks and entity escapes."""

    without_blocks = remove_script_blocks(text)
    without_tags = _TAG_PATTERN.sub(" ", without_blocks)
    return html.unescape(without_tags)


def prepare_content(title: object, body: object) -> str:
    """Combine title and body into the single-line text every stage scans."""

    content = f"{coerce_text(title)}\n\n{coerce_text(body)}"
    content = _SHORTCODE_PATTERN.sub("", content)
    content = strip_markup(content)
    content = _WHITESPACE_PATTERN.sub(" ", content)
    return content.strip()


def trim_words(text: str, limit: int, *, more: str = "…") -> str:
    """Return the first ``limit`` words of ``text``, marking truncation."""

    words = text.split()
    if len(words) <= limit:
        return " ".join(words)
    return " ".join(words[:limit]) + more


def count_occurrences(haystack: str, needles: Iterable[str]) -> int:
    """Sum non-overlapping substring counts of ``needles`` in ``haystack``."""

    return sum(haystack.count(needle) for needle in needles)


def clean_character_name(name: str) -> str:
    """Strip title prefixes and punctuation and collapse internal whitespace."""

    cleaned = _TITLE_PREFIX_PATTERN.sub("", name.strip())
    cleaned = _NAME_PUNCTUATION_PATTERN.sub("", cleaned)
    cleaned = _WHITESPACE_PATTERN.sub(" ", cleaned)
    return cleaned.strip()


def is_valid_character_name(name: str, *, stopwords: Iterable[str] | None = None) -> bool:
    """Return ``True`` when ``name`` can plausibly name a story character."""

    if len(name) < 2 or len(name) > 50:
        return False
    if not _UPPER_START_PATTERN.match(name):
        return False
    if _DIGIT_PATTERN.search(name):
        return False
    blocked = STOPWORDS if stopwords is None else frozenset(stopwords)
    if name in blocked:
        return False
    if name in RESERVED_TERMS:
        return False
    return True
