"""Language-aware text metrics.

Every word count in the project goes through :func:`count_words`, so that
percentages built from it (keyword density, words per heading, Flesch) divide
like by like for Chinese, English and mixed text.
"""
from __future__ import annotations

import math
import re
from collections.abc import Iterable
from dataclasses import asdict, dataclass

CJK_RE = re.compile(r"[\u4e00-\u9fff]")
ENGLISH_WORD_RE = re.compile(r"[a-zA-Z]+")
LATIN_TOKEN_RE = re.compile(r"[a-z0-9]+")
SENTENCE_SPLIT_RE = re.compile(r"[.!?。！？]+")
PARAGRAPH_SPLIT_RE = re.compile(r"\n\s*\n")
WHITESPACE_RE = re.compile(r"\s+")

# Language thresholds on the share of CJK ideographs
CHINESE_DOMINANT_RATIO = 0.7
ENGLISH_DOMINANT_RATIO = 0.1

# Rendered width per character class (px)
CJK_WIDTH = 14
DIGIT_WIDTH = 8
LETTER_WIDTH = 5
SPACE_WIDTH = 5


@dataclass(frozen=True)
class TextStats:
    """Aggregate statistics of a block of text."""
    char_count: int
    paragraph_count: int
    sentence_count: int
    reading_time_minutes: int

    def to_dict(self) -> dict:
        return asdict(self)


def round_half_up(value: float) -> int:
    """Round halves up, as report scores are expected to."""
    return int(math.floor(value + 0.5))


def chinese_ratio(text: str) -> float:
    """Share of CJK ideographs among the non-whitespace characters."""
    total = len(WHITESPACE_RE.sub("", text or ""))
    if total == 0:
        return 0.0
    return len(CJK_RE.findall(text)) / total


def detect_language(text: str) -> str:
    """Classify text as 'chinese', 'english' or 'mixed'."""
    ratio = chinese_ratio(text)
    if ratio > CHINESE_DOMINANT_RATIO:
        return "chinese"
    if ratio < ENGLISH_DOMINANT_RATIO:
        return "english"
    return "mixed"


def count_words(text: str) -> int:
    """Count words the same way for every caller.

    Chinese-dominant and mixed text count one word per ideograph plus one per
    English token; Latin text counts whitespace-delimited tokens.
    """
    if not text or not text.strip():
        return 0

    if detect_language(text) == "english":
        return len(text.split())

    return len(CJK_RE.findall(text)) + len(ENGLISH_WORD_RE.findall(text))


def split_sentences(text: str) -> list[str]:
    """Split on Western and CJK sentence terminators."""
    if not text:
        return []
    return [s.strip() for s in SENTENCE_SPLIT_RE.split(text) if s.strip()]


def count_sentences(text: str) -> int:
    return len(split_sentences(text))


def split_paragraphs(text: str) -> list[str]:
    """Split on blank lines."""
    if not text:
        return []
    return [p.strip() for p in PARAGRAPH_SPLIT_RE.split(text) if p.strip()]


def analyze_text(text: str, words_per_minute: int = 200) -> TextStats:
    """Compute character, paragraph, sentence and reading-time statistics."""
    text = (text or "").strip()
    word_count = count_words(text)
    return TextStats(
        char_count=len(text),
        paragraph_count=len(split_paragraphs(text)),
        sentence_count=count_sentences(text),
        reading_time_minutes=math.ceil(word_count / words_per_minute) if word_count else 0,
    )


def count_syllables(word: str) -> int:
    """Estimate English syllables (only used for Flesch scoring)."""
    word = word.lower()
    if len(word) <= 3:
        return 1

    word = re.sub(r"(?:[^laeiouy]es|ed|[^laeiouy]e)$", "", word)
    word = re.sub(r"^y", "", word)

    matches = re.findall(r"[aeiouy]{1,2}", word)
    return len(matches) if matches else 1


def text_pixel_width(text: str) -> int:
    """Estimate the rendered width of text in pixels.

    Punctuation and symbols have no width.
    """
    width = 0
    for char in text or "":
        code = ord(char)
        if 0x4E00 <= code <= 0x9FFF or 0x3400 <= code <= 0x4DBF:
            width += CJK_WIDTH
        elif "0" <= char <= "9":
            width += DIGIT_WIDTH
        elif ("a" <= char <= "z") or ("A" <= char <= "Z"):
            width += LETTER_WIDTH
        elif char.isspace():
            width += SPACE_WIDTH
    return width


def char_equivalent(pixel_width: int) -> int:
    """Express a pixel width as a count of CJK-sized characters."""
    return round_half_up(pixel_width / CJK_WIDTH)


def contains_all_characters(haystack: str, needle: str) -> bool:
    """Return True if every character of needle occurs somewhere in haystack.

    Characters need not be contiguous or ordered: "low" matches "hello world".
    """
    haystack_lower = (haystack or "").lower()
    return all(char in haystack_lower for char in (needle or "").lower())


def find_matching_related_keyword(text: str, keywords: Iterable[str]) -> str | None:
    """Return the first keyword, in list order, whose characters all occur in text."""
    for keyword in keywords:
        if contains_all_characters(text, keyword):
            return keyword
    return None


def keyword_match_chars(window: str, keywords: Iterable[str]) -> int:
    """Count characters of window covered by any of the keywords.

    Keywords are broken into CJK characters and Latin tokens; the union of
    those units is deduplicated so overlapping keywords count once. A CJK
    character adds its occurrence count, a Latin token adds occurrences times
    its length (whole-word matches only). Word boundaries are ASCII, so a
    token written flush against CJK text still matches.
    """
    window_lower = (window or "").lower()
    cjk_units: set[str] = set()
    latin_units: set[str] = set()

    for keyword in keywords:
        keyword_lower = (keyword or "").lower()
        cjk_units.update(CJK_RE.findall(keyword_lower))
        latin_units.update(LATIN_TOKEN_RE.findall(keyword_lower))

    matched = sum(window_lower.count(char) for char in cjk_units)
    for token in latin_units:
        occurrences = len(re.findall(rf"\b{re.escape(token)}\b", window_lower, re.ASCII))
        matched += occurrences * len(token)

    return matched
