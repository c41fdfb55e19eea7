"""Unit tests for language-aware text metrics."""
from __future__ import annotations

import pytest

from pagelens.text.metrics import (
    analyze_text,
    char_equivalent,
    chinese_ratio,
    contains_all_characters,
    count_sentences,
    count_syllables,
    count_words,
    detect_language,
    find_matching_related_keyword,
    keyword_match_chars,
    round_half_up,
    split_paragraphs,
    split_sentences,
    text_pixel_width,
)


class TestLanguageDetection:
    """Tests for CJK ratio and language classification."""

    def test_empty_text_has_zero_ratio(self):
        """Empty text should have a CJK ratio of zero."""
        assert chinese_ratio("") == 0.0
        assert chinese_ratio("   ") == 0.0

    def test_english_text(self):
        """Latin-only text is English."""
        assert detect_language("Hello brave new world") == "english"

    def test_chinese_text(self):
        """CJK-only text is Chinese."""
        assert detect_language("咖啡豆的品質") == "chinese"

    def test_mixed_text(self):
        """A moderate share of CJK characters is mixed."""
        text = "咖啡 coffee beans good"
        assert 0.1 <= chinese_ratio(text) <= 0.7
        assert detect_language(text) == "mixed"


class TestWordCount:
    """Tests for the single word-count rule."""

    def test_empty_text(self):
        """Empty or whitespace-only text has zero words."""
        assert count_words("") == 0
        assert count_words("  \n ") == 0

    def test_english_whitespace_tokens(self):
        """English text counts whitespace-delimited tokens."""
        assert count_words("Hello brave new world") == 4
        assert count_words("coffee, tea & milk") == 4

    def test_chinese_counts_each_ideograph(self):
        """Each CJK character counts as one word."""
        assert count_words("咖啡豆") == 3

    def test_chinese_dominant_with_english_tokens(self):
        """Chinese-dominant text counts ideographs plus English tokens."""
        cjk = "咖啡豆的品質決定了每一杯咖啡的風"
        text = f"{cjk[:8]} AI {cjk[8:]} SEO"
        assert chinese_ratio(text) > 0.7
        assert count_words(text) == len(cjk) + 2

    def test_mixed_text_ignores_punctuation_and_digits(self):
        """Mixed text counts ideographs and alphabetic tokens only."""
        assert count_words("咖啡 coffee beans 2024!") == 4


class TestSentencesAndParagraphs:
    """Tests for sentence and paragraph splitting."""

    def test_split_on_western_and_cjk_terminators(self):
        """Both Western and CJK terminators end a sentence."""
        assert split_sentences("Hi. How are you? 很好。真的！") == ["Hi", "How are you", "很好", "真的"]

    def test_text_without_terminator_is_one_sentence(self):
        """Text without terminators is a single sentence."""
        assert count_sentences("no punctuation here") == 1

    def test_empty_text_has_no_sentences(self):
        """Empty text has no sentences."""
        assert split_sentences("") == []

    def test_split_paragraphs_on_blank_lines(self):
        """Blank lines, including whitespace-only lines, separate paragraphs."""
        assert split_paragraphs("first\n\nsecond\n  \nthird") == ["first", "second", "third"]

    def test_single_newline_does_not_split(self):
        """A single newline stays within the paragraph."""
        assert len(split_paragraphs("line one\nline two")) == 1


class TestAnalyzeText:
    """Tests for aggregate text statistics."""

    def test_statistics(self):
        """Statistics cover characters, paragraphs and sentences."""
        stats = analyze_text("One two. Three four.\n\nFive six.")
        assert stats.paragraph_count == 2
        assert stats.sentence_count == 3
        assert stats.char_count == len("One two. Three four.\n\nFive six.")

    def test_reading_time_rounds_up(self):
        """Reading time is the word count over 200 words per minute, rounded up."""
        stats = analyze_text(" ".join(["word"] * 450))
        assert stats.reading_time_minutes == 3

    def test_empty_text(self):
        """Empty text yields zeroed statistics."""
        stats = analyze_text("")
        assert stats.char_count == 0
        assert stats.reading_time_minutes == 0


class TestSyllables:
    """Tests for the English syllable estimate."""

    @pytest.mark.parametrize(
        "word,expected",
        [
            ("the", 1),
            ("cake", 1),
            ("happy", 2),
            ("readability", 5),
        ],
    )
    def test_syllable_estimates(self, word, expected):
        """Common words should get sensible syllable counts."""
        assert count_syllables(word) == expected

    def test_at_least_one_syllable(self):
        """Every word has at least one syllable."""
        assert count_syllables("rhythm") >= 1


class TestPixelWidth:
    """Tests for rendered width estimation."""

    def test_character_class_widths(self):
        """Each character class has its own width."""
        assert text_pixel_width("咖啡") == 28
        assert text_pixel_width("2024") == 32
        assert text_pixel_width("a b") == 15

    def test_punctuation_has_no_width(self):
        """Punctuation and symbols contribute nothing."""
        assert text_pixel_width("!!!") == 0
        assert text_pixel_width("Coffee!") == text_pixel_width("Coffee")

    def test_example_title(self):
        """An English title's width is the sum of its letters and spaces."""
        assert text_pixel_width("Best Coffee Beans") == 85

    def test_empty_text(self):
        """Empty text has zero width."""
        assert text_pixel_width("") == 0

    @pytest.mark.parametrize("suffix", ["a", "Z", "7", " ", "咖", "!"])
    def test_width_never_decreases_when_appending(self, suffix):
        """Appending a character never reduces the width."""
        for text in ("", "Coffee", "咖啡 guide", "2024 年"):
            assert text_pixel_width(text + suffix) >= text_pixel_width(text)

    def test_char_equivalent(self):
        """Char equivalent divides by the CJK width, rounding halves up."""
        assert char_equivalent(28) == 2
        assert char_equivalent(7) == 1
        assert char_equivalent(85) == 6


class TestCharacterContainment:
    """Tests for character-level keyword matching."""

    def test_non_contiguous_characters_match(self):
        """Characters need not be adjacent or ordered."""
        assert contains_all_characters("hello world", "low") is True

    def test_missing_character_fails(self):
        """A single missing character fails the match."""
        assert contains_all_characters("hello", "xyz") is False

    def test_case_insensitive(self):
        """Matching ignores case."""
        assert contains_all_characters("Hello", "HEL") is True

    def test_empty_needle_matches(self):
        """An empty keyword trivially matches."""
        assert contains_all_characters("anything", "") is True

    def test_cjk_characters(self):
        """CJK keywords match by individual characters."""
        assert contains_all_characters("咖啡豆挑選指南", "豆咖") is True
        assert contains_all_characters("咖啡豆挑選指南", "茶") is False

    def test_first_matching_related_keyword_in_list_order(self):
        """The first keyword in list order that matches is returned."""
        found = find_matching_related_keyword("arabica roasting guide", ["xyz", "roasting", "arabica"])
        assert found == "roasting"

    def test_no_matching_related_keyword(self):
        """None is returned when no keyword matches."""
        assert find_matching_related_keyword("tea", ["coffee", "arabica"]) is None


class TestKeywordMatchChars:
    """Tests for keyword character coverage used by density."""

    def test_latin_tokens_count_occurrences_times_length(self):
        """Each whole-word occurrence adds the token length."""
        assert keyword_match_chars("coffee beans and coffee", ["coffee beans"]) == 17

    def test_overlapping_keywords_count_once(self):
        """Shared tokens across keywords are not double counted."""
        assert keyword_match_chars("coffee beans and coffee", ["coffee", "coffee beans"]) == 17

    def test_whole_words_only(self):
        """Latin tokens only match whole words."""
        assert keyword_match_chars("coffeehouse coffee", ["coffee"]) == 6

    def test_latin_token_flush_against_cjk(self):
        """A Latin token written directly next to CJK characters still matches."""
        assert keyword_match_chars("我學python程式，python很好用", ["python"]) == 12
        assert keyword_match_chars("用python3寫", ["python"]) == 0

    def test_cjk_characters_count_occurrences(self):
        """CJK keyword characters add one per occurrence."""
        assert keyword_match_chars("咖啡豆很香，咖啡", ["咖啡豆", "咖啡"]) == 5

    def test_case_insensitive(self):
        """Matching ignores case."""
        assert keyword_match_chars("Coffee COFFEE", ["coffee"]) == 12

    def test_no_keywords(self):
        """No keywords match nothing."""
        assert keyword_match_chars("coffee", []) == 0


class TestRoundHalfUp:
    """Tests for half-up rounding."""

    @pytest.mark.parametrize(
        "value,expected",
        [(0.5, 1), (1.4, 1), (2.5, 3), (50.5, 51), (99.49, 99)],
    )
    def test_rounding(self, value, expected):
        """Halves round up rather than to even."""
        assert round_half_up(value) == expected
