"""
Tests for n-gram extraction and script counting.
"""

import pytest

from langscope.processing.ngram import (
    NGramBuffer,
    count_scripts,
    extract_from_chunks,
    extract_ngrams,
    latin_is_minority,
    strip_latin,
)
from langscope.processing.preprocessing.cleaners import TextNormalizer


class TestExtractNGrams:
    """Test cases for the rolling-window extractor."""

    def test_single_word(self):
        assert list(extract_ngrams(" ab ")) == [
            "a",
            " a",
            "b",
            "ab",
            " ab",
            "b ",
            "ab ",
        ]

    def test_single_character(self):
        assert list(extract_ngrams(" a ")) == ["a", " a", "a ", " a "]

    def test_no_ngram_spans_words(self):
        text = TextNormalizer().process("the quick brown fox jumps over the lazy dog")
        for gram in extract_ngrams(text):
            assert " " not in gram[1:-1]
            assert gram != " "
            assert 1 <= len(gram) <= 3

    def test_duplicates_are_kept(self):
        grams = list(extract_ngrams(" aa aa "))
        assert grams.count("a") == 4
        assert grams.count("aa") == 2

    def test_double_space_emits_nothing_extra(self):
        assert list(extract_ngrams(" a  b ")) == list(extract_ngrams(" a b "))

    def test_all_capitals_run_suppressed(self):
        assert list(extract_ngrams(" ABC ")) == ["A", " A", "C ", "BC "]

    def test_capitalized_word_is_kept(self):
        grams = list(extract_ngrams(" Abc "))
        assert "A" in grams
        assert " Ab" in grams
        assert "bc " in grams

    def test_empty_text(self):
        assert list(extract_ngrams("")) == []

    def test_extract_from_chunks_concatenates(self):
        chunks = [" a ", " b "]
        expected = list(extract_ngrams(" a ")) + list(extract_ngrams(" b "))
        assert list(extract_from_chunks(chunks)) == expected


class TestNGramBuffer:
    """Test cases for the buffer accessors."""

    @pytest.mark.parametrize("n", [0, 4])
    def test_out_of_range_lengths(self, n):
        buffer = NGramBuffer()
        for ch in " abc":
            buffer.add_char(ch)
        assert buffer.get(n) is None

    def test_window_keeps_last_three(self):
        buffer = NGramBuffer()
        for ch in " abcd":
            buffer.add_char(ch)
        assert buffer.get(3) == "bcd"
        assert buffer.get(2) == "cd"
        assert buffer.get(1) == "d"


class TestScripts:
    """Test cases for the Latin-minority filter helpers."""

    def test_count_scripts(self):
        assert count_scripts(" ああああa ") == (1, 4)
        assert count_scripts(" hello ") == (5, 0)

    def test_latin_extended_additional_is_not_counted(self):
        assert count_scripts("\u1ec7") == (0, 0)

    def test_latin_is_minority(self):
        assert latin_is_minority(1, 4)
        assert not latin_is_minority(2, 4)
        assert not latin_is_minority(0, 0)

    def test_strip_latin(self):
        assert strip_latin(" ああaあ b ") == " あああ  "
