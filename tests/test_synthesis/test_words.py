"""Tests for the word search."""

from __future__ import annotations

import pytest

from petrisynth.synthesis.properties import PNProperties
from petrisynth.synthesis.words import (
    LevelSummary,
    Operation,
    find_words,
    generate_list,
    is_word_solvable,
    normalize_word,
)


class TestNormalizeWord:
    """Tests for normalize_word."""

    def test_already_normalized(self):
        assert normalize_word("aba", "ab") == ("a", "b", "a")
        assert normalize_word("ba", "ab") == ("b", "a")

    def test_renamed_from_the_end(self):
        assert normalize_word("cac", "abc") == ("a", "b", "a")
        assert normalize_word(["x", "y"], "ab") == ("b", "a")

    def test_empty_word(self):
        assert normalize_word("", "ab") == ()

    def test_too_many_letters(self):
        with pytest.raises(ValueError):
            normalize_word("abc", "ab")


class TestIsWordSolvable:
    """Tests for is_word_solvable."""

    def test_unbounded(self):
        assert is_word_solvable("aa", PNProperties())

    def test_safe(self):
        assert is_word_solvable("ab", PNProperties(k_bounded=1))
        assert not is_word_solvable("aa", PNProperties(k_bounded=1))

    def test_two_bounded(self):
        assert is_word_solvable("aa", PNProperties(k_bounded=2))


class TestGenerateList:
    """Tests for generate_list."""

    def test_minimal_unsolvable_safe_words(self):
        result = generate_list(PNProperties(k_bounded=1), "a", Operation.UNSOLVABLE)
        assert result.unsolvable == ["aa"]
        assert result.solvable == []
        assert result.levels == [LevelSummary(1, 1, 0), LevelSummary(2, 0, 1)]

    def test_solvable_unbounded_words(self):
        result = generate_list(PNProperties(), "a", Operation.SOLVABLE, max_length=3)
        assert result.solvable == ["a", "aa", "aaa"]
        assert len(result.levels) == 3

    def test_quiet_reports_nothing(self):
        result = generate_list(PNProperties(k_bounded=1), "a")
        assert result.solvable == []
        assert result.unsolvable == []
        assert result.levels

    def test_words_up_to_renaming(self):
        seen: list[tuple[str, bool]] = []
        generate_list(
            PNProperties(k_bounded=1),
            "ab",
            max_length=2,
            callback=lambda word, solvable: seen.append((word, solvable)),
        )
        assert seen == [("a", True), ("aa", False), ("ba", True)]

    def test_alphabet_recorded(self):
        result = generate_list(PNProperties(), "ba", max_length=1)
        assert result.alphabet == ("a", "b")


class TestFindWords:
    """Tests for find_words."""

    def test_unsolvable(self):
        result = find_words("safe", "unsolvable", "a", max_length=3)
        assert result.unsolvable == ["aa"]
        assert result.properties == PNProperties(k_bounded=1)

    def test_solvable(self):
        result = find_words("none", "solvable", "a", max_length=2)
        assert result.solvable == ["a", "aa"]

    def test_unknown_operation(self):
        with pytest.raises(ValueError):
            find_words("safe", "everything", "a")

    def test_quiet_rejected(self):
        with pytest.raises(ValueError):
            find_words("safe", "quiet", "a")

    def test_unknown_property(self):
        with pytest.raises(ValueError):
            find_words("shiny", "solvable", "a")
