"""Tests for tokenisation and edit distance helpers."""

from __future__ import annotations

import pytest

from stream_metrics.utils.text import edit_distance, tokenize


class TestTokenize:
    """Validate whitespace tokenisation."""

    def test_splits_on_any_whitespace(self) -> None:
        """Runs of spaces, tabs and newlines separate tokens."""
        assert tokenize("  the quick\tbrown\n fox ") == ["the", "quick", "brown", "fox"]

    def test_empty_text_has_no_tokens(self) -> None:
        """Blank input yields an empty list."""
        assert tokenize("   ") == []


class TestEditDistance:
    """Validate Levenshtein distances."""

    @pytest.mark.parametrize(
        ("first", "second", "expected"),
        [
            ("", "", 0),
            ("", "abc", 3),
            ("abc", "", 3),
            ("kitten", "sitting", 3),
            ("flaw", "lawn", 2),
            ("same", "same", 0),
            ("naïve", "naive", 1),
        ],
    )
    def test_known_distances(self, first: str, second: str, expected: int) -> None:
        """Classic examples produce their textbook distances."""
        assert edit_distance(first, second) == expected

    def test_distance_is_symmetric(self) -> None:
        """Swapping the arguments does not change the distance."""
        assert edit_distance("intention", "execution") == edit_distance(
            "execution", "intention",
        )
