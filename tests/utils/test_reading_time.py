"""Tests for reading time estimation."""

import pytest

from blog_api.utils.reading_time import calculate_reading_time, count_words


class TestCountWords:
    """Test cases for count_words."""

    def test_counts_whitespace_separated_words(self) -> None:
        """Any run of whitespace separates words."""
        assert count_words("one  two\tthree\nfour") == 4

    def test_empty_text(self) -> None:
        """Empty and blank text have no words."""
        assert count_words("") == 0
        assert count_words("   ") == 0


class TestCalculateReadingTime:
    """Test cases for calculate_reading_time."""

    @pytest.mark.parametrize(
        ("words", "minutes"),
        [(0, 1), (1, 1), (200, 1), (201, 2), (400, 2), (401, 3)],
    )
    def test_rounds_up_at_200_words_per_minute(self, words: int, minutes: int) -> None:
        """Reading time is ceil(words / 200) with a floor of one minute."""
        assert calculate_reading_time(" ".join(["word"] * words)) == minutes
