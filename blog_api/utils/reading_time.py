"""Reading time estimation for blog bodies."""

from math import ceil

from blog_api.configs.settings import WORDS_PER_MINUTE


def count_words(text: str) -> int:
    """
    Count whitespace-separated words in text.

    Args:
        text: Blog body

    Returns:
        int: Number of non-empty words
    """
    return len(text.split())


def calculate_reading_time(text: str) -> int:
    """
    Calculate reading time in minutes based on word count.

    Assumes an average reading speed of 200 words per minute and
    rounds up, so any partial minute counts as a full one.

    Args:
        text: Blog body

    Returns:
        int: Reading time in minutes (minimum 1)
    """
    return max(1, ceil(count_words(text) / WORDS_PER_MINUTE))
