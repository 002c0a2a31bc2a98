"""Utility helper functions."""

from blog_api.utils.helpers import get_summary, host, today_str
from blog_api.utils.reading_time import calculate_reading_time, count_words

__all__ = [
    "calculate_reading_time",
    "count_words",
    "get_summary",
    "host",
    "today_str",
]
