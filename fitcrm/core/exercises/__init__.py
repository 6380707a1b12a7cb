"""
Exercise suggestions shown alongside a client.
"""

from .models import ExerciseSuggestion, FetchError, SuggestionSource
from .sanitize import strip_markup, to_preview, truncate_preview

__all__ = [
    "ExerciseSuggestion",
    "FetchError",
    "SuggestionSource",
    "strip_markup",
    "to_preview",
    "truncate_preview",
]
