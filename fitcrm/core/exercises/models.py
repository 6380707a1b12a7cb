"""
Exercise suggestion types and the protocol suggestion sources implement.
"""

from dataclasses import dataclass
from typing import Iterator, Optional, Protocol


class FetchError(Exception):
    """
    Raised when suggestions cannot be retrieved.

    Never fatal: the detail view shows a placeholder instead.
    """

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.status_code = status_code
        super().__init__(message)


@dataclass(frozen=True)
class ExerciseSuggestion:
    """An exercise shown on a client's detail view."""
    name: str
    description: str


class SuggestionSource(Protocol):
    """
    Anything that can produce exercise suggestions.

    The wger client and the offline mock both satisfy this, so views do
    not depend on HTTP.
    """

    async def fetch_suggestions(self, limit: int) -> Iterator[ExerciseSuggestion]:
        """Fetch at most limit suggestions. Raises FetchError on failure."""
        ...
