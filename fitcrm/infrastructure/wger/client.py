"""
wger exercise catalog client.

A thin wrapper around one read-only endpoint of the public wger API
(https://wger.de). It:
1. Implements the SuggestionSource protocol from core.exercises
2. Turns network and HTTP failures into FetchError
3. Cleans descriptions into short plain-text previews

No retries and no caching: each detail view makes exactly one attempt and
shows a placeholder if it fails.
"""

import asyncio
import logging
from dataclasses import dataclass
from itertools import islice
from typing import Any, Iterable, Iterator, Optional

import requests

from fitcrm.core.exercises.models import ExerciseSuggestion, FetchError
from fitcrm.core.exercises.sanitize import DEFAULT_PREVIEW_LENGTH, to_preview


logger = logging.getLogger(__name__)


DEFAULT_EXERCISE_API_URL = "https://wger.de/api/v2/exercise/"


@dataclass
class WgerConfig:
    """Configuration for the exercise catalog client."""
    api_url: str = DEFAULT_EXERCISE_API_URL
    language: int = 2  # English
    preview_length: int = DEFAULT_PREVIEW_LENGTH
    timeout_seconds: float = 5.0

    def __post_init__(self) -> None:
        if not self.api_url:
            raise ValueError("api_url is required")
        if self.preview_length < 0:
            raise ValueError("preview_length cannot be negative")
        if self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")


class WgerExerciseClient:
    """
    Fetch exercise suggestions from wger.

    The HTTP call is blocking, so it runs in a worker thread; the caller's
    event loop stays free while the request is in flight.
    """

    def __init__(
        self,
        config: WgerConfig,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._config = config
        self._session = session or requests.Session()

    async def fetch_suggestions(self, limit: int) -> Iterator[ExerciseSuggestion]:
        """
        Fetch at most limit exercises.

        The request is made before this returns; the returned iterator
        only does the per-item clean-up, lazily.
        """
        if limit < 1:
            raise ValueError("limit must be positive")

        params = {
            "language": self._config.language,
            "limit": limit,
            "ordering": "id",
        }

        try:
            response = await asyncio.to_thread(
                self._session.get,
                self._config.api_url,
                params=params,
                timeout=self._config.timeout_seconds,
            )
        except requests.RequestException as e:
            logger.warning(
                "Exercise request failed",
                extra={"url": self._config.api_url, "error": str(e)}
            )
            raise FetchError(f"Exercise request failed: {e}")

        if not response.ok:
            logger.warning(
                "Exercise API returned an error",
                extra={"url": self._config.api_url, "status": response.status_code}
            )
            raise FetchError(
                f"HTTP error! status: {response.status_code}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            logger.warning("Exercise API returned invalid JSON", extra={"error": str(e)})
            raise FetchError("Exercise API returned invalid JSON")

        results = data.get("results") if isinstance(data, dict) else None
        if results is None:
            results = []
        if not isinstance(results, list):
            raise FetchError("Exercise API returned an unexpected payload")

        logger.debug("Fetched exercises", extra={"count": len(results)})

        return islice(self._to_suggestions(results), limit)

    def _to_suggestions(self, entries: Iterable[Any]) -> Iterator[ExerciseSuggestion]:
        for entry in entries:
            if not isinstance(entry, dict):
                continue
            yield ExerciseSuggestion(
                name=str(entry.get("name") or "").strip(),
                description=to_preview(
                    str(entry.get("description") or ""),
                    self._config.preview_length,
                ),
            )


# ---------------------------------------------------------------------------
# Mock Client for Local Development
# ---------------------------------------------------------------------------

MOCK_EXERCISES: tuple[ExerciseSuggestion, ...] = (
    ExerciseSuggestion("Barbell Squat", "Stand with the bar on your upper back and squat until thighs are parallel."),
    ExerciseSuggestion("Push-Up", "Keep a straight line from head to heels and lower your chest to the floor."),
    ExerciseSuggestion("Plank", "Hold a straight body position supported on forearms and toes."),
    ExerciseSuggestion("Romanian Deadlift", "Hinge at the hips with a slight knee bend, keeping the bar close."),
    ExerciseSuggestion("Walking Lunge", "Step forward into a lunge, then bring the back foot through to the next step."),
)


class MockExerciseClient:
    """
    Offline stand-in for the wger client.

    Serves canned suggestions, or raises FetchError when constructed with
    fail=True so the placeholder path can be exercised without a network.
    """

    def __init__(
        self,
        exercises: Iterable[ExerciseSuggestion] = MOCK_EXERCISES,
        fail: bool = False,
    ) -> None:
        self._exercises = tuple(exercises)
        self._fail = fail
        self.calls = 0

    async def fetch_suggestions(self, limit: int) -> Iterator[ExerciseSuggestion]:
        if limit < 1:
            raise ValueError("limit must be positive")
        self.calls += 1
        if self._fail:
            raise FetchError("Mock exercise client configured to fail")
        return iter(self._exercises[:limit])


# ---------------------------------------------------------------------------
# Factory Function
# ---------------------------------------------------------------------------

def create_exercise_client(
    config: Optional[WgerConfig] = None,
    mock_mode: bool = False,
):
    """
    Create the suggestion source based on configuration.

    Returns the mock client in mock mode, otherwise a wger client built
    from config (defaults if omitted).
    """
    if mock_mode:
        return MockExerciseClient()

    return WgerExerciseClient(config or WgerConfig())
