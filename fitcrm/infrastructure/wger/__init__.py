"""
wger exercise API client.

Implements the SuggestionSource protocol from core.exercises.
"""

from .client import MockExerciseClient, WgerConfig, WgerExerciseClient, create_exercise_client

__all__ = ["MockExerciseClient", "WgerConfig", "WgerExerciseClient", "create_exercise_client"]
