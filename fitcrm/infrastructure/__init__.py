"""
Infrastructure layer - external service integrations.

Each subdirectory wraps an external dependency:
- storage: Local persistence (JSON files or in-memory) and the client repository
- wger: Exercise catalog HTTP API

These wrappers translate between external formats and our domain models.
"""
