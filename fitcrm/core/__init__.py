"""
Core business logic for client management.

This package is framework-agnostic: it doesn't import FastAPI, requests,
or any storage backend. Repositories and API clients live in
infrastructure and depend on these models, never the other way round.
"""
