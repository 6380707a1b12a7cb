"""
FitCRM - client management for fitness professionals.

This package contains the complete application:
- core: Framework-agnostic client records, validation, search and views
- infrastructure: Local storage and the wger exercise API client
- api: FastAPI routes and dependencies
- config: Application configuration
"""

__version__ = "0.1.0"
