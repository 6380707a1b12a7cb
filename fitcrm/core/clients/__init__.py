"""
Client records: models, validation, search and id generation.
"""

from .errors import ClientError, DuplicateClientIdError, NotFoundError, ValidationError
from .ids import TimestampIdGenerator
from .models import ClientCandidate, ClientRecord, ClientSnapshot
from .search import filter_clients
from .validation import ValidationResult, ensure_valid, validate

__all__ = [
    "ClientCandidate",
    "ClientError",
    "ClientRecord",
    "ClientSnapshot",
    "DuplicateClientIdError",
    "NotFoundError",
    "TimestampIdGenerator",
    "ValidationError",
    "ValidationResult",
    "ensure_valid",
    "filter_clients",
    "validate",
]
