"""
Validation rules for client candidates.

Each rule is a pure function returning a reason string or None, so the
rules can be exercised one at a time. validate() runs them in order and
collects every reason; callers that only want one message use the first.
"""

import re
from dataclasses import dataclass, field
from typing import Callable, Optional, Union

from .errors import ValidationError
from .models import ClientCandidate, ClientRecord


EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

Validatable = Union[ClientCandidate, ClientRecord]


def check_full_name(candidate: Validatable) -> Optional[str]:
    if not (candidate.full_name or "").strip():
        return "Full name is required."
    return None


def check_email(candidate: Validatable) -> Optional[str]:
    email = candidate.email or ""
    if not email:
        return "Email is required."
    if not EMAIL_PATTERN.match(email):
        return "Invalid email format."
    return None


def check_start_date(candidate: Validatable) -> Optional[str]:
    if not candidate.start_date:
        return "Start date is required."
    return None


# Order matters: the first reason is the one shown to the user.
RULES: tuple[Callable[[Validatable], Optional[str]], ...] = (
    check_full_name,
    check_email,
    check_start_date,
)


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating a candidate."""
    reasons: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.reasons

    @property
    def message(self) -> Optional[str]:
        """First failing rule, or None when valid."""
        return self.reasons[0] if self.reasons else None


def validate(candidate: Validatable) -> ValidationResult:
    """Run every rule against the candidate."""
    reasons = [reason for reason in (rule(candidate) for rule in RULES) if reason]
    return ValidationResult(reasons=reasons)


def ensure_valid(candidate: Validatable) -> None:
    """Raise ValidationError if the candidate fails any rule."""
    result = validate(candidate)
    if not result.ok:
        raise ValidationError(result.reasons)
