"""
View models for the three client screens.

These are what a renderer draws: plain, immutable values with every
placeholder already filled in, so templates and JSON responses never
need to reach back into the repository.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from fitcrm.core.clients.models import ClientCandidate, ClientRecord


NOT_AVAILABLE = "N/A"
NO_PHONE = "-"

LOADING_MESSAGE = "Loading exercises..."
EMPTY_MESSAGE = "No exercises found."
FETCH_FAILED_MESSAGE = "Error fetching exercises. Please try again later."


class Page(Enum):
    """Which screen is showing."""
    LIST = "list"
    FORM = "form"
    VIEW = "view"


class FormMode(Enum):
    NEW = "new"
    EDIT = "edit"


class SuggestionStatus(Enum):
    LOADING = "loading"
    LOADED = "loaded"
    EMPTY = "empty"
    FAILED = "failed"


@dataclass(frozen=True)
class ClientRow:
    """One row of the client table."""
    id: str
    full_name: str
    email: str
    phone: str
    fitness_goal: str
    start_date: str

    @classmethod
    def from_record(cls, record: ClientRecord) -> "ClientRow":
        return cls(
            id=record.id,
            full_name=record.full_name,
            email=record.email,
            phone=record.phone or NO_PHONE,
            fitness_goal=record.fitness_goal,
            start_date=record.start_date,
        )


@dataclass(frozen=True)
class ListView:
    """
    The searchable client table.

    is_empty means the repository has no clients at all, which is shown
    as a message instead of a table. A search with no hits is not empty,
    it just has no rows.
    """
    query: str = ""
    rows: tuple[ClientRow, ...] = ()
    is_empty: bool = True
    notice: Optional[str] = None


@dataclass(frozen=True)
class FormView:
    """The add/edit client form."""
    mode: FormMode
    heading: str
    button_label: str
    values: ClientCandidate = field(default_factory=ClientCandidate)
    client_id: Optional[str] = None
    message: str = ""


@dataclass(frozen=True)
class FormResult:
    """
    Outcome of submitting the form.

    On success the controller has moved to the list page and list_view
    is set; on a validation failure form carries the inline message.
    """
    saved: bool
    record: Optional[ClientRecord] = None
    form: Optional[FormView] = None
    list_view: Optional[ListView] = None
    reasons: tuple[str, ...] = ()


@dataclass(frozen=True)
class SuggestionItem:
    name: str
    description: str

    @property
    def text(self) -> str:
        """Display line: the name followed by the truncated description."""
        return f"{self.name}: {self.description}..."


@dataclass(frozen=True)
class SuggestionPanel:
    """The exercise list on the detail view, or its placeholder."""
    status: SuggestionStatus = SuggestionStatus.LOADING
    items: tuple[SuggestionItem, ...] = ()
    message: Optional[str] = LOADING_MESSAGE


@dataclass(frozen=True)
class DetailView:
    """
    A single client's details plus suggested exercises.

    token identifies the navigation that opened this view; suggestions
    that arrive for a stale token are dropped.
    """
    token: int
    client_id: str
    full_name: str
    email: str
    phone: str
    fitness_goal: str
    start_date: str
    age: str
    gender: str
    suggestions: SuggestionPanel = field(default_factory=SuggestionPanel)

    @classmethod
    def from_record(cls, token: int, record: ClientRecord) -> "DetailView":
        return cls(
            token=token,
            client_id=record.id,
            full_name=record.full_name,
            email=record.email,
            phone=record.phone or NOT_AVAILABLE,
            fitness_goal=record.fitness_goal,
            start_date=record.start_date,
            age=str(record.age) if record.age is not None else NOT_AVAILABLE,
            gender=record.gender or NOT_AVAILABLE,
        )
