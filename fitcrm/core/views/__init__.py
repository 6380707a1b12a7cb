"""
Screen state and view models for the client list, form and detail view.
"""

from .controller import ClientStore, ClientViewController
from .models import (
    ClientRow,
    DetailView,
    FormMode,
    FormResult,
    FormView,
    ListView,
    Page,
    SuggestionItem,
    SuggestionPanel,
    SuggestionStatus,
)

__all__ = [
    "ClientRow",
    "ClientStore",
    "ClientViewController",
    "DetailView",
    "FormMode",
    "FormResult",
    "FormView",
    "ListView",
    "Page",
    "SuggestionItem",
    "SuggestionPanel",
    "SuggestionStatus",
]
