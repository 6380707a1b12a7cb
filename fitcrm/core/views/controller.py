"""
Client view controller.

Keeps track of which screen is active and builds view models from
repository snapshots. Data only flows one way: the controller asks the
repository to change, the repository publishes a new snapshot, and the
list is rebuilt from that snapshot.

The controller knows nothing about HTML or HTTP; the API layer (or any
other renderer) turns its view models into output.
"""

import dataclasses
import logging
from typing import Callable, Iterable, Optional, Protocol, Union

from fitcrm.core.clients.errors import NotFoundError, ValidationError
from fitcrm.core.clients.models import ClientCandidate, ClientRecord, ClientSnapshot
from fitcrm.core.clients.search import filter_clients
from fitcrm.core.exercises.models import ExerciseSuggestion, FetchError, SuggestionSource

from .models import (
    EMPTY_MESSAGE,
    FETCH_FAILED_MESSAGE,
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

logger = logging.getLogger(__name__)


class ClientStore(Protocol):
    """The repository operations the controller relies on."""

    def load(self) -> ClientSnapshot: ...
    def create(self, candidate: ClientCandidate) -> ClientRecord: ...
    def update(self, client_id: str, candidate: ClientCandidate) -> ClientRecord: ...
    def delete(self, client_id: str) -> bool: ...
    def find_by_id(self, client_id: str) -> Optional[ClientRecord]: ...
    def subscribe(self, listener: Callable[[ClientSnapshot], None]) -> Callable[[], None]: ...


class ClientViewController:
    """
    Presenter for the list, form and detail screens.

    Every navigation bumps a token. Work that finishes after the user has
    moved on (a slow exercise fetch, typically) carries the old token and
    is discarded.
    """

    def __init__(self, repository: ClientStore) -> None:
        self._repository = repository
        self._page = Page.LIST
        self._token = 0
        self._query = ""
        self._list_view = ListView()
        self._unsubscribe = repository.subscribe(self._on_snapshot)

    @property
    def page(self) -> Page:
        return self._page

    @property
    def list_view(self) -> ListView:
        """The most recently rendered list."""
        return self._list_view

    def close(self) -> None:
        """Stop listening to the repository."""
        self._unsubscribe()

    # -----------------------------------------------------------------------
    # List
    # -----------------------------------------------------------------------

    def show_list(self, query: str = "", notice: Optional[str] = None) -> ListView:
        self._navigate(Page.LIST)
        self._query = query
        self._list_view = self._build_list(self._repository.load(), query, notice)
        return self._list_view

    def delete_client(self, client_id: str) -> ListView:
        """Delete a client and return to the list. Unknown ids are ignored."""
        record = self._repository.find_by_id(client_id)
        removed = self._repository.delete(client_id)

        notice = f"{record.full_name} has been deleted." if removed and record else None
        return self.show_list(self._query, notice=notice)

    # -----------------------------------------------------------------------
    # Form
    # -----------------------------------------------------------------------

    def show_form(self, client_id: Optional[str] = None) -> FormView:
        """Open the form empty for a new client, or prefilled for an edit."""
        if client_id is None:
            self._navigate(Page.FORM)
            return FormView(
                mode=FormMode.NEW,
                heading="Add New Client",
                button_label="Add Client",
            )

        record = self._repository.find_by_id(client_id)
        if record is None:
            raise NotFoundError(client_id)

        self._navigate(Page.FORM)
        return FormView(
            mode=FormMode.EDIT,
            heading=f"Edit Client: {record.full_name}",
            button_label="Save Changes",
            values=record.as_candidate(),
            client_id=record.id,
        )

    def submit_form(
        self,
        candidate: ClientCandidate,
        client_id: Optional[str] = None,
    ) -> FormResult:
        """
        Save the form.

        Validation failures keep the form open with an inline message and
        write nothing. NotFoundError propagates for an edit of a client
        that has since been deleted.
        """
        try:
            if client_id is None:
                record = self._repository.create(candidate)
                verb = "added"
            else:
                record = self._repository.update(client_id, candidate)
                verb = "updated"
        except ValidationError as e:
            logger.debug("Form rejected", extra={"reasons": e.reasons})
            form = self.show_form(client_id)
            return FormResult(
                saved=False,
                form=dataclasses.replace(form, values=candidate, message=f"Error: {e.message}"),
                reasons=tuple(e.reasons),
            )

        notice = f"Client {record.full_name} {verb} successfully!"
        return FormResult(
            saved=True,
            record=record,
            list_view=self.show_list(notice=notice),
        )

    # -----------------------------------------------------------------------
    # Detail
    # -----------------------------------------------------------------------

    def open_detail(self, client_id: str) -> DetailView:
        """Show a client with the suggestions panel in its loading state."""
        record = self._repository.find_by_id(client_id)
        if record is None:
            raise NotFoundError(client_id)

        token = self._navigate(Page.VIEW)
        return DetailView.from_record(token, record)

    def resolve_suggestions(
        self,
        view: DetailView,
        outcome: Union[Iterable[ExerciseSuggestion], FetchError],
    ) -> Optional[DetailView]:
        """
        Fill the suggestions panel of view.

        Returns None, dropping the outcome, if the user navigated away
        after view was opened.
        """
        if not self._is_current(view.token):
            logger.debug("Discarding suggestions for inactive view", extra={"token": view.token})
            return None

        if isinstance(outcome, FetchError):
            panel = SuggestionPanel(status=SuggestionStatus.FAILED, message=FETCH_FAILED_MESSAGE)
        else:
            items = tuple(SuggestionItem(s.name, s.description) for s in outcome)
            if items:
                panel = SuggestionPanel(status=SuggestionStatus.LOADED, items=items, message=None)
            else:
                panel = SuggestionPanel(status=SuggestionStatus.EMPTY, message=EMPTY_MESSAGE)

        return dataclasses.replace(view, suggestions=panel)

    async def load_suggestions(
        self,
        view: DetailView,
        source: SuggestionSource,
        limit: int,
    ) -> Optional[DetailView]:
        """Fetch suggestions once and apply them to view."""
        outcome: Union[list[ExerciseSuggestion], FetchError]
        try:
            outcome = list(await source.fetch_suggestions(limit))
        except FetchError as e:
            logger.warning(
                "Error fetching exercises",
                extra={"client_id": view.client_id, "error": str(e)}
            )
            outcome = e
        return self.resolve_suggestions(view, outcome)

    # -----------------------------------------------------------------------
    # Private Methods
    # -----------------------------------------------------------------------

    def _navigate(self, page: Page) -> int:
        self._page = page
        self._token += 1
        return self._token

    def _is_current(self, token: int) -> bool:
        return self._page is Page.VIEW and token == self._token

    def _on_snapshot(self, snapshot: ClientSnapshot) -> None:
        if self._page is Page.LIST:
            self._list_view = self._build_list(snapshot, self._query, self._list_view.notice)

    @staticmethod
    def _build_list(
        snapshot: ClientSnapshot,
        query: str,
        notice: Optional[str] = None,
    ) -> ListView:
        rows = tuple(ClientRow.from_record(r) for r in filter_clients(snapshot, query))
        return ListView(query=query, rows=rows, is_empty=not snapshot, notice=notice)
