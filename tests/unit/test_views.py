"""
Unit tests for the client view controller.
"""

import asyncio
import dataclasses

import pytest

from fitcrm.core.clients.errors import NotFoundError
from fitcrm.core.clients.models import ClientCandidate
from fitcrm.core.exercises.models import ExerciseSuggestion, FetchError
from fitcrm.core.views.controller import ClientViewController
from fitcrm.core.views.models import (
    EMPTY_MESSAGE,
    FETCH_FAILED_MESSAGE,
    LOADING_MESSAGE,
    FormMode,
    Page,
    SuggestionStatus,
)
from fitcrm.infrastructure.wger.client import MockExerciseClient


@pytest.fixture
def controller(repository) -> ClientViewController:
    controller = ClientViewController(repository)
    yield controller
    controller.close()


# ---------------------------------------------------------------------------
# List
# ---------------------------------------------------------------------------

class TestListView:
    """Tests for the client table."""

    def test_empty_repository_shows_empty_state(self, controller):
        view = controller.show_list()

        assert view.is_empty
        assert view.rows == ()
        assert controller.page is Page.LIST

    def test_rows_fill_placeholders(self, controller, repository, jane):
        repository.create(jane)

        (row,) = controller.show_list().rows

        assert row.full_name == "Jane Doe"
        assert row.phone == "-"

    def test_search_with_no_hits_is_not_empty_state(self, controller, repository, jane):
        repository.create(jane)

        view = controller.show_list("nobody")

        assert not view.is_empty
        assert view.rows == ()
        assert view.query == "nobody"

    def test_list_follows_repository_changes(self, controller, repository, jane, marcus):
        """While the list is showing, new snapshots re-render it."""
        controller.show_list("marc")

        repository.create(jane)
        repository.create(marcus)

        assert [row.full_name for row in controller.list_view.rows] == ["Marcus Webb"]

    def test_list_is_not_rebuilt_on_other_pages(self, controller, repository, jane):
        before = controller.show_list()
        controller.show_form()

        repository.create(jane)

        assert controller.list_view is before

    def test_closed_controller_stops_following(self, repository, jane):
        controller = ClientViewController(repository)
        before = controller.show_list()
        controller.close()

        repository.create(jane)

        assert controller.list_view is before


class TestDelete:
    """Tests for deleting from the list."""

    def test_delete_shows_notice(self, controller, repository, jane):
        record = repository.create(jane)

        view = controller.delete_client(record.id)

        assert view.notice == "Jane Doe has been deleted."
        assert view.is_empty

    def test_delete_unknown_client_is_quiet(self, controller):
        view = controller.delete_client("missing")

        assert view.notice is None

    def test_delete_keeps_current_search(self, controller, repository, jane, marcus):
        a = repository.create(jane)
        repository.create(marcus)
        controller.show_list("e")

        view = controller.delete_client(a.id)

        assert view.query == "e"
        assert [row.full_name for row in view.rows] == ["Marcus Webb"]


# ---------------------------------------------------------------------------
# Form
# ---------------------------------------------------------------------------

class TestForm:
    """Tests for the add/edit form."""

    def test_new_form_labels(self, controller):
        form = controller.show_form()

        assert form.mode is FormMode.NEW
        assert form.heading == "Add New Client"
        assert form.button_label == "Add Client"
        assert form.values == ClientCandidate()
        assert controller.page is Page.FORM

    def test_edit_form_is_prefilled(self, controller, repository, marcus):
        record = repository.create(marcus)

        form = controller.show_form(record.id)

        assert form.mode is FormMode.EDIT
        assert form.heading == "Edit Client: Marcus Webb"
        assert form.button_label == "Save Changes"
        assert form.values == marcus
        assert form.client_id == record.id

    def test_edit_form_for_unknown_client(self, controller):
        with pytest.raises(NotFoundError):
            controller.show_form("missing")

    def test_submit_new_client(self, controller, repository, jane):
        result = controller.submit_form(jane)

        assert result.saved
        assert result.list_view.notice == "Client Jane Doe added successfully!"
        assert controller.page is Page.LIST
        assert repository.find_by_id(result.record.id) is not None

    def test_submit_edit(self, controller, repository, jane):
        record = repository.create(jane)

        result = controller.submit_form(dataclasses.replace(jane, phone="555-0100"), client_id=record.id)

        assert result.saved
        assert result.list_view.notice == "Client Jane Doe updated successfully!"
        assert result.list_view.rows[0].phone == "555-0100"

    def test_invalid_submission_keeps_form_open(self, controller, repository, jane):
        bad = dataclasses.replace(jane, email="not-an-email")

        result = controller.submit_form(bad)

        assert not result.saved
        assert result.form.message == "Error: Invalid email format."
        assert result.form.values == bad
        assert result.reasons == ("Invalid email format.",)
        assert controller.page is Page.FORM
        assert repository.load() == ()

    def test_invalid_edit_keeps_edit_labels(self, controller, repository, jane):
        record = repository.create(jane)

        result = controller.submit_form(ClientCandidate(), client_id=record.id)

        assert result.form.mode is FormMode.EDIT
        assert result.form.message == "Error: Full name is required."
        assert repository.find_by_id(record.id) == record

    def test_edit_of_deleted_client_raises(self, controller, jane):
        with pytest.raises(NotFoundError):
            controller.submit_form(jane, client_id="gone")


# ---------------------------------------------------------------------------
# Detail
# ---------------------------------------------------------------------------

class TestDetailView:
    """Tests for the detail screen and its suggestions."""

    def test_detail_fills_placeholders(self, controller, repository, jane):
        record = repository.create(jane)

        view = controller.open_detail(record.id)

        assert view.full_name == "Jane Doe"
        assert view.phone == "N/A"
        assert view.age == "N/A"
        assert view.gender == "N/A"
        assert view.suggestions.status is SuggestionStatus.LOADING
        assert view.suggestions.message == LOADING_MESSAGE

    def test_detail_shows_optional_fields(self, controller, repository, marcus):
        view = controller.open_detail(repository.create(marcus).id)

        assert view.age == "42"
        assert view.phone == "555-0142"

    def test_unknown_client(self, controller):
        with pytest.raises(NotFoundError):
            controller.open_detail("missing")

    def test_resolve_with_suggestions(self, controller, repository, jane):
        view = controller.open_detail(repository.create(jane).id)

        resolved = controller.resolve_suggestions(view, [ExerciseSuggestion("Plank", "Hold it")])

        assert resolved.suggestions.status is SuggestionStatus.LOADED
        assert resolved.suggestions.items[0].text == "Plank: Hold it..."
        assert resolved.suggestions.message is None

    def test_resolve_with_no_suggestions(self, controller, repository, jane):
        view = controller.open_detail(repository.create(jane).id)

        resolved = controller.resolve_suggestions(view, [])

        assert resolved.suggestions.status is SuggestionStatus.EMPTY
        assert resolved.suggestions.message == EMPTY_MESSAGE

    def test_fetch_error_becomes_placeholder(self, controller, repository, jane):
        view = controller.open_detail(repository.create(jane).id)

        resolved = controller.resolve_suggestions(view, FetchError("down", status_code=500))

        assert resolved.suggestions.status is SuggestionStatus.FAILED
        assert resolved.suggestions.message == FETCH_FAILED_MESSAGE
        assert resolved.full_name == "Jane Doe"

    def test_result_after_navigating_away_is_discarded(self, controller, repository, jane):
        view = controller.open_detail(repository.create(jane).id)

        controller.show_list()

        assert controller.resolve_suggestions(view, [ExerciseSuggestion("Plank", "")]) is None

    def test_result_for_an_older_detail_view_is_discarded(self, controller, repository, jane, marcus):
        first = controller.open_detail(repository.create(jane).id)
        second = controller.open_detail(repository.create(marcus).id)

        assert controller.resolve_suggestions(first, []) is None
        assert controller.resolve_suggestions(second, []) is not None

    def test_load_suggestions_fetches_once(self, controller, repository, jane):
        source = MockExerciseClient()
        view = controller.open_detail(repository.create(jane).id)

        resolved = asyncio.run(controller.load_suggestions(view, source, limit=5))

        assert source.calls == 1
        assert len(resolved.suggestions.items) == 5

    def test_load_suggestions_survives_failure(self, controller, repository, jane):
        view = controller.open_detail(repository.create(jane).id)

        resolved = asyncio.run(controller.load_suggestions(view, MockExerciseClient(fail=True), limit=5))

        assert resolved.suggestions.message == FETCH_FAILED_MESSAGE
