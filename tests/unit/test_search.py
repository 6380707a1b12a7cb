"""
Unit tests for client name search.
"""

import pytest

from fitcrm.core.clients.models import ClientRecord
from fitcrm.core.clients.search import filter_clients


def _client(client_id: str, name: str) -> ClientRecord:
    return ClientRecord(
        id=client_id,
        full_name=name,
        email=f"{client_id}@example.com",
        start_date="2024-01-01",
    )


@pytest.fixture
def roster() -> list[ClientRecord]:
    return [
        _client("1", "Jane Doe"),
        _client("2", "John Smith"),
        _client("3", "Janet Doerr"),
        _client("4", "Zoë Ångström"),
    ]


class TestFilterClients:
    """Tests for filter_clients."""

    def test_empty_query_returns_everything_in_order(self, roster):
        assert filter_clients(roster, "") == roster

    def test_matches_substring_ignoring_case(self, roster):
        result = filter_clients(roster, "DOE")

        assert [r.id for r in result] == ["1", "3"]

    def test_every_result_contains_the_query(self, roster):
        query = "jan"
        result = filter_clients(roster, query)

        assert result
        assert all(query in r.full_name.lower() for r in result)
        assert all(r in roster for r in result)

    def test_preserves_original_order(self, roster):
        result = filter_clients(list(reversed(roster)), "j")

        assert [r.id for r in result] == ["3", "2", "1"]

    def test_no_match_returns_empty_list(self, roster):
        assert filter_clients(roster, "xyz") == []

    def test_matches_non_ascii_names(self, roster):
        assert [r.id for r in filter_clients(roster, "ångström")] == ["4"]

    def test_does_not_mutate_input(self, roster):
        original = list(roster)

        filter_clients(roster, "jane")

        assert roster == original

    def test_accepts_any_iterable(self, roster):
        """Snapshots are tuples; generators work too."""
        assert filter_clients(tuple(roster), "smith") == [roster[1]]
        assert filter_clients((r for r in roster), "") == roster
