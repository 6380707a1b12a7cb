"""
Name search over a snapshot of client records.

There is no index to maintain: the client list is small enough that
filtering the snapshot on every keystroke is instant.
"""

from typing import Iterable

from .models import ClientRecord


def filter_clients(records: Iterable[ClientRecord], query: str = "") -> list[ClientRecord]:
    """
    Return the records whose full name contains query, ignoring case.

    Order is preserved and the input is never modified. An empty query
    matches everything.
    """
    if not query:
        return list(records)

    needle = query.casefold()
    return [record for record in records if needle in record.full_name.casefold()]
