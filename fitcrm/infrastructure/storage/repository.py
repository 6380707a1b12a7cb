"""
Repository for client records.

The repository owns the persisted list of clients. It:
1. Translates between ClientRecord objects and the stored JSON document
2. Gates every write through the validator
3. Publishes a fresh immutable snapshot to subscribers after each save

Every write is a read-modify-write of the whole collection followed by a
single replacement of the stored document, so a failed operation leaves
the last saved state untouched.
"""

import json
import logging
from typing import Callable, Iterable, Optional

from fitcrm.core.clients.errors import DuplicateClientIdError, NotFoundError, ValidationError
from fitcrm.core.clients.ids import TimestampIdGenerator
from fitcrm.core.clients.models import ClientCandidate, ClientRecord, ClientSnapshot
from fitcrm.core.clients.validation import ensure_valid

from .client import KeyValueStore, StorageError

logger = logging.getLogger(__name__)


CLIENTS_STORAGE_KEY = "fitcrm_clients"

SnapshotListener = Callable[[ClientSnapshot], None]


class CorruptStoreError(StorageError):
    """Raised when the stored document is not a list of valid client records."""
    pass


class ClientRepository:
    """
    Repository for client persistence.

    Constructed once per process with an explicit store; nothing about
    where data lives is global.
    """

    def __init__(
        self,
        store: KeyValueStore,
        id_generator: Optional[TimestampIdGenerator] = None,
        storage_key: str = CLIENTS_STORAGE_KEY,
    ) -> None:
        self._store = store
        self._ids = id_generator or TimestampIdGenerator()
        self._key = storage_key
        self._listeners: list[SnapshotListener] = []

    @property
    def storage_key(self) -> str:
        return self._key

    def load(self) -> ClientSnapshot:
        """
        Load every stored client in insertion order.

        Nothing stored yet is a valid empty state. A document that would
        not pass save() (repeated ids, records the validator rejects)
        raises CorruptStoreError, so no later write can trip over it.
        """
        payload = self._store.get_item(self._key)
        if payload is None or not payload.strip():
            return ()

        try:
            documents = json.loads(payload)
            if not isinstance(documents, list):
                raise TypeError("stored clients are not a JSON array")
            records = tuple(ClientRecord.from_dict(doc) for doc in documents)
            self._check_records(records)
        except (ValueError, KeyError, TypeError, DuplicateClientIdError, ValidationError) as e:
            logger.error(
                "Stored client data is unreadable",
                extra={"storage_key": self._key, "error": str(e)}
            )
            raise CorruptStoreError(f"Stored clients are unreadable: {e}")

        logger.debug(
            "Loaded clients",
            extra={"storage_key": self._key, "count": len(records)}
        )
        return records

    def save(self, records: Iterable[ClientRecord]) -> ClientSnapshot:
        """
        Replace the stored collection with records.

        Validates every record and rejects repeated ids before anything is
        written. Returns the snapshot that was saved.
        """
        snapshot = tuple(records)
        self._check_records(snapshot)

        payload = json.dumps([record.to_dict() for record in snapshot])
        self._store.set_item(self._key, payload)

        logger.debug(
            "Saved clients",
            extra={"storage_key": self._key, "count": len(snapshot)}
        )

        self._publish(snapshot)
        return snapshot

    def create(self, candidate: ClientCandidate) -> ClientRecord:
        """Validate a candidate, give it a new id and append it."""
        ensure_valid(candidate)

        records = self.load()
        client_id = self._ids.next_id({record.id for record in records})
        record = ClientRecord.from_candidate(client_id, candidate)

        self.save(records + (record,))

        logger.info("Created client", extra={"client_id": client_id})
        return record

    def update(self, client_id: str, candidate: ClientCandidate) -> ClientRecord:
        """
        Replace every field of an existing client except its id.

        The record keeps its position in the list.
        """
        records = self.load()
        index = self._index_of(records, client_id)
        if index is None:
            raise NotFoundError(client_id)

        ensure_valid(candidate)

        record = ClientRecord.from_candidate(client_id, candidate)
        self.save(records[:index] + (record,) + records[index + 1:])

        logger.info("Updated client", extra={"client_id": client_id})
        return record

    def delete(self, client_id: str) -> bool:
        """
        Remove a client permanently.

        Deleting an unknown id is a no-op. Returns whether a record was
        removed.
        """
        records = self.load()
        remaining = tuple(record for record in records if record.id != client_id)
        if len(remaining) == len(records):
            logger.debug("Delete of unknown client ignored", extra={"client_id": client_id})
            return False

        self.save(remaining)

        logger.info("Deleted client", extra={"client_id": client_id})
        return True

    def find_by_id(self, client_id: str) -> Optional[ClientRecord]:
        """Return the client with this id, or None."""
        records = self.load()
        index = self._index_of(records, client_id)
        return records[index] if index is not None else None

    def get(self, client_id: str) -> ClientRecord:
        """Return the client with this id or raise NotFoundError."""
        record = self.find_by_id(client_id)
        if record is None:
            raise NotFoundError(client_id)
        return record

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """
        Call listener with each new snapshot after a successful save.

        Returns a function that removes the subscription.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # -----------------------------------------------------------------------
    # Private Methods
    # -----------------------------------------------------------------------

    def _publish(self, snapshot: ClientSnapshot) -> None:
        for listener in list(self._listeners):
            listener(snapshot)

    @staticmethod
    def _check_records(records: ClientSnapshot) -> None:
        seen: set[str] = set()
        for record in records:
            if record.id in seen:
                raise DuplicateClientIdError(record.id)
            seen.add(record.id)
            ensure_valid(record)

    @staticmethod
    def _index_of(records: ClientSnapshot, client_id: str) -> Optional[int]:
        for index, record in enumerate(records):
            if record.id == client_id:
                return index
        return None
