"""Errors raised by the client record store."""

from typing import Sequence


class ClientError(Exception):
    """Base class for client store errors."""
    pass


class ValidationError(ClientError):
    """
    Raised when a candidate fails validation.

    Recoverable: the operation is aborted before anything is written and
    the reasons are shown to the user as an inline message.
    """

    def __init__(self, reasons: Sequence[str]) -> None:
        self.reasons = list(reasons)
        super().__init__("; ".join(self.reasons) or "Invalid client")

    @property
    def message(self) -> str:
        """The first failing rule, for one-line messaging."""
        return self.reasons[0] if self.reasons else str(self)


class NotFoundError(ClientError):
    """Raised when an operation references a client id that is not stored."""

    def __init__(self, client_id: str) -> None:
        self.client_id = client_id
        super().__init__(f"Client {client_id} not found")


class DuplicateClientIdError(ClientError):
    """Raised when a sequence handed to save() repeats an id."""

    def __init__(self, client_id: str) -> None:
        self.client_id = client_id
        super().__init__(f"Duplicate client id: {client_id}")
