"""
Domain models for client records.

A client record is the only entity in FitCRM. These models carry no
knowledge of how they are stored or rendered; the storage layer only
relies on to_dict/from_dict for the persisted shape.
"""

from dataclasses import dataclass, fields
from typing import Any, Optional


# Field name -> key used in the persisted JSON document.
# The camelCase keys match the layout written by earlier versions of the tool.
STORED_KEYS: dict[str, str] = {
    "id": "id",
    "full_name": "fullName",
    "email": "email",
    "start_date": "startDate",
    "age": "age",
    "gender": "gender",
    "phone": "phone",
    "fitness_goal": "fitnessGoal",
}


@dataclass(frozen=True)
class ClientCandidate:
    """
    An unvalidated client submitted for create or update.

    Required fields default to empty strings so that a half-filled form
    can still be represented and handed to the validator.
    """
    full_name: str = ""
    email: str = ""
    start_date: str = ""
    age: Optional[int] = None
    gender: Optional[str] = None
    phone: Optional[str] = None
    fitness_goal: str = ""


@dataclass(frozen=True)
class ClientRecord:
    """
    A stored client.

    Frozen because records travel inside snapshots that several views
    may hold at once. Edits produce a new record with the same id.
    """
    id: str
    full_name: str
    email: str
    start_date: str
    age: Optional[int] = None
    gender: Optional[str] = None
    phone: Optional[str] = None
    fitness_goal: str = ""

    @classmethod
    def from_candidate(cls, client_id: str, candidate: ClientCandidate) -> "ClientRecord":
        """Attach an id to a candidate."""
        return cls(
            id=client_id,
            full_name=candidate.full_name,
            email=candidate.email,
            start_date=candidate.start_date,
            age=candidate.age,
            gender=candidate.gender,
            phone=candidate.phone,
            fitness_goal=candidate.fitness_goal,
        )

    def as_candidate(self) -> ClientCandidate:
        """The record's editable fields, without the id."""
        return ClientCandidate(
            full_name=self.full_name,
            email=self.email,
            start_date=self.start_date,
            age=self.age,
            gender=self.gender,
            phone=self.phone,
            fitness_goal=self.fitness_goal,
        )

    def to_dict(self) -> dict[str, Any]:
        """
        Persisted representation.

        Every field is written, absent optionals as null, so that
        from_dict(to_dict(r)) == r for all records.
        """
        return {STORED_KEYS[f.name]: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ClientRecord":
        """
        Build a record from its persisted representation.

        Raises KeyError or TypeError if the document is not record-shaped;
        the repository turns these into CorruptStoreError.
        """
        if not isinstance(data, dict):
            raise TypeError(f"Expected a JSON object, got {type(data).__name__}")

        age = data.get("age")
        return cls(
            id=str(data["id"]),
            full_name=data.get("fullName") or "",
            email=data.get("email") or "",
            start_date=data.get("startDate") or "",
            age=int(age) if age not in (None, "") else None,
            gender=data.get("gender"),
            phone=data.get("phone"),
            fitness_goal=data.get("fitnessGoal") or "",
        )


ClientSnapshot = tuple[ClientRecord, ...]
