"""
Advocate record value and records-envelope parsing.

The records endpoint returns ``{"data": [ {...}, ... ]}`` with camelCase keys:

    id, firstName, lastName, city, degree, specialties,
    yearsOfExperience, phoneNumber

``parse_envelope`` is strict: any other top-level shape, or any record that
is missing a field or carries the wrong type, raises
``MalformedResponseError`` for the whole batch.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


class MalformedResponseError(ValueError):
    """The records endpoint returned something other than a valid envelope."""


# (attribute, wire key)
WIRE_FIELDS: tuple[tuple[str, str], ...] = (
    ("id", "id"),
    ("first_name", "firstName"),
    ("last_name", "lastName"),
    ("city", "city"),
    ("degree", "degree"),
    ("specialties", "specialties"),
    ("years_of_experience", "yearsOfExperience"),
    ("phone_number", "phoneNumber"),
)

_TEXT_FIELDS = ("first_name", "last_name", "city", "degree")


@dataclass(frozen=True)
class Advocate:
    """One advocate's profile.  Never mutated after it is received."""

    id: str
    first_name: str
    last_name: str
    city: str
    degree: str
    specialties: tuple[str, ...] = field(default_factory=tuple)
    years_of_experience: int = 0
    phone_number: str = ""

    def __post_init__(self) -> None:
        if isinstance(self.specialties, list):
            object.__setattr__(self, "specialties", tuple(self.specialties))

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Advocate":
        """Build an Advocate from one wire record.

        Raises:
            MalformedResponseError: missing keys or wrong value types.
        """
        if not isinstance(data, dict):
            raise MalformedResponseError(
                f"Advocate record must be an object, got {type(data).__name__}"
            )
        missing = [wire for _, wire in WIRE_FIELDS if wire not in data]
        if missing:
            raise MalformedResponseError(
                f"Advocate record is missing field(s): {', '.join(missing)}"
            )

        raw_id = data["id"]
        if isinstance(raw_id, bool) or not isinstance(raw_id, (str, int)):
            raise MalformedResponseError("Advocate 'id' must be a string or integer")

        values: dict[str, Any] = {"id": str(raw_id)}
        for attr, wire in WIRE_FIELDS:
            if attr in _TEXT_FIELDS:
                if not isinstance(data[wire], str):
                    raise MalformedResponseError(f"Advocate '{wire}' must be a string")
                values[attr] = data[wire]

        specialties = data["specialties"]
        if not isinstance(specialties, list) or not all(
            isinstance(s, str) for s in specialties
        ):
            raise MalformedResponseError("Advocate 'specialties' must be a list of strings")
        values["specialties"] = tuple(specialties)

        years = data["yearsOfExperience"]
        if isinstance(years, bool) or not isinstance(years, int) or years < 0:
            raise MalformedResponseError(
                "Advocate 'yearsOfExperience' must be a non-negative integer"
            )
        values["years_of_experience"] = years

        phone = data["phoneNumber"]
        if isinstance(phone, bool) or not isinstance(phone, (str, int)):
            raise MalformedResponseError("Advocate 'phoneNumber' must be a string")
        values["phone_number"] = str(phone)

        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        """Wire representation (camelCase keys)."""
        out: dict[str, Any] = {}
        for attr, wire in WIRE_FIELDS:
            value = getattr(self, attr)
            out[wire] = list(value) if attr == "specialties" else value
        return out


def parse_envelope(payload: Any) -> tuple[Advocate, ...]:
    """Validate a records-endpoint body and return its advocates.

    Raises:
        MalformedResponseError: the body is not ``{"data": [record, ...]}``.
    """
    if not isinstance(payload, dict):
        raise MalformedResponseError(
            f"Expected a JSON object envelope, got {type(payload).__name__}"
        )
    if "data" not in payload:
        raise MalformedResponseError("Envelope has no 'data' member")
    records = payload["data"]
    if not isinstance(records, list):
        raise MalformedResponseError(
            f"Envelope 'data' must be a list, got {type(records).__name__}"
        )
    return tuple(Advocate.from_dict(r) for r in records)
