"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and db layer (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer or API layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass, field
from typing import Any, Self

from src.core.exceptions import RepositoryError
from src.core.shared_types import ID_FIELD, GamerFields


@dataclass
class GamerModel:
    """Transport-safe representation of a gamer record used between API, Service and DB layers."""

    id: str
    fields: GamerFields = field(default_factory=dict)

    def to_record(self) -> dict[str, Any]:
        """Flatten into the stored/served shape: id first, then the caller-defined fields."""
        return {ID_FIELD: self.id, **without_id(self.fields)}

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Self:
        gamer_id = record.get(ID_FIELD)
        if not isinstance(gamer_id, str) or not gamer_id:
            raise RepositoryError(f"Stored record has no valid id: {record!r}")
        return cls(id=gamer_id, fields=without_id(record))


def without_id(fields: dict[str, Any]) -> GamerFields:
    """Copy of the mapping with the id field dropped."""
    return {key: value for key, value in fields.items() if key != ID_FIELD}
