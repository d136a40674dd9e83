"""Protocol repository (JSON backing file by default, SQLAlchemy as an alternative)"""

from typing import Protocol

from src.core.models import GamerModel
from src.core.shared_types import GamerFields


class GamerRepository(Protocol):
    """Persistence layer orchestration"""

    def initialize(self) -> None:
        """Prepare the storage (file / tables). Safe to call on every startup."""
        ...

    def list_gamers(self) -> list[GamerModel]:
        """All records, in insertion order."""
        ...

    def get_gamer(self, gamer_id: str) -> GamerModel | None:
        """Get gamer by ID, if record exists."""
        ...

    def create_gamer(self, gamer: GamerModel) -> GamerModel:
        """Append a new record and return the stored data."""
        ...

    def update_gamer(self, gamer_id: str, fields: GamerFields) -> GamerModel | None:
        """Merge new fields into an existing record (the id is never overwritten)."""
        ...

    def delete_gamer(self, gamer_id: str) -> bool:
        """Remove a gamer's record. True if something was removed."""
        ...
