"""Implementation of (Gamer)Repository on top of a single JSON document on disk"""

import json
import logging
from copy import deepcopy
from pathlib import Path
from typing import Any

from src.core.exceptions import RepositoryError
from src.core.models import GamerModel, without_id
from src.core.shared_types import ID_FIELD, GamerFields

logger = logging.getLogger(__name__)

DEFAULT_COLLECTION = "gamers"


class JsonFileGamerRepository:
    """
    Whole collection kept in memory, whole file rewritten after every mutation.

    File layout: {"<collection>": [record, record, ...]}. Other top-level keys are kept as they are.
    NOTE no locking: concurrent writers can lose updates.
    """

    def __init__(self, path: str | Path, collection: str = DEFAULT_COLLECTION) -> None:
        self.path = Path(path)
        self.collection = collection
        self._document: dict[str, Any] = {}

    def initialize(self) -> None:
        """Load the backing file if it exists, then make sure the collection key is there."""
        self._document = self._read() if self.path.exists() else {}
        if self.collection not in self._document:
            self._persist([])
            logger.info("Initialized collection %r in %s", self.collection, self.path)
        logger.info("Loaded %d gamer(s) from %s", len(self._records), self.path)

    def list_gamers(self) -> list[GamerModel]:
        return [self._to_model(record) for record in self._records]

    def get_gamer(self, gamer_id: str) -> GamerModel | None:
        record = self._find(gamer_id)
        if record is None:
            return None
        return self._to_model(record)

    def create_gamer(self, gamer: GamerModel) -> GamerModel:
        record = deepcopy(gamer.to_record())
        self._persist([*self._records, record])
        return self._to_model(record)

    def update_gamer(self, gamer_id: str, fields: GamerFields) -> GamerModel | None:
        record = self._find(gamer_id)
        if record is None:
            return None
        updated = {**record, **deepcopy(without_id(fields))}
        self._persist([updated if stored is record else stored for stored in self._records])
        return self._to_model(updated)

    def delete_gamer(self, gamer_id: str) -> bool:
        record = self._find(gamer_id)
        if record is None:
            return False
        self._persist([stored for stored in self._records if stored is not record])
        return True

    # -- Internal helpers --
    @property
    def _records(self) -> list[dict[str, Any]]:
        if self.collection not in self._document:
            raise RepositoryError(
                f"Collection {self.collection!r} not loaded. Call initialize() first."
            )
        return self._document[self.collection]

    def _find(self, gamer_id: str) -> dict[str, Any] | None:
        """First record with a matching id. Records handed out by the public methods are copies, this one is not."""
        return next(
            (record for record in self._records if record.get(ID_FIELD) == gamer_id),
            None,
        )

    def _read(self) -> dict[str, Any]:
        try:
            with self.path.open("r", encoding="utf-8") as file:
                document = json.load(file)
        except (OSError, json.JSONDecodeError) as exc:
            raise RepositoryError(f"Cannot read backing file {self.path}: {exc}") from exc

        if not isinstance(document, dict):
            raise RepositoryError(f"Backing file {self.path} must hold a JSON object.")
        records = document.get(self.collection, [])
        if not isinstance(records, list):
            raise RepositoryError(
                f"Collection {self.collection!r} in {self.path} must be a list."
            )
        return document

    def _persist(self, records: list[dict[str, Any]]) -> None:
        """Write the document with `records` as the collection; the snapshot only changes once the write succeeded."""
        document = {**self._document, self.collection: records}
        try:
            # serialize first so a bad value never truncates the file
            content = json.dumps(document, indent=2, ensure_ascii=False, allow_nan=False)
            self.path.write_text(content, encoding="utf-8")
        except (OSError, TypeError, ValueError) as exc:
            raise RepositoryError(f"Cannot write backing file {self.path}: {exc}") from exc
        self._document = document
        logger.debug("Persisted %d gamer(s) to %s", len(records), self.path)

    def _to_model(self, record: dict[str, Any]) -> GamerModel:
        """Detached copy of a stored record."""
        return GamerModel.from_record(deepcopy(record))
