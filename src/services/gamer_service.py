"""Orchestration of communication from API router to the persistence layer (and the reverse direction)."""

import logging

from src.api.models import (
    CreateGamerRequest,
    DeleteGamerRequest,
    GamerResponse,
    GetGamerRequest,
    UpdateGamerRequest,
)
from src.core.exceptions import RecordNotFoundError
from src.core.ids import generate_gamer_id
from src.core.models import GamerModel, without_id
from src.db.repository import GamerRepository

logger = logging.getLogger(__name__)


class GamerService:
    """Orchestration of layers for gamer records."""

    def __init__(self, repository: GamerRepository) -> None:
        self.repo = repository

    # -- API routes logic ---
    def list_gamers(self) -> list[GamerResponse]:
        """Every stored gamer, in insertion order."""
        return [GamerResponse.from_model(model) for model in self.repo.list_gamers()]

    def get_gamer(self, request: GetGamerRequest) -> GamerResponse:
        """Single gamer, raises RecordNotFoundError if the id is unknown."""
        return GamerResponse.from_model(self._fetch_gamer(request.gamer_id))

    def create_gamer(self, request: CreateGamerRequest) -> GamerResponse:
        """
        Store a new gamer under a freshly generated id.
        ----
        An id sent by the client is dropped: the generated one always wins.
        """
        new_gamer = GamerModel(id=generate_gamer_id(), fields=without_id(request.fields))
        stored = self.repo.create_gamer(new_gamer)
        logger.info("Created gamer %s", stored.id)
        return GamerResponse.from_model(stored)

    def update_gamer(self, request: UpdateGamerRequest) -> GamerResponse | None:
        """
        Merge the supplied fields into the gamer and return the re-fetched record.
        ----
        Unknown ids are not an error here: nothing is written and None is returned.
        """
        updated = self.repo.update_gamer(request.gamer_id, request.fields)
        if updated is None:
            logger.info("Update skipped, no gamer with id %s", request.gamer_id)
            return None
        logger.info("Updated gamer %s", request.gamer_id)

        stored = self.repo.get_gamer(request.gamer_id)
        return GamerResponse.from_model(stored) if stored else None

    def delete_gamer(self, request: DeleteGamerRequest) -> bool:
        """Handle a request to delete a gamer record. Deleting an unknown id is a no-op."""
        deleted = self.repo.delete_gamer(request.gamer_id)
        if deleted:
            logger.info("Deleted gamer %s", request.gamer_id)
        return deleted

    # -- Internal helpers --
    def _fetch_gamer(self, gamer_id: str) -> GamerModel:
        """Attempt to find the gamer in the repository and raise error if it fails."""
        gamer_model = self.repo.get_gamer(gamer_id)
        if gamer_model is None:
            raise RecordNotFoundError(gamer_id)
        return gamer_model
