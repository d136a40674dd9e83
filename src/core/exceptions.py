"""Custom exceptions shared by all layers"""


class GamersAPIError(Exception):
    """Top-level exception for anything raised on purpose by this application."""


class RepositoryError(GamersAPIError):
    """Backing store could not be read, written or interpreted."""


class RecordNotFoundError(RepositoryError):
    """No record with the requested id."""

    def __init__(self, gamer_id: str) -> None:
        self.gamer_id = gamer_id
        super().__init__(f"Gamer with {gamer_id=} not found.")


class InvalidRequestError(GamersAPIError):
    """Request data does not make sense, even though it parsed."""
