"""Implementation of (Gamer)Repository using SQLAlchemy"""

from sqlalchemy import select
from sqlalchemy.orm import Session

from src.core.models import GamerModel, without_id
from src.core.shared_types import GamerFields
from src.db.schema import Base, DBGamer


class SQLGamerRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def initialize(self) -> None:
        """Create the tables if they are missing."""
        Base.metadata.create_all(bind=self.db.get_bind())

    def list_gamers(self) -> list[GamerModel]:
        query = select(DBGamer).order_by(DBGamer.seq)
        return [self._to_model(gamer_db) for gamer_db in self.db.scalars(query)]

    def get_gamer(self, gamer_id: str) -> GamerModel | None:
        """Get gamer by ID, if record exists."""
        gamer_db = self._fetch_gamer(gamer_id)
        if gamer_db:
            return self._to_model(gamer_db)
        return None

    def create_gamer(self, gamer: GamerModel) -> GamerModel:
        """Store new gamer and return the stored data."""
        gamer_db = DBGamer(gamer_id=gamer.id, fields=without_id(gamer.fields))
        self.db.add(gamer_db)
        self.db.commit()
        self.db.refresh(gamer_db)
        return self._to_model(gamer_db)

    def update_gamer(self, gamer_id: str, fields: GamerFields) -> GamerModel | None:
        """Merge new fields into existing record."""
        gamer_db = self._fetch_gamer(gamer_id)
        if not gamer_db:
            return None
        # Assign a new dict: in-place changes of a JSON column are not tracked
        gamer_db.fields = {**gamer_db.fields, **without_id(fields)}
        self.db.commit()
        self.db.refresh(gamer_db)
        return self._to_model(gamer_db)

    def delete_gamer(self, gamer_id: str) -> bool:
        """Remove a gamer's record."""
        gamer_db = self._fetch_gamer(gamer_id)
        if not gamer_db:
            return False
        self.db.delete(gamer_db)
        self.db.commit()
        return True

    def _fetch_gamer(self, gamer_id: str) -> DBGamer | None:
        query = select(DBGamer).where(DBGamer.gamer_id == gamer_id)
        return self.db.scalar(query)

    def _to_model(self, gamer_db: DBGamer) -> GamerModel:
        """Convert SQLAlchemy model to data transfer model."""
        return GamerModel(id=gamer_db.gamer_id, fields=dict(gamer_db.fields))
