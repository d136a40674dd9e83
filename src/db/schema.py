"""Database tables / schema"""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from src.core.ids import ID_LENGTH


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBGamer(Base):
    __tablename__ = "gamers"
    # seq keeps insertion order; gamer_id is the public id
    seq: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    gamer_id: Mapped[str] = mapped_column(String(ID_LENGTH), unique=True, index=True)
    fields: Mapped[dict[str, Any]] = mapped_column(JSON, default=dict)
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)
