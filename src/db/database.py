"""Generate database sessions for the SQL backend"""

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker


def build_session_factory(database_url: str, echo: bool = False) -> sessionmaker[Session]:
    """Engine + session factory for the configured database."""
    connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
    engine = create_engine(database_url, echo=echo, connect_args=connect_args)
    return sessionmaker(bind=engine, autoflush=False)
