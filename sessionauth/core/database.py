"""SQLAlchemy engine and session factory for the SQL credential store."""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """Create an engine for DATABASE_URL."""
    return create_engine(database_url, pool_pre_ping=True, echo=echo)


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)
