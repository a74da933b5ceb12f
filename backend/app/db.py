import logging

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker, declarative_base

logger = logging.getLogger(__name__)

# SQLAlchemy Base class for models to inherit
Base = declarative_base()


class StorageError(Exception):
    """A read, write or schema operation against the store failed."""


class Store:
    """Owns the engine and session factory for one database.

    Opened once per application (see main.lifespan) and closed on shutdown.
    """

    def __init__(self, database_url: str, echo: bool = False):
        self.database_url = database_url
        connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
        self.engine = create_engine(
            database_url,
            echo=echo,
            pool_pre_ping=True,   # helps avoid stale connections
            connect_args=connect_args,
        )
        # Factory that creates DB sessions
        self.SessionLocal = sessionmaker(autoflush=False, bind=self.engine)

    def ensure_schema(self) -> None:
        """Create missing tables. Safe to call repeatedly."""
        from app.models.day_record import DayRecord  # noqa: F401  (registers the table)

        try:
            Base.metadata.create_all(bind=self.engine)
        except SQLAlchemyError as e:
            logger.exception("Schema bootstrap failed for %s", self.engine.url)
            raise StorageError("Could not create tables") from e

    def session(self) -> Session:
        return self.SessionLocal()

    def close(self) -> None:
        self.engine.dispose()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


# Dependency we will use in FastAPI routes
def get_db(request: Request):
    db = request.app.state.store.session()
    try:
        yield db
    finally:
        db.close()
