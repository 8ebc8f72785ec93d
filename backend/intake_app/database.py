import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from intake_app.models import Base

logger = logging.getLogger(__name__)


class Database:
    """
    Engine and session factory for one storage URL.

    Created once at application startup and handed to the repositories;
    dispose() releases the connection pool at shutdown.
    """

    def __init__(self, database_url: str, echo: bool = False):
        connect_args = {}
        if database_url.startswith("sqlite"):
            connect_args["check_same_thread"] = False

        self.database_url = database_url
        self.engine = create_engine(database_url, echo=echo, connect_args=connect_args, pool_pre_ping=True)
        self.SessionLocal = sessionmaker(bind=self.engine, autoflush=False, expire_on_commit=False)

    def init_db(self) -> None:
        """Initialize database tables"""
        Base.metadata.create_all(bind=self.engine)
        logger.info(f"Database tables ready ({self.engine.url.get_backend_name()})")

    @contextmanager
    def session(self) -> Iterator[Session]:
        """
        Session with commit on success and rollback on any error.
        """
        db = self.SessionLocal()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def dispose(self) -> None:
        self.engine.dispose()
