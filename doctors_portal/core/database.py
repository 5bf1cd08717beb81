from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import StaticPool
from fastapi import Request
from typing import Generator
import logging

from .config import Settings

logger = logging.getLogger(__name__)

Base = declarative_base()


class Database:
    """Engine and session factory owned by one application instance."""

    def __init__(self, url: str, pool_timeout: int = 30):
        self.url = url
        self.engine = create_engine(url, **self._engine_options(url, pool_timeout))
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(settings.get_database_url, pool_timeout=settings.DB_POOL_TIMEOUT)

    @staticmethod
    def _engine_options(url: str, pool_timeout: int) -> dict:
        if url.startswith("sqlite"):
            options = {"connect_args": {"check_same_thread": False}}
            # In-memory databases live inside a single connection
            if url in ("sqlite://", "sqlite:///:memory:"):
                options["poolclass"] = StaticPool
            return options

        # PostgreSQL with appropriate connection pool settings
        return {
            "pool_size": 5,
            "max_overflow": 10,
            "pool_timeout": pool_timeout,
            "pool_recycle": 1800,  # Recycle connections after 30 minutes
            "pool_pre_ping": True,
        }

    @property
    def backend_name(self) -> str:
        return self.engine.dialect.name

    def init_db(self):
        """Initialize database tables."""
        # Register every mapped class on Base before create_all
        from ..models import booking, doctor, service, user  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def session(self) -> Session:
        return self.SessionLocal()

    def dispose(self):
        self.engine.dispose()


# Database dependency
def get_db(request: Request) -> Generator[Session, None, None]:
    """Get database session."""
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
