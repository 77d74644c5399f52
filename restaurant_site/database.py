import logging

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from .config import Settings

logger = logging.getLogger(__name__)

Base = declarative_base()


def _is_memory_sqlite(url: str) -> bool:
    return url in ("sqlite://", "sqlite:///:memory:") or "mode=memory" in url


class Database:
    """Owns the engine (connection pool) and session factory for one application."""

    def __init__(self, settings: Settings):
        url = settings.database_url
        timeout = settings.query_timeout_seconds

        # Configure engine based on database type
        if url.startswith("sqlite"):
            kwargs = {"connect_args": {"check_same_thread": False, "timeout": timeout}}
            if _is_memory_sqlite(url):
                kwargs["poolclass"] = StaticPool
            self.engine = create_engine(url, **kwargs)
        elif url.startswith("postgresql"):
            self.engine = create_engine(
                url,
                pool_pre_ping=True,
                pool_timeout=timeout,
                connect_args={"options": f"-c statement_timeout={timeout * 1000}"},
            )
        else:
            self.engine = create_engine(url, pool_pre_ping=True, pool_timeout=timeout)

        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    @property
    def dialect(self) -> str:
        return self.engine.dialect.name

    def init_db(self):
        """Create all tables that do not exist yet"""
        from . import models  # noqa: F401  registers the mappers

        Base.metadata.create_all(bind=self.engine)
        logger.info("Database schema ready (%s)", self.dialect)

    def dispose(self):
        self.engine.dispose()


def get_db(request: Request):
    """Dependency to get a request-scoped database session"""
    db = request.app.state.database.SessionLocal()
    try:
        yield db
    finally:
        db.close()
