from collections.abc import Iterator
from contextlib import contextmanager

import structlog
from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from .models import Base

logger = structlog.get_logger()


def build_engine(database_url: str) -> Engine:
    if database_url.startswith("sqlite"):
        connect_args = {"check_same_thread": False}
        # in-memory база живёт только пока жив единственный коннект
        if ":memory:" in database_url or database_url in ("sqlite://", "sqlite:///"):
            return create_engine(database_url, connect_args=connect_args, poolclass=StaticPool)
        return create_engine(database_url, connect_args=connect_args)

    connect_args = {}
    if database_url.startswith("postgresql"):
        connect_args = {"client_encoding": "utf8"}
    return create_engine(
        database_url,
        pool_pre_ping=True,
        pool_size=10,
        max_overflow=20,
        pool_recycle=3600,
        connect_args=connect_args,
        echo=False,
    )


class UserStore:
    """Handle over the users database.

    Owns the engine and the session factory. Constructed once per process,
    opened on service start and closed on shutdown.
    """

    def __init__(self, database_url: str, engine: Engine | None = None):
        self.database_url = database_url
        self.engine = engine if engine is not None else build_engine(database_url)
        self.SessionLocal = sessionmaker(bind=self.engine, autocommit=False, autoflush=False)
        self.is_open = False

    def open(self) -> None:
        if self.is_open:
            return
        Base.metadata.create_all(bind=self.engine)
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        self.is_open = True
        logger.info("Database connection established", url=self.engine.url.render_as_string(hide_password=True))

    def close(self) -> None:
        if not self.is_open:
            return
        self.engine.dispose()
        self.is_open = False
        logger.info("Database connection closed")

    @contextmanager
    def session(self) -> Iterator[Session]:
        db = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()


def get_store(request: Request) -> UserStore:
    return request.app.state.store


def get_db(request: Request):
    with get_store(request).session() as db:
        yield db
