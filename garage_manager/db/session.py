"""Database engine/session setup for SQLAlchemy."""

from collections.abc import Generator, Iterator
from contextlib import contextmanager

from fastapi import Request
from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

# Declarative base class for ORM models.
Base = declarative_base()

_IN_MEMORY_SQLITE_URLS = {"sqlite://", "sqlite:///:memory:"}


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    # SQLite ignores REFERENCES clauses unless enabled per connection.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.close()


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """Build the engine (and its connection pool) for one application instance."""
    options: dict = {"echo": echo, "pool_pre_ping": True}

    if database_url.startswith("sqlite"):
        # check_same_thread is required for SQLite with FastAPI.
        options["connect_args"] = {"check_same_thread": False}
        if database_url in _IN_MEMORY_SQLITE_URLS:
            # Every session must see the same in-memory database.
            options["poolclass"] = StaticPool

    engine = create_engine(database_url, **options)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine, class_=Session)


def get_db(request: Request) -> Generator[Session, None, None]:
    """Provide a DB session per request and ensure it is closed."""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db: Session) -> Iterator[Session]:
    """Commit everything done inside the block, or roll all of it back."""
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
