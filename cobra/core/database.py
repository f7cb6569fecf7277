"""Database configuration and session management for SQLite.

The engine is configured for a small multi-user web service:

    - **WAL (Write-Ahead Logging)**: readers keep working while an item
      update commits, so a checklist list view is never blocked by someone
      ticking a box on another checklist.

    - **Foreign Keys**: SQLite ships with foreign key enforcement disabled.
      It is enabled so that deleting a checklist cascades to its items and
      an item can never point at a missing checklist.

    - **check_same_thread=False**: FastAPI may hand a session to a different
      worker thread than the one that opened its connection.

Each mutation request runs in a single session and commits once, so an item
change and the progress counters it produces are persisted together.
"""

from sqlalchemy import event as sa_event
from sqlmodel import Session, SQLModel, create_engine

from cobra.core.config import settings

connect_args = {"check_same_thread": False}

engine = create_engine(
    settings.database_url,
    connect_args=connect_args,
    echo=settings.debug,  # Log SQL statements when DEBUG=true
)


@sa_event.listens_for(engine, "connect")
def set_sqlite_pragma(dbapi_connection, connection_record):
    """Configure SQLite pragmas on each new connection.

    Pragmas are connection-level, so they are applied every time the pool
    opens a connection.
    """
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_and_tables():
    """Create all database tables."""
    # Import models so every table is registered on the metadata
    import cobra.models  # noqa: F401

    SQLModel.metadata.create_all(engine)


def get_session():
    """Dependency for getting database session."""
    with Session(engine) as session:
        yield session
