"""Database session. SQLite compatible with connection pooling."""
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

from invoicely.core.config import settings


def _enable_sqlite_foreign_keys(dbapi_connection, _):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: str, **kwargs):
    """Create an engine with pooling suited to the backend."""
    if database_url.startswith("sqlite"):
        connect_args = kwargs.pop("connect_args", {})
        connect_args.setdefault("check_same_thread", False)
        engine = create_engine(database_url, connect_args=connect_args, **kwargs)
        # line_items rely on ON DELETE CASCADE
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    # PostgreSQL/MySQL: Use QueuePool with sensible defaults
    return create_engine(
        database_url,
        pool_size=5,
        max_overflow=10,
        pool_timeout=30,
        pool_recycle=3600,
        pool_pre_ping=True,
        **kwargs,
    )


engine = build_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
