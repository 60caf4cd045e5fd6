import sqlite3
from datetime import datetime, timezone

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base

Base = declarative_base()

# Note: Models are imported in jobhunt.db.models to avoid circular imports
# All models must import Base from this module


def utcnow() -> datetime:
    """Timezone-aware UTC timestamp used for created_at/updated_at defaults."""
    return datetime.now(timezone.utc)


@event.listens_for(Engine, "connect")
def enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """SQLite ships with foreign keys disabled; ON DELETE CASCADE needs them on."""
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()
