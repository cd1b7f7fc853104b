"""
SQLite database integration and table bootstrap.

The ``Database`` object is the single store handle of the application.
It is created once per app (see ``main.create_app``), kept on
``app.state`` and passed explicitly to the services that need it.  Each
operation opens its own short-lived connection; rows are returned as
``sqlite3.Row`` so columns can be accessed by name.

Tables are created by an ordered list of migrations whose applied
versions are stored in the ``migrations`` table.  Identifiers are
caller-assigned text primary keys, which makes an ``INSERT`` of an
existing id fail atomically with ``sqlite3.IntegrityError``.  Bookings
deliberately carry no foreign keys: references are checked once, when
the booking is created.

Timestamps are stored as ISO-8601 text in UTC.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, Optional

logger = logging.getLogger(__name__)

SQLITE_URL_PREFIX = "sqlite:///"

MIGRATIONS: list[tuple[int, str]] = [
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS movies (
            id TEXT PRIMARY KEY,
            title TEXT NOT NULL,
            genre TEXT,
            release_year INTEGER,
            duration_mins INTEGER
        );

        CREATE TABLE IF NOT EXISTS users (
            id TEXT PRIMARY KEY,
            name TEXT NOT NULL,
            email TEXT NOT NULL,
            joined_at TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS bookings (
            id TEXT PRIMARY KEY,
            user_id TEXT NOT NULL,
            movie_id TEXT NOT NULL,
            booking_date TEXT NOT NULL,
            seats INTEGER NOT NULL,
            status TEXT NOT NULL DEFAULT 'Booked'
        );
        """,
    ),
    (
        2,
        """
        -- Join and filter columns used by the analytics queries
        CREATE INDEX IF NOT EXISTS idx_bookings_user_id ON bookings(user_id);
        CREATE INDEX IF NOT EXISTS idx_bookings_movie_id ON bookings(movie_id);
        CREATE INDEX IF NOT EXISTS idx_bookings_status ON bookings(status);
        """,
    ),
]


def resolve_database_path(database_url: str) -> str:
    """Turn a configured database URL into a filesystem path.

    Accepts a plain path or a ``sqlite:///`` URL.  ``:memory:`` is not
    supported because every operation opens a new connection.  Relative
    paths are resolved against the project root.
    """
    path = database_url
    if path.startswith(SQLITE_URL_PREFIX):
        path = path[len(SQLITE_URL_PREFIX):]
    if os.path.isabs(path):
        return path
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / path).resolve())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Convert to UTC, treating naive values as already being UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_db_timestamp(value: datetime) -> str:
    return as_utc(value).isoformat()


def from_db_timestamp(value: Optional[str]) -> Optional[datetime]:
    if value is None:
        return None
    return as_utc(datetime.fromisoformat(value))


class Database:
    """Handle on the SQLite file backing the entity store."""

    def __init__(self, database_url: str) -> None:
        self.path = resolve_database_path(database_url)

    def get_connection(self) -> sqlite3.Connection:
        """Open a new connection with name-addressable rows."""
        conn = sqlite3.connect(self.path)
        conn.row_factory = sqlite3.Row
        return conn

    @contextmanager
    def get_cursor(self) -> Iterator[sqlite3.Cursor]:
        """Yield a cursor, commit on success and always close the connection."""
        conn = self.get_connection()
        try:
            yield conn.cursor()
            conn.commit()
        finally:
            conn.close()

    def init(self) -> None:
        """Create the database file if needed and apply pending migrations."""
        with self.get_cursor() as cursor:
            cursor.execute(
                "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
            )
            row = cursor.execute("SELECT MAX(version) AS version FROM migrations").fetchone()
            current_version = row["version"] if row and row["version"] is not None else 0

            for version, sql in MIGRATIONS:
                if version > current_version:
                    cursor.executescript(sql)
                    cursor.execute("INSERT INTO migrations (version) VALUES (?)", (version,))
                    logger.info("Applied migration %s", version)
                    current_version = version
        logger.info("Database ready at %s (schema version %s)", self.path, current_version)
