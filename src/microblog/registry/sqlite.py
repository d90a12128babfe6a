"""SQLite-backed publication registry."""

from __future__ import annotations

from datetime import date, datetime
import logging
from pathlib import Path
import sqlite3
from threading import Lock

from microblog.core.dates import normalize_date, parse_date
from microblog.core.exceptions import DuplicateEntryError, RegistryStorageError


__all__ = ["SqliteRegistry"]


logger = logging.getLogger(__name__)


# CURRENT_DATE is evaluated by SQLite in UTC, matching the reference zone.
_SCHEMA = """
CREATE TABLE IF NOT EXISTS posts (
    name TEXT NOT NULL,
    dt_posted DATE DEFAULT CURRENT_DATE
);
CREATE UNIQUE INDEX IF NOT EXISTS name_idx ON posts (name);
"""


class SqliteRegistry:
    """Publication registry stored in a single SQLite file.

    One connection is shared by every thread rendering posts from the same
    directory; statements are serialised through a lock while the unique
    index on ``name`` guarantees a post is stamped only once.
    """

    def __init__(self, location: str | Path) -> None:
        self._location = Path(location)
        self._connection: sqlite3.Connection | None = None
        self._lock = Lock()

    @property
    def location(self) -> Path:
        """Path to the database file."""
        return self._location

    @property
    def connection(self) -> sqlite3.Connection:
        if self._connection is None:
            raise RegistryStorageError(f"registry {self._location} is not initialised")
        return self._connection

    def initialize(self) -> None:
        with self._lock:
            if self._connection is not None:
                return
            created = not self._location.exists()
            connection: sqlite3.Connection | None = None
            try:
                connection = sqlite3.connect(
                    self._location,
                    check_same_thread=False,
                    isolation_level=None,
                )
                connection.executescript(_SCHEMA)
            except sqlite3.Error as exc:
                if connection is not None:
                    connection.close()
                raise RegistryStorageError(
                    f"could not open publication registry {self._location}: {exc}"
                ) from exc
            self._connection = connection
        if created:
            logger.info("Created publication registry at %s", self._location)
        else:
            logger.debug("Opened publication registry at %s", self._location)

    def get(self, name: str) -> date | None:
        with self._lock:
            try:
                row = self.connection.execute(
                    "SELECT dt_posted FROM posts WHERE name = ?;", (name,)
                ).fetchone()
            except sqlite3.Error as exc:
                raise RegistryStorageError(
                    f"could not read publication date of '{name}': {exc}"
                ) from exc
        if row is None or row[0] is None:
            return None
        return self._decode(name, row[0])

    def set(self, name: str, when: date | datetime | None = None) -> date:
        with self._lock:
            connection = self.connection
            try:
                connection.execute("BEGIN IMMEDIATE;")
                try:
                    if when is None:
                        connection.execute("INSERT INTO posts (name) VALUES (?);", (name,))
                    else:
                        connection.execute(
                            "INSERT INTO posts (name, dt_posted) VALUES (?, ?);",
                            (name, normalize_date(when).isoformat()),
                        )
                    row = connection.execute(
                        "SELECT dt_posted FROM posts WHERE name = ?;", (name,)
                    ).fetchone()
                except BaseException:
                    connection.execute("ROLLBACK;")
                    raise
                connection.execute("COMMIT;")
            except sqlite3.IntegrityError as exc:
                raise DuplicateEntryError(name) from exc
            except sqlite3.Error as exc:
                raise RegistryStorageError(
                    f"could not store publication date of '{name}': {exc}"
                ) from exc
        stored = self._decode(name, row[0])
        logger.debug("Stored publication date %s for '%s'", stored, name)
        return stored

    def close(self) -> None:
        with self._lock:
            if self._connection is None:
                return
            self._connection.close()
            self._connection = None

    def _decode(self, name: str, raw: object) -> date:
        try:
            return parse_date(raw)  # type: ignore[arg-type]
        except (TypeError, ValueError) as exc:
            raise RegistryStorageError(
                f"registry {self._location} holds an invalid date for '{name}': {raw!r}"
            ) from exc

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"{type(self).__name__}({str(self._location)!r})"
