"""Open counts and last access times of movies, kept in a document."""

from __future__ import annotations

import time

from .docstore import DocumentStore


class AccessStore:
    """Access statistics on a :class:`DocumentStore`, limited to its database id."""

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    @property
    def _db_id(self) -> str:
        return self._store.db_id

    def increment(self, item_id: int, now: int | None = None) -> None:
        """Count one more opening of ``item_id`` and record ``now`` as last access.

        ``now`` is in seconds since the epoch and defaults to the current time.
        """
        if now is None:
            now = int(time.time())
        self._store._execute(
            "REPLACE into Access (id,opencount,lastaccess,dbid) VALUES "
            "(?,"
            "COALESCE((SELECT opencount FROM Access WHERE id=? AND dbid=?),0)+1,"
            "?,"
            "?)",
            (item_id, item_id, self._db_id, now, self._db_id),
        )

    def open_count(self, item_id: int) -> int | None:
        """How often ``item_id`` was opened, or ``None`` when never recorded."""
        row = self._store._execute(
            "SELECT opencount FROM Access WHERE id=? AND dbid=?",
            (item_id, self._db_id),
        ).fetchone()
        if row is None:
            return None
        return int(row[0] or 0)

    def set_open_count(self, item_id: int, count: int) -> None:
        """Set the open count of ``item_id``, keeping its last access time."""
        self._store._execute(
            "REPLACE into Access (id,opencount,lastaccess,dbid) VALUES "
            "(?,"
            "?,"
            "COALESCE((SELECT lastaccess FROM Access WHERE id=? AND dbid=?),0),"
            "?)",
            (item_id, count, item_id, self._db_id, self._db_id),
        )

    def open_count_and_last_access(self, item_id: int) -> tuple[int, int] | None:
        """The (open count, last access) of ``item_id``, or ``None`` when absent."""
        row = self._store._execute(
            "SELECT opencount,lastaccess FROM Access WHERE id=? AND dbid=?",
            (item_id, self._db_id),
        ).fetchone()
        if row is None:
            return None
        return int(row[0] or 0), int(row[1] or 0)

    def all_records(self) -> dict[int, tuple[int, int]]:
        """Map of item id to (open count, last access) for every recorded item."""
        rows = self._store._execute(
            "SELECT id,opencount,lastaccess FROM Access WHERE dbid=?", (self._db_id,)
        ).fetchall()
        return {
            int(item_id): (int(count or 0), int(last or 0))
            for item_id, count, last in rows
        }