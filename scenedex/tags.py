"""Tags stored in a document and the items they are attached to."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .docstore import DocumentStore


@dataclass(frozen=True)
class Tag:
    """A tag with its reading, used for ordering."""

    tagid: int
    tag: str
    yomi: str


def _text(value: object) -> str:
    return "" if value is None else str(value)


class TagStore:
    """Tag operations on a :class:`DocumentStore`, limited to its database id."""

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    @property
    def _db_id(self) -> str:
        return self._store.db_id

    def all_tags(self) -> list[Tag]:
        """All tags, ordered by reading."""
        rows = self._store._execute(
            "SELECT tagid, tag, yomi FROM Tag WHERE dbid=? ORDER BY yomi",
            (self._db_id,),
        ).fetchall()
        return [Tag(int(tagid), _text(tag), _text(yomi)) for tagid, tag, yomi in rows]

    def all_tagged_tag_ids(self) -> list[int]:
        """Ids of the tags attached to at least one item."""
        rows = self._store._execute(
            "SELECT DISTINCT tagid FROM Tagged WHERE dbid=?", (self._db_id,)
        ).fetchall()
        return [int(row[0]) for row in rows]

    def exists(self, tag: str) -> bool:
        """Tell whether a tag with this text exists."""
        row = self._store._execute(
            "SELECT tagid FROM Tag WHERE tag=? AND dbid=?", (tag, self._db_id)
        ).fetchone()
        return row is not None

    def insert(self, tag: str, yomi: str) -> int:
        """Add a tag and return its id."""
        cursor = self._store._execute(
            "REPLACE INTO Tag (tag,yomi,dbid) VALUES (?,?,?)",
            (tag, yomi, self._db_id),
        )
        return int(cursor.lastrowid)

    def tagged_ids(self, tagids: Iterable[int]) -> set[int]:
        """Ids of the items carrying any of ``tagids``."""
        ids = list(tagids)
        if not ids:
            return set()
        condition = " OR ".join("tagid=?" for _ in ids)
        rows = self._store._execute(
            f"SELECT id FROM Tagged WHERE ({condition}) AND dbid=?",
            (*ids, self._db_id),
        ).fetchall()
        return {int(row[0]) for row in rows}

    def set_tagged(self, item_id: int, tagid: int, value: bool) -> None:
        """Attach the tag to the item, or detach it when ``value`` is false."""
        if tagid <= 0 or item_id <= 0:
            raise ValueError("Tagid or ID is below 0.")
        if value:
            self._store._execute(
                "REPLACE INTO Tagged (id,tagid,dbid) VALUES (?,?,?)",
                (item_id, tagid, self._db_id),
            )
        else:
            self._store._execute(
                "DELETE FROM Tagged WHERE id=? AND tagid=? AND dbid=?",
                (item_id, tagid, self._db_id),
            )

    def get(self, tagid: int) -> tuple[str, str]:
        """The (tag, yomi) of ``tagid``, or two empty strings when absent."""
        row = self._store._execute(
            "SELECT tag,yomi FROM Tag WHERE tagid=? AND dbid=?", (tagid, self._db_id)
        ).fetchone()
        if row is None:
            return "", ""
        return _text(row[0]), _text(row[1])

    def replace(self, tagid: int, tag: str, yomi: str) -> None:
        """Change the text and reading of ``tagid``."""
        self._store._execute(
            "UPDATE Tag SET tag=?,yomi=? WHERE tagid=? AND dbid=?",
            (tag, yomi, tagid, self._db_id),
        )

    def delete(self, tagid: int) -> None:
        """Remove the tag ``tagid``."""
        self._store._execute(
            "DELETE FROM Tag WHERE tagid=? AND dbid=?", (tagid, self._db_id)
        )

    def tags_of(self, item_id: int) -> set[int]:
        """Ids of the tags attached to ``item_id``; empty for non-positive ids."""
        if item_id <= 0:
            return set()
        rows = self._store._execute(
            "SELECT tagid FROM Tagged WHERE id=? AND dbid=?", (item_id, self._db_id)
        ).fetchall()
        return {int(row[0]) for row in rows}

    def selected_and_checked(self, tagid: int) -> tuple[bool, bool]:
        """The stored (selected, checked) state of ``tagid``.

        Raises ``LookupError`` when the tag does not exist.
        """
        row = self._store._execute(
            "SELECT selected,checked FROM Tag WHERE tagid=? AND dbid=?",
            (tagid, self._db_id),
        ).fetchone()
        if row is None:
            raise LookupError(f"no tag with id {tagid}")
        return int(row[0] or 0) != 0, int(row[1] or 0) != 0

    def set_selected_and_checked(self, tagid: int, selected: bool, checked: bool) -> None:
        """Store the selection and check state of ``tagid``.

        Raises ``LookupError`` when the tag does not exist.
        """
        cursor = self._store._execute(
            "UPDATE Tag SET selected=?,checked=? WHERE tagid=? AND dbid=?",
            (1 if selected else 0, 1 if checked else 0, tagid, self._db_id),
        )
        if cursor.rowcount != 1:
            raise LookupError(f"no tag with id {tagid}")