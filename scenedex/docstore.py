"""SQLite storage of a document: settings and watched directories."""

from __future__ import annotations

import os
import sqlite3
import uuid
from typing import Any, Iterable

from .directories import DirectoryItem, DirectoryItemType

DOC_DB_VERSION = 2

_SCHEMA_STATEMENTS = (
    "CREATE TABLE Settings ( "
    "id INTEGER NOT NULL PRIMARY KEY,"
    "allselected INT NOT NULL DEFAULT '0',"
    "allchecked INT NOT NULL DEFAULT '0',"
    "lastrow INT NOT NULL DEFAULT '0',"
    "lastcolumn INT NOT NULL DEFAULT '0'"
    ")",
    "ALTER TABLE Settings ADD COLUMN alltagselected INT NOT NULL DEFAULT '0'",
    "ALTER TABLE Settings ADD COLUMN notagstagselected INT NOT NULL DEFAULT '0'",
)

_DIRECTORY_STATEMENTS = (
    "CREATE TABLE Directories ( "
    "id INTEGER NOT NULL PRIMARY KEY,"
    "directory TEXT,"
    "selected INT,"
    "checked INT)",
)

_ACCESS_STATEMENTS = (
    "CREATE TABLE Access ( "
    "id INTEGER NOT NULL,"
    "opencount INT NOT NULL DEFAULT 0,"
    "lastaccess INT,"
    "dbid TEXT NOT NULL)",
    "CREATE UNIQUE INDEX idx_Access_id_dbid ON Access(id,dbid)",
)

_TAG_STATEMENTS = (
    "CREATE TABLE Tag ( "
    "tagid INTEGER NOT NULL PRIMARY KEY AUTOINCREMENT,"
    "tag,"
    "yomi,"
    "dbid TEXT NOT NULL)",
    "CREATE UNIQUE INDEX idx_Tag_tagid_dbid ON Tag(tagid,dbid)",
    "ALTER TABLE Tag ADD COLUMN selected INT NOT NULL DEFAULT '0'",
    "ALTER TABLE Tag ADD COLUMN checked INT NOT NULL DEFAULT '0'",
)

_TAGGED_STATEMENTS = (
    "CREATE TABLE Tagged ( "
    "id INTEGER NOT NULL,"
    "tagid INTEGER NOT NULL,"
    "dbid TEXT NOT NULL)",
    "CREATE UNIQUE INDEX idx_Tagged_id_tagid_dbid ON Tagged(id,tagid,dbid)",
)

_SETTING_COLUMNS = frozenset(
    {"allselected", "allchecked", "alltagselected", "notagstagselected"}
)


class DocumentStoreError(Exception):
    """Raised when the document database cannot be opened or used."""


def _normalize_dir(directory: str) -> str:
    if not directory:
        return ""
    return os.path.normpath(os.path.abspath(directory))


class DocumentStore:
    """A document database holding settings, directories, tags and access data.

    ``db_id`` identifies the movie database the tag and access rows belong to.
    """

    def __init__(self, path: str, db_id: str) -> None:
        self.path = path
        self.db_id = db_id
        try:
            self.connection = sqlite3.connect(path, isolation_level=None)
        except sqlite3.Error as exc:
            raise DocumentStoreError(str(exc)) from exc
        try:
            self._prepare()
        except sqlite3.Error as exc:
            self.connection.close()
            raise DocumentStoreError(str(exc)) from exc
        except DocumentStoreError:
            self.connection.close()
            raise

    # -- setup -----------------------------------------------------------

    def _try(self, statements: Iterable[str]) -> None:
        for sql in statements:
            try:
                self.connection.execute(sql)
            except sqlite3.OperationalError:
                pass

    def _table_exists(self, name: str) -> bool:
        row = self.connection.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name=?", (name,)
        ).fetchone()
        return row is not None and row[0] == name

    def _require_table(self, name: str) -> None:
        if not self._table_exists(name):
            raise DocumentStoreError(f"Table {name} could not be created.")

    def _create_db_info_table(self) -> None:
        self._try(
            (
                "CREATE TABLE DbInfoDoc( id INTEGER PRIMARY KEY)",
                "ALTER TABLE DbInfoDoc ADD COLUMN version INTEGER",
            )
        )
        columns = [
            row[1]
            for row in self.connection.execute("PRAGMA table_info('DbInfoDoc')")
        ]
        if len(columns) != 2:
            raise DocumentStoreError("Table DbInfoDoc has unexpected columns.")
        if (
            self.connection.execute("SELECT * FROM DbInfoDoc WHERE id=1").fetchone()
            is None
        ):
            self.connection.execute("INSERT INTO DbInfoDoc (id) VALUES (1)")

    def _check_writable(self) -> None:
        self._try(("DROP TABLE Test",))
        token = str(uuid.uuid4())
        self._try(("CREATE TABLE Test ( testdata TEXT)",))
        self.connection.execute("INSERT INTO Test (testdata) VALUES (?)", (token,))
        row = self.connection.execute("SELECT testdata FROM Test").fetchone()
        if row is None or row[0] != token:
            raise DocumentStoreError("Writing to Test DB failed")

    def _db_version(self) -> int:
        row = self.connection.execute(
            "SELECT version FROM DbInfoDoc WHERE id=1"
        ).fetchone()
        if row is None:
            raise DocumentStoreError("DbInfoDoc has no version record.")
        return int(row[0] or 0)

    def _prepare(self) -> None:
        self._create_db_info_table()
        self._check_writable()
        version = self._db_version()

        self._try(_SCHEMA_STATEMENTS)
        if (
            self._table_exists("Settings")
            and self.connection.execute(
                "SELECT id FROM Settings WHERE id=1"
            ).fetchone()
            is None
        ):
            self.connection.execute("INSERT INTO Settings (id) VALUES (1)")
        self._require_table("Settings")

        self._try(_DIRECTORY_STATEMENTS)
        self._require_table("Directories")
        self._try(("ALTER TABLE Directories Add displaytext",))

        self._try(_ACCESS_STATEMENTS)
        self._require_table("Access")

        self._try(_TAG_STATEMENTS)
        self._require_table("Tag")

        self._try(_TAGGED_STATEMENTS)
        self._require_table("Tagged")

        if version != DOC_DB_VERSION:
            if version > DOC_DB_VERSION:
                raise DocumentStoreError(
                    f"Database version(={version}) is higher than this "
                    f"client(={DOC_DB_VERSION}). Please update SceneExplorer."
                )
            self.connection.execute(
                "UPDATE DbInfoDoc SET version=?", (DOC_DB_VERSION,)
            )

    # -- lifetime --------------------------------------------------------

    def close(self) -> None:
        """Close the database; further use raises :class:`DocumentStoreError`."""
        self.connection.close()

    def __enter__(self) -> DocumentStore:
        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        self.close()

    # -- query helpers ---------------------------------------------------

    def _execute(self, sql: str, params: tuple[Any, ...] = ()) -> sqlite3.Cursor:
        try:
            return self.connection.execute(sql, params)
        except sqlite3.Error as exc:
            raise DocumentStoreError(str(exc)) from exc

    def _fetch_one(self, sql: str, params: tuple[Any, ...] = ()) -> Any:
        return self._execute(sql, params).fetchone()

    # -- settings flags --------------------------------------------------

    def _setting_flag(self, column: str) -> bool:
        if column not in _SETTING_COLUMNS:
            raise ValueError(f"unknown settings column: {column!r}")
        row = self._fetch_one(f"SELECT {column} FROM Settings WHERE id=1")
        if row is None or row[0] is None:
            return False
        try:
            return int(row[0]) != 0
        except (TypeError, ValueError):
            return False

    def _set_setting_flag(self, column: str, value: bool) -> None:
        if column not in _SETTING_COLUMNS:
            raise ValueError(f"unknown settings column: {column!r}")
        self._execute(
            f"UPDATE Settings SET {column}=? WHERE id=1", (1 if value else 0,)
        )

    def is_dir_all_selected(self) -> bool:
        """Whether the 'show all' directory entry was selected."""
        return self._setting_flag("allselected")

    def set_dir_all_selected(self, value: bool) -> None:
        """Store whether the 'show all' directory entry is selected."""
        self._set_setting_flag("allselected", value)

    def is_dir_all_checked(self) -> bool:
        """Whether the 'show all' directory entry was checked."""
        return self._setting_flag("allchecked")

    def set_dir_all_checked(self, value: bool) -> None:
        """Store whether the 'show all' directory entry is checked."""
        self._set_setting_flag("allchecked", value)

    def is_tag_all_selected(self) -> bool:
        """Whether the 'all' tag entry was selected."""
        return self._setting_flag("alltagselected")

    def set_tag_all_selected(self, value: bool) -> None:
        """Store whether the 'all' tag entry is selected."""
        self._set_setting_flag("alltagselected", value)

    def is_tag_notags_selected(self) -> bool:
        """Whether the 'no tags' tag entry was selected."""
        return self._setting_flag("notagstagselected")

    def set_tag_notags_selected(self, value: bool) -> None:
        """Store whether the 'no tags' tag entry is selected."""
        self._set_setting_flag("notagstagselected", value)

    # -- directories -----------------------------------------------------

    def dir_count(self) -> int:
        """Number of stored directories."""
        row = self._fetch_one("SELECT count(*) FROM Directories")
        return 0 if row is None else int(row[0])

    def dir_text(self, index: int) -> str:
        """Directory stored under id ``index``, or '' when there is none."""
        row = self._fetch_one("SELECT directory FROM Directories WHERE id=?", (index,))
        if row is None or row[0] is None:
            return ""
        return str(row[0])

    def set_directory(self, index: int, item: DirectoryItem) -> None:
        """Store ``item`` under id ``index``, replacing what was there."""
        self._execute(
            "INSERT OR REPLACE INTO Directories "
            "(id, directory, selected, checked, displaytext) VALUES (?,?,?,?,?)",
            (
                index,
                item.directory,
                1 if item.selected else 0,
                1 if item.checked else 0,
                item.displaytext_raw,
            ),
        )

    def _dir_flag(self, column: str, index: int) -> bool:
        row = self._fetch_one(f"SELECT {column} FROM Directories WHERE id=?", (index,))
        if row is None or row[0] is None:
            return False
        return int(row[0]) != 0

    def is_dir_selected(self, index: int) -> bool:
        """Whether the directory with id ``index`` was selected."""
        return self._dir_flag("selected", index)

    def is_dir_checked(self, index: int) -> bool:
        """Whether the directory with id ``index`` was checked."""
        return self._dir_flag("checked", index)

    def remove_directory_over(self, index: int) -> None:
        """Delete directories whose id is greater than ``index``."""
        self._execute("DELETE FROM Directories WHERE id > ?", (index,))

    def set_dir_normal_item_state(self, item: DirectoryItem) -> None:
        """Store the selection and check state of ``item``."""
        self._execute(
            "UPDATE Directories SET selected=?, checked=? WHERE id=?",
            (1 if item.selected else 0, 1 if item.checked else 0, item.dirid),
        )

    def set_last_pos(self, row: int, column: int) -> None:
        """Store the last position in the movie table."""
        self._execute(
            "UPDATE Settings SET lastrow=?, lastcolumn=? WHERE id=1", (row, column)
        )

    def last_pos(self) -> tuple[int, int] | None:
        """The stored (row, column) position, or ``None`` when unavailable."""
        result = self._fetch_one("SELECT lastrow, lastcolumn FROM Settings WHERE id=1")
        if result is None:
            return None
        try:
            return int(result[0]), int(result[1])
        except (TypeError, ValueError):
            return None

    def all_dirs(self) -> list[DirectoryItem]:
        """All stored directories as normal entries, in id order."""
        rows = self._execute(
            "SELECT id, directory, selected, checked, displaytext "
            "FROM Directories ORDER BY id"
        ).fetchall()
        items = []
        for dirid, directory, selected, checked, displaytext in rows:
            item = DirectoryItem(
                int(dirid),
                DirectoryItemType.NORMAL,
                directory or "",
                displaytext or "",
            )
            item.selected = bool(selected)
            item.checked = bool(checked)
            items.append(item)
        return items

    def insert_directory(self, directory: str, displaytext: str) -> DirectoryItem:
        """Add a directory and return it as a new normal entry."""
        normalized = _normalize_dir(directory)
        cursor = self._execute(
            "INSERT INTO Directories (directory,displaytext) VALUES (?,?)",
            (normalized, displaytext),
        )
        dirid = cursor.lastrowid
        if not dirid or dirid <= 0:
            raise DocumentStoreError("Failed to obtain the id of the new directory.")
        return DirectoryItem(dirid, DirectoryItemType.NORMAL, normalized, displaytext)

    def update_directory(self, dirid: int, directory: str, displaytext: str) -> None:
        """Change the directory and display text stored under ``dirid``."""
        normalized = _normalize_dir(directory)
        if not normalized:
            raise DocumentStoreError("Directory is empty.")
        cursor = self._execute(
            "UPDATE Directories SET directory=?,displaytext=? WHERE id=?",
            (normalized, displaytext, dirid),
        )
        if cursor.rowcount != 1:
            raise DocumentStoreError(f"No directory with id {dirid}.")