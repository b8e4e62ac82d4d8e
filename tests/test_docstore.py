import os

import pytest

from scenedex.directories import DirectoryItem, DirectoryItemType
from scenedex.docstore import DOC_DB_VERSION, DocumentStore, DocumentStoreError


@pytest.fixture
def doc_path(tmp_path):
    return str(tmp_path / "doc.scexd")


@pytest.fixture
def store(doc_path):
    with DocumentStore(doc_path, "db-1") as s:
        yield s


def test_new_document_stores_current_version(store):
    row = store.connection.execute("SELECT version FROM DbInfoDoc WHERE id=1").fetchone()
    assert row[0] == DOC_DB_VERSION
    assert DOC_DB_VERSION == 2


def test_tables_are_created(store):
    names = {
        r[0]
        for r in store.connection.execute(
            "SELECT name FROM sqlite_master WHERE type='table'"
        )
    }
    assert {"Settings", "Directories", "Access", "Tag", "Tagged", "DbInfoDoc"} <= names


def test_higher_version_is_rejected(doc_path):
    with DocumentStore(doc_path, "db-1") as s:
        s.connection.execute("UPDATE DbInfoDoc SET version=?", (DOC_DB_VERSION + 1,))
    with pytest.raises(DocumentStoreError, match="higher than this client"):
        DocumentStore(doc_path, "db-1")


def test_unopenable_path_raises(tmp_path):
    with pytest.raises(DocumentStoreError):
        DocumentStore(str(tmp_path), "db-1")


def test_not_a_database_raises(tmp_path):
    bad = tmp_path / "bad.db"
    bad.write_bytes(b"this is definitely not an sqlite database file" * 20)
    with pytest.raises(DocumentStoreError):
        DocumentStore(str(bad), "db-1")


def test_flags_default_false(store):
    assert store.is_dir_all_selected() is False
    assert store.is_dir_all_checked() is False
    assert store.is_tag_all_selected() is False
    assert store.is_tag_notags_selected() is False


@pytest.mark.parametrize(
    "setter,getter",
    [
        ("set_dir_all_selected", "is_dir_all_selected"),
        ("set_dir_all_checked", "is_dir_all_checked"),
        ("set_tag_all_selected", "is_tag_all_selected"),
        ("set_tag_notags_selected", "is_tag_notags_selected"),
    ],
)
def test_flags_round_trip_and_persist(doc_path, setter, getter):
    with DocumentStore(doc_path, "db-1") as s:
        getattr(s, setter)(True)
        assert getattr(s, getter)() is True
    with DocumentStore(doc_path, "db-1") as s:
        assert getattr(s, getter)() is True
        getattr(s, setter)(False)
        assert getattr(s, getter)() is False


def test_last_pos_round_trip(store):
    assert store.last_pos() == (0, 0)
    store.set_last_pos(12, 3)
    assert store.last_pos() == (12, 3)


def test_insert_directory_normalizes(store, tmp_path):
    raw = os.path.join(str(tmp_path), "a", "..", "movies")
    item = store.insert_directory(raw, "Films")
    assert item.dirid > 0
    assert item.is_normal()
    assert item.directory == os.path.normpath(os.path.join(str(tmp_path), "movies"))
    assert item.displaytext == "Films"
    assert store.dir_count() == 1
    assert store.dir_text(item.dirid) == item.directory


def test_dir_text_missing_is_empty(store):
    assert store.dir_text(99) == ""
    assert store.is_dir_selected(99) is False
    assert store.is_dir_checked(99) is False


def test_update_directory(store, tmp_path):
    item = store.insert_directory(str(tmp_path / "x"), "")
    store.update_directory(item.dirid, str(tmp_path / "y"), "Why")
    dirs = store.all_dirs()
    assert [d.directory for d in dirs] == [os.path.abspath(str(tmp_path / "y"))]
    assert dirs[0].displaytext == "Why"


def test_update_directory_empty_raises(store, tmp_path):
    item = store.insert_directory(str(tmp_path), "")
    with pytest.raises(DocumentStoreError, match="empty"):
        store.update_directory(item.dirid, "", "t")


def test_update_directory_unknown_id_raises(store, tmp_path):
    with pytest.raises(DocumentStoreError):
        store.update_directory(1234, str(tmp_path), "t")


def test_set_directory_and_state(store):
    item = DirectoryItem(5, DirectoryItemType.NORMAL, "/m/one", "One")
    item.selected = True
    store.set_directory(1, item)
    assert store.dir_text(1) == "/m/one"
    assert store.is_dir_selected(1) is True
    assert store.is_dir_checked(1) is False

    stored = store.all_dirs()[0]
    stored.selected = False
    stored.checked = True
    store.set_dir_normal_item_state(stored)
    assert store.is_dir_selected(1) is False
    assert store.is_dir_checked(1) is True


def test_set_directory_replaces(store):
    store.set_directory(1, DirectoryItem(1, DirectoryItemType.NORMAL, "/a", ""))
    store.set_directory(1, DirectoryItem(1, DirectoryItemType.NORMAL, "/b", ""))
    assert store.dir_count() == 1
    assert store.dir_text(1) == "/b"


def test_remove_directory_over(store):
    for i, d in enumerate(["/a", "/b", "/c"], start=1):
        store.set_directory(i, DirectoryItem(i, DirectoryItemType.NORMAL, d, ""))
    store.remove_directory_over(1)
    assert store.dir_count() == 1
    assert [d.directory for d in store.all_dirs()] == ["/a"]


def test_all_dirs_restores_items(store):
    item = DirectoryItem(1, DirectoryItemType.NORMAL, "/a", "Alpha")
    item.checked = True
    store.set_directory(1, item)
    store.set_directory(2, DirectoryItem(2, DirectoryItemType.NORMAL, "/b", ""))
    dirs = store.all_dirs()
    assert [(d.dirid, d.directory, d.displaytext_raw) for d in dirs] == [
        (1, "/a", "Alpha"),
        (2, "/b", ""),
    ]
    assert [d.checked for d in dirs] == [True, False]
    assert all(d.is_normal() for d in dirs)


def test_use_after_close_raises(doc_path):
    s = DocumentStore(doc_path, "db-1")
    s.close()
    with pytest.raises(DocumentStoreError):
        s.dir_count()


def test_reopen_keeps_directories(doc_path):
    with DocumentStore(doc_path, "db-1") as s:
        s.set_directory(1, DirectoryItem(1, DirectoryItemType.NORMAL, "/keep", ""))
    with DocumentStore(doc_path, "db-1") as s:
        assert s.dir_text(1) == "/keep"
        assert s.db_id == "db-1"