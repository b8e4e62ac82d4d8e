"""The list of watched directories with its special entries."""

from __future__ import annotations

import os
import threading
from enum import Enum
from typing import Callable, Iterable, Iterator


class DirectoryItemType(Enum):
    """Kind of entry in the directory list."""

    NORMAL = "normal"
    ALL = "all"
    MISSING = "missing"


def check_directory_async(
    directory: str, callback: Callable[[bool], None]
) -> threading.Thread:
    """Check in the background whether ``directory`` exists.

    ``callback`` receives the result on the worker thread. The started
    thread is returned.
    """

    def work() -> None:
        callback(os.path.isdir(directory))

    thread = threading.Thread(target=work, daemon=True)
    thread.start()
    return thread


class DirectoryItem:
    """One entry of a :class:`DirectoryEntry`.

    Only normal entries carry a real directory and can be checked.
    """

    def __init__(
        self,
        dirid: int,
        item_type: DirectoryItemType,
        directory: str = "",
        displaytext: str = "",
    ) -> None:
        item_type = DirectoryItemType(item_type)
        if item_type is DirectoryItemType.NORMAL and dirid <= 0:
            raise ValueError(f"normal directory item needs a positive id, got {dirid}")
        self.dirid = dirid
        self.item_type = item_type
        self.directory = directory
        self.displaytext_raw = displaytext
        self.selected = False
        self.checked = False
        self.checkable = item_type is DirectoryItemType.NORMAL
        self.tooltip = directory if self.checkable else ""
        self.exists: bool | None = None

    def __repr__(self) -> str:
        return (
            f"DirectoryItem({self.dirid!r}, {self.item_type}, "
            f"{self.directory!r}, {self.displaytext_raw!r})"
        )

    @property
    def displaytext(self) -> str:
        """The text shown for the entry: the display text or the directory."""
        return self.displaytext_raw or self.directory

    @displaytext.setter
    def displaytext(self, value: str) -> None:
        self.displaytext_raw = value

    def is_normal(self) -> bool:
        """Tell whether this is an ordinary directory entry."""
        return self.item_type is DirectoryItemType.NORMAL

    def is_all(self) -> bool:
        """Tell whether this is the 'show all' entry."""
        return self.item_type is DirectoryItemType.ALL

    def is_missing(self) -> bool:
        """Tell whether this is the 'missing files' entry."""
        return self.item_type is DirectoryItemType.MISSING

    def refresh(self) -> threading.Thread | None:
        """Recheck in the background whether the directory exists.

        The result lands in :attr:`exists`. Returns the worker thread, or
        ``None`` for entries that are not normal.
        """
        if not self.is_normal():
            return None

        def done(exists: bool) -> None:
            self.exists = exists

        return check_directory_async(self.directory, done)


class DirectoryEntry:
    """Ordered directory entries: 'show all' first, 'missing' last."""

    def __init__(self) -> None:
        self._items: list[DirectoryItem] = []

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[DirectoryItem]:
        return iter(list(self._items))

    def __getitem__(self, index: int) -> DirectoryItem:
        return self._items[index]

    def _take(self, item: DirectoryItem) -> DirectoryItem:
        self._items.remove(item)
        return item

    def _find(self, predicate: Callable[[DirectoryItem], bool]) -> DirectoryItem | None:
        return next((item for item in self._items if predicate(item)), None)

    def add_item(self, item: DirectoryItem) -> None:
        """Append ``item``, keeping the 'missing' entry at the end."""
        missing = self.take_missing_item()
        self._items.append(item)
        if missing is not None:
            self._items.append(missing)

    def insert_item(self, index: int, item: DirectoryItem) -> None:
        """Insert ``item`` at ``index``."""
        self._items.insert(index, item)

    def show_all_item(self) -> DirectoryItem:
        """Return the 'show all' entry; raise ``LookupError`` if absent."""
        item = self._find(DirectoryItem.is_all)
        if item is None:
            raise LookupError("no 'show all' entry")
        return item

    def take_show_all_item(self) -> DirectoryItem:
        """Remove and return the 'show all' entry; raise ``LookupError`` if absent."""
        return self._take(self.show_all_item())

    def take_missing_item(self) -> DirectoryItem | None:
        """Remove and return the 'missing' entry, or ``None`` if absent."""
        item = self._find(DirectoryItem.is_missing)
        return None if item is None else self._take(item)

    def checked_items(self) -> list[DirectoryItem]:
        """Normal entries that are checked."""
        return [item for item in self._items if item.is_normal() and item.checked]

    def normal_items(self) -> list[DirectoryItem]:
        """All normal entries."""
        return [item for item in self._items if item.is_normal()]

    def take_first_normal_item(self) -> DirectoryItem | None:
        """Remove and return the first normal entry, or ``None``."""
        item = self._find(DirectoryItem.is_normal)
        return None if item is None else self._take(item)

    def take_all_normal_items(self) -> list[DirectoryItem]:
        """Remove and return all normal entries in order."""
        taken = self.normal_items()
        self._items = [item for item in self._items if not item.is_normal()]
        return taken

    def set_check(self, dirs: Iterable[str], remove_selection: bool) -> None:
        """Check exactly the normal entries whose directory is in ``dirs``."""
        wanted = set(dirs)
        for item in self._items:
            if remove_selection:
                item.selected = False
            if item.is_normal():
                item.checked = item.directory in wanted

    def _special_selected_or_checked(self, item: DirectoryItem | None, name: str) -> bool:
        if item is None:
            raise LookupError(f"no '{name}' entry")
        return item.selected or item.checked

    def is_all_item_selected_or_checked(self) -> bool:
        """Tell whether the 'show all' entry is selected or checked."""
        return self._special_selected_or_checked(
            self._find(DirectoryItem.is_all), "show all"
        )

    def is_missing_item_selected_or_checked(self) -> bool:
        """Tell whether the 'missing' entry is selected or checked."""
        return self._special_selected_or_checked(
            self._find(DirectoryItem.is_missing), "missing"
        )

    def is_top_normal_item(self, row: int) -> bool:
        """Tell whether ``row`` is the first normal row."""
        if len(self._items) < row:
            return False
        return row == 1

    def is_bottom_normal_item(self, row: int) -> bool:
        """Tell whether ``row`` is the last normal row."""
        if len(self._items) < row:
            return False
        return row == len(self._items) - 2

    def _sort_normals(self, key: Callable[[DirectoryItem], str]) -> None:
        all_item = self.take_show_all_item()
        missing = self.take_missing_item()
        if missing is None:
            self.insert_item(0, all_item)
            raise LookupError("no 'missing' entry")
        normals = self.take_all_normal_items()
        for item in sorted(normals, key=key):
            self.add_item(item)
        self.insert_item(0, all_item)
        self.add_item(missing)

    def sort_by_directory(self) -> None:
        """Sort the normal entries by directory."""
        self._sort_normals(lambda item: item.directory)

    def sort_by_display_text(self) -> None:
        """Sort the normal entries by the text shown for them."""
        self._sort_normals(lambda item: item.displaytext)

    def selected_or_checked_items(self) -> list[DirectoryItem]:
        """Entries of any kind that are selected or checked."""
        return [item for item in self._items if item.selected or item.checked]

    def selected_first_directory(self) -> str:
        """Directory of the first selected entry, or '' if it is not normal."""
        item = self._find(lambda i: i.selected)
        if item is None or not item.is_normal():
            return ""
        return item.directory