"""Back/forward navigation history of selected movies."""

from __future__ import annotations

from typing import Protocol


class HistoryListener(Protocol):
    """Receives notifications from a :class:`HistoryList`."""

    def select_item(self, movie: str) -> None:
        """Select ``movie`` in the view."""

    def update_tool_button(self) -> None:
        """Refresh the state of the navigation buttons."""


class HistoryList:
    """A browser-like history of (database id, movie) entries."""

    def __init__(self, listener: HistoryListener) -> None:
        self._listener = listener
        self._items: list[tuple[int, str]] = []
        self._current = -1

    @property
    def current(self) -> int:
        """Index of the current entry, or -1 when there is none."""
        return self._current

    def __len__(self) -> int:
        return len(self._items)

    def on_item_changed(self, item_id: int, movie: str) -> None:
        """Record that the selection moved to ``movie``.

        Entries after the current one are dropped. A repeat of the last
        entry is not recorded twice.
        """
        item = (item_id, movie)
        if not self._items:
            self._items.append(item)
            self._current = 0
        else:
            del self._items[self._current + 1:]
            self._current = len(self._items) - 1
            if self._items[-1] != item:
                self._items.append(item)
                self._current += 1
        self._listener.update_tool_button()

    def _activate(self, index: int) -> None:
        self._current = index
        self._listener.select_item(self._items[index][1])
        self._listener.update_tool_button()

    def go_back(self) -> None:
        """Move to the previous entry, if any."""
        if not self._items or self._current - 1 < 0:
            return
        self._activate(self._current - 1)

    def go_forward(self) -> None:
        """Move to the next entry, if any."""
        if not self._items or self._current + 1 >= len(self._items):
            return
        self._activate(self._current + 1)

    def go_last(self) -> None:
        """Move to the newest entry.

        Raises ``IndexError`` when the history is empty.
        """
        if not self._items:
            raise IndexError("history is empty")
        self._activate(len(self._items) - 1)

    def select(self, index: int) -> None:
        """Move to the entry at ``index``; out-of-range indexes are ignored."""
        if not 0 <= index < len(self._items):
            return
        self._activate(index)

    def can_go_back(self) -> bool:
        """Tell whether there is an entry before the current one."""
        return bool(self._items) and self._current > 0

    def can_go_forward(self) -> bool:
        """Tell whether there is an entry after the current one."""
        return bool(self._items) and self._current < len(self._items) - 1

    def is_last(self) -> bool:
        """Tell whether the current entry is the newest one."""
        return self._current >= 0 and self._current == len(self._items) - 1

    def clear(self) -> None:
        """Forget all entries."""
        self._items.clear()
        self._current = -1
        self._listener.update_tool_button()

    def current_db_id(self) -> int:
        """Database id of the current entry, or -1 when the history is empty."""
        if not self._items:
            return -1
        return self._items[self._current][0]

    def movie_at(self, index: int) -> str:
        """Movie of the entry at ``index``, or '' when out of range."""
        if not 0 <= index < len(self._items):
            return ""
        return self._items[index][1]

    def db_id_at(self, index: int) -> int:
        """Database id of the entry at ``index``, or -1 when out of range."""
        if not 0 <= index < len(self._items):
            return -1
        return self._items[index][0]