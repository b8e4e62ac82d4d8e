"""Movie file extension filtering."""

from __future__ import annotations

import threading
from typing import Any, Iterable, MutableMapping

KEY_EXTENSION_ORDERALLOW = "ExtensionOrderAllow"
KEY_EXTENSION_ORDERALLOW_DEFAULT = True
KEY_ALLOW_EXTENSIONS = "AllowExtensions"
KEY_DENY_EXTENSIONS = "DenyExtensions"

ALL_EXTENSIONS = "*"
NO_EXTENSION = "noext"

_DEFAULT_ALLOW = (
    ".3g2", ".3gp", ".amv", ".asf", ".avi", ".avs", ".divx", ".drc",
    ".f4a", ".f4b", ".f4p", ".f4v", ".flv", ".m2v", ".m4p", ".m4v",
    ".mkv", ".mng", ".mov", ".mp2", ".mp4", ".mpe", ".mpeg", ".mpg",
    ".mpv", ".mxf", ".nsv", ".ogg", ".ogm", ".ogv", ".qt", ".rm",
    ".rmvb", ".roq", ".svi", ".swf", ".vob", ".webm", ".wmv", ".yuv",
)


def default_allow() -> list[str]:
    """Return the default list of allowed movie extensions."""
    return list(_DEFAULT_ALLOW)


def default_deny() -> list[str]:
    """Return the default list of denied extensions (empty)."""
    return []


def string_list_to_string(items: Iterable[str]) -> str:
    """Join items with newlines and strip surrounding whitespace."""
    return "\n".join(items).strip()


def get_extension(file: str) -> str:
    """Return the lower-cased extension of ``file`` including the dot, or ''."""
    dot = file.rfind(".")
    if dot < 0:
        return ""
    ext = file[dot:]
    if "/" in ext or "\\" in ext:
        return ""
    return ext.lower()


def _to_string_list(value: Any) -> list[str]:
    if isinstance(value, str):
        return [value]
    return [str(v) for v in value]


class _Rule:
    """Parsed form of one extension list."""

    def __init__(self, exts: Iterable[str]) -> None:
        self.exts = list(exts)
        self.all = ALL_EXTENSIONS in self.exts
        self.no_ext = NO_EXTENSION in self.exts
        self.cache = {e for e in self.exts if e not in (ALL_EXTENSIONS, NO_EXTENSION)}


class ExtensionFilter:
    """Decides whether a file name looks like a movie.

    In allow order only listed extensions pass; in deny order everything
    passes except what is excluded. ``"*"`` stands for every extension and
    ``"noext"`` for files without an extension.
    """

    def __init__(
        self,
        order_allow: bool = KEY_EXTENSION_ORDERALLOW_DEFAULT,
        allow: Iterable[str] | None = None,
        deny: Iterable[str] | None = None,
    ) -> None:
        self._lock = threading.RLock()
        self.order_allow = order_allow
        self._allow = _Rule(default_allow() if allow is None else allow)
        self._deny = _Rule(default_deny() if deny is None else deny)

    @property
    def allow(self) -> list[str]:
        """The allowed extensions as given."""
        with self._lock:
            return list(self._allow.exts)

    @property
    def deny(self) -> list[str]:
        """The denied extensions as given."""
        with self._lock:
            return list(self._deny.exts)

    def set_allow(self, exts: Iterable[str]) -> None:
        """Replace the allowed extensions."""
        rule = _Rule(exts)
        with self._lock:
            self._allow = rule

    def set_deny(self, exts: Iterable[str]) -> None:
        """Replace the denied extensions."""
        rule = _Rule(exts)
        with self._lock:
            self._deny = rule

    def allow_as_string(self) -> str:
        """The allowed extensions, one per line."""
        return string_list_to_string(self.allow)

    def deny_as_string(self) -> str:
        """The denied extensions, one per line."""
        return string_list_to_string(self.deny)

    def is_movie_extension(self, file: str) -> bool:
        """Tell whether ``file`` passes the filter."""
        with self._lock:
            if self.order_allow:
                if self._allow.all:
                    return True
                ext = get_extension(file)
                if not ext:
                    return self._allow.no_ext
                return ext in self._allow.cache

            if self._deny.all:
                return False
            ext = get_extension(file)
            if not ext:
                return not self._deny.no_ext
            # Ordinary extensions are looked up in the allow set in this order too.
            return ext not in self._allow.cache

    def load(self, settings: MutableMapping[str, Any]) -> None:
        """Read order and lists from ``settings``, falling back to defaults."""
        with self._lock:
            self.order_allow = bool(
                settings.get(KEY_EXTENSION_ORDERALLOW, KEY_EXTENSION_ORDERALLOW_DEFAULT)
            )
            allow = settings.get(KEY_ALLOW_EXTENSIONS)
            self.set_allow(default_allow() if allow is None else _to_string_list(allow))
            deny = settings.get(KEY_DENY_EXTENSIONS)
            self.set_deny(default_deny() if deny is None else _to_string_list(deny))

    def save(self, settings: MutableMapping[str, Any]) -> None:
        """Write order and lists to ``settings``."""
        with self._lock:
            settings[KEY_EXTENSION_ORDERALLOW] = self.order_allow
            settings[KEY_ALLOW_EXTENSIONS] = self.allow
            settings[KEY_DENY_EXTENSIONS] = self.deny