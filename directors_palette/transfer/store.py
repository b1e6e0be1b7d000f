"""
store.py: Single-slot session stores for shot hand-off.

A store maps string keys to string values.  set_item() overwrites, get_item()
never consumes, remove_item() deletes; callers build "read once" semantics on
top (see bridge.retrieve_transferred_shots).

Two backends:

    MemorySessionStore   ← in-process dict; the default for library callers
    FileSessionStore     ← one file per key under <base_dir>/, so separate
                           CLI invocations can hand shots to each other

        <base_dir>/
            postProductionShots.json
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Dict, Optional, Protocol

_SAFE_KEY_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


class SessionStore(Protocol):
    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemorySessionStore:
    """Process-local store backed by a dict."""

    def __init__(self) -> None:
        self._items: Dict[str, str] = {}

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def clear(self) -> None:
        self._items.clear()


class FileSessionStore:
    """Directory-backed store: each key is ``<base_dir>/<key>.json``."""

    def __init__(self, base_dir: str | Path) -> None:
        self.base_dir = Path(base_dir)

    def _path(self, key: str) -> Path:
        if not _SAFE_KEY_RE.match(key):
            raise ValueError(f"Invalid session key: {key!r}")
        return self.base_dir / f"{key}.json"

    def get_item(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        """Overwrite the value for *key*.

        The value is written to a sibling temp file and renamed into place so
        a reader never sees a half-written slot.

        Raises:
            OSError: the directory or file cannot be written.
        """
        path = self._path(key)
        self.base_dir.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_suffix(".json.tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            f.write(value)
        tmp_path.replace(path)

    def remove_item(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)


_default_store = MemorySessionStore()


def get_default_store() -> MemorySessionStore:
    """Return the process-wide store used when callers pass ``store=None``."""
    return _default_store
