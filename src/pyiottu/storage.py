"""Key/value persistence for client state (session, theme).

All stores implement the async :class:`Storage` protocol. Values are
strings; callers own their encoding.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
import threading
from pathlib import Path
from typing import Protocol

_logger = logging.getLogger(__name__)


class Storage(Protocol):
    """Async string key/value store."""

    async def get_item(self, key: str) -> str | None: ...

    async def set_item(self, key: str, value: str) -> None: ...

    async def remove_item(self, key: str) -> None: ...


class MemoryStorage:
    """Process-local store, used when no storage path is configured."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._items: dict[str, str] = dict(initial or {})

    async def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    async def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    async def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class JsonFileStorage:
    """Store backed by a single JSON object on disk.

    File I/O runs in the default executor. A missing or unreadable file
    reads as empty; writes replace the file atomically.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()

    def _read_all(self) -> dict[str, str]:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError:
            _logger.debug("Could not read %s", self.path, exc_info=True)
            return {}
        try:
            data = json.loads(text)
        except ValueError:
            _logger.debug("Ignoring corrupt storage file %s", self.path)
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write_all(self, items: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(items, ensure_ascii=False, indent=2), encoding="utf-8")
        os.replace(tmp, self.path)

    def _get(self, key: str) -> str | None:
        with self._lock:
            return self._read_all().get(key)

    def _set(self, key: str, value: str) -> None:
        with self._lock:
            items = self._read_all()
            items[key] = value
            self._write_all(items)

    def _remove(self, key: str) -> None:
        with self._lock:
            items = self._read_all()
            if items.pop(key, None) is not None:
                self._write_all(items)

    async def get_item(self, key: str) -> str | None:
        return await asyncio.get_running_loop().run_in_executor(None, self._get, key)

    async def set_item(self, key: str, value: str) -> None:
        await asyncio.get_running_loop().run_in_executor(None, self._set, key, value)

    async def remove_item(self, key: str) -> None:
        await asyncio.get_running_loop().run_in_executor(None, self._remove, key)


def storage_for_path(path: str | os.PathLike[str] | None) -> Storage:
    """``JsonFileStorage`` for a path, ``MemoryStorage`` for ``None``."""
    if path is None:
        return MemoryStorage()
    return JsonFileStorage(path)
