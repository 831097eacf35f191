"""Persisted UI preferences."""

from __future__ import annotations

import logging
from enum import StrEnum

from pyiottu._constants import THEME_STORAGE_KEY
from pyiottu.storage import Storage

_logger = logging.getLogger(__name__)


class ThemeMode(StrEnum):
    DARK = "dark"
    LIGHT = "light"

    @property
    def opposite(self) -> ThemeMode:
        return ThemeMode.LIGHT if self is ThemeMode.DARK else ThemeMode.DARK


DEFAULT_THEME = ThemeMode.DARK


class ThemeStore:
    """Dark/light preference stored under ``@iottu:theme``.

    Any stored value other than ``dark`` or ``light`` is ignored.
    """

    def __init__(self, storage: Storage) -> None:
        self._storage = storage
        self.mode = DEFAULT_THEME

    @property
    def is_dark(self) -> bool:
        return self.mode is ThemeMode.DARK

    async def load(self) -> ThemeMode:
        try:
            stored = await self._storage.get_item(THEME_STORAGE_KEY)
        except OSError:
            _logger.debug("Could not read stored theme", exc_info=True)
            stored = None
        if stored in (ThemeMode.DARK.value, ThemeMode.LIGHT.value):
            self.mode = ThemeMode(stored)
        return self.mode

    async def set(self, mode: ThemeMode | str) -> ThemeMode:
        mode = ThemeMode(mode)
        await self._storage.set_item(THEME_STORAGE_KEY, mode.value)
        self.mode = mode
        return mode

    async def toggle(self) -> ThemeMode:
        return await self.set(self.mode.opposite)
