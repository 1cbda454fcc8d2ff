# ☁️ songbot/infrastructure/music/personal_library.py
"""
☁️ Кеш персональної хмари (знімок списку пісень).

🔹 Знімок завантажується повністю при першому використанні або `refresh()`.
🔹 `clear()` очищує знімок цілком; пошук лише читає його.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging
from typing import Iterable, List

# 🧩 Внутрішні модулі проєкту
from songbot.config.setup.constants import CONST
from songbot.domain.music.entities import Track
from songbot.domain.music.interfaces import IKeyValueStore
from songbot.infrastructure.netease.cloud_api import CloudApi
from songbot.shared.utils.logger import LOG_NAME

logger = logging.getLogger(LOG_NAME)


def match_tracks(tracks: Iterable[Track], keyword: str) -> List[Track]:
    """Треки, у назві чи виконавці яких є `keyword` (або точний збіг)."""
    needle = keyword.strip()
    if not needle:
        return []
    return [
        track
        for track in tracks
        if needle in track.title or needle in track.artist or track.title == needle or track.artist == needle
    ]


class PersonalLibrary:
    """☁️ Знімок хмари у key-value сховищі."""

    def __init__(self, store: IKeyValueStore, cloud_api: CloudApi) -> None:
        self._store = store
        self._cloud_api = cloud_api

    async def snapshot(self) -> List[Track]:
        """Поточний знімок; порожній кеш завантажується з API."""
        cached = await self._store.get(CONST.CACHE_KEYS.CLOUD_LIBRARY) or []
        if cached:
            return [Track.from_dict(item) for item in cached]
        return await self.refresh()

    async def refresh(self) -> List[Track]:
        """Повністю перечитує хмару і замінює знімок."""
        tracks = await self._cloud_api.list_songs()
        await self._store.set(CONST.CACHE_KEYS.CLOUD_LIBRARY, [track.to_dict() for track in tracks])
        logger.info("☁️ Знімок хмари оновлено: %d пісень", len(tracks))
        return tracks

    async def clear(self) -> None:
        await self._store.delete(CONST.CACHE_KEYS.CLOUD_LIBRARY)
        logger.info("🧹 Знімок хмари очищено")

    async def search(self, keyword: str) -> List[Track]:
        return match_tracks(await self.snapshot(), keyword)


__all__ = ["PersonalLibrary", "match_tracks"]
