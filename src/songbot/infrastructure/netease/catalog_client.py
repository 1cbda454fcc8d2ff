# 🎼 songbot/infrastructure/netease/catalog_client.py
"""
🎼 Операції читання каталогу NetEase: пошук, деталі, вікі, URL треку.

Усі методи best-effort: збій транспорту чи неочікувана форма відповіді
дають порожній результат і запис у лог, винятки назовні не виходять.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

# 🧩 Внутрішні модулі проєкту
from songbot.config.setup.constants import CONST
from songbot.domain.music.entities import NO_COVER, SongUrl, Track, TrackDetail
from songbot.shared.utils.formatting import format_duration
from songbot.shared.utils.logger import LOG_NAME
from .http_client import NeteaseHttpClient

logger = logging.getLogger(LOG_NAME)


def dig(node: Any, *path: Any) -> Any:
    """
    Безпечний доступ до вкладених полів: ключі словників і індекси списків.
    Будь-яка відсутня ланка → None.
    """
    for step in path:
        if isinstance(step, int):
            if not isinstance(node, Sequence) or isinstance(node, str) or not -len(node) <= step < len(node):
                return None
            node = node[step]
        else:
            if not isinstance(node, Mapping):
                return None
            node = node.get(step)
        if node is None:
            return None
    return node


def normalize_cover(pic_url: Optional[str]) -> Optional[str]:
    """Заглушку NetEase замінюємо сентинелом «без обкладинки»."""
    if not pic_url:
        return None
    if CONST.AUDIO.PLACEHOLDER_COVER in pic_url:
        return NO_COVER
    return pic_url


def extract_wiki_tags(payload: Any) -> List[str]:
    """
    Теги з `/song/wiki/summary`: жанр, до трьох рекомендаційних тегів
    (або текстове посилання), BPM / мова. Неповна відповідь дає ті теги,
    які вдалося прочитати.
    """
    creatives = dig(payload, "data", "blocks", 1, "creatives")
    if not isinstance(creatives, list) or not creatives:
        return []

    tags: List[str] = []
    genre = dig(creatives, 0, "resources", 0, "uiElement", "mainTitle", "title")
    if genre:
        tags.append(str(genre))

    resources = dig(creatives, 1, "resources")
    if isinstance(resources, list) and resources:
        for resource in resources[:3]:
            title = dig(resource, "uiElement", "mainTitle", "title")
            if title:
                tags.append(str(title))
    else:
        link = dig(creatives, 1, "uiElement", "textLinks", 0, "text")
        if link:
            tags.append(str(link))

    label = dig(creatives, 2, "uiElement", "mainTitle", "title")
    text = dig(creatives, 2, "uiElement", "textLinks", 0, "text")
    if text:
        tags.append(f"BPM {text}" if label == "BPM" else str(text))
    return tags


class CatalogClient:
    """🎼 Клієнт каталогу поверх `NeteaseHttpClient`."""

    def __init__(self, http: NeteaseHttpClient) -> None:
        self._http = http

    async def search(self, keyword: str, limit: int) -> List[Track]:
        if limit <= 0 or not keyword:
            return []
        payload = await self._http.get_json("/search", params={"keywords": keyword, "limit": limit})
        songs = dig(payload, "result", "songs")
        if not isinstance(songs, list):
            logger.info("🔍 Каталог нічого не знайшов: %r", keyword)
            return []

        tracks: List[Track] = []
        for song in songs[:limit]:
            try:
                tracks.append(
                    Track(
                        id=int(song["id"]),
                        title=str(song.get("name") or ""),
                        artist=str(dig(song, "artists", 0, "name") or ""),
                        duration_label=format_duration(song.get("duration")),
                    )
                )
            except (KeyError, TypeError, ValueError) as exc:
                logger.debug("⚠️ Пропущено запис пошуку %r: %s", song, exc)
        return tracks

    async def detail(self, ids: Iterable[int]) -> Dict[int, TrackDetail]:
        id_list = [str(i) for i in ids]
        if not id_list:
            return {}
        payload = await self._http.get_json("/song/detail", params={"ids": ",".join(id_list)})
        songs = dig(payload, "songs")
        if not isinstance(songs, list):
            return {}

        details: Dict[int, TrackDetail] = {}
        for song in songs:
            try:
                song_id = int(song["id"])
            except (KeyError, TypeError, ValueError):
                continue
            details[song_id] = TrackDetail(
                title=str(song.get("name") or ""),
                artist=str(dig(song, "ar", 0, "name") or ""),
                cover_url=normalize_cover(dig(song, "al", "picUrl")),
            )
        return details

    async def wiki(self, song_id: int, cookie: Optional[str] = None) -> List[str]:
        payload = await self._http.get_json("/song/wiki/summary", params={"id": song_id}, cookie=cookie)
        return extract_wiki_tags(payload)

    async def song_url(self, song_id: int, level: str, cookie: Optional[str] = None) -> Optional[SongUrl]:
        payload = await self._http.get_json("/song/url/v1", params={"id": song_id, "level": level}, cookie=cookie)
        entry = dig(payload, "data", 0)
        if not isinstance(entry, Mapping):
            return None
        ext = entry.get("type")
        try:
            size = int(entry.get("size") or 0)
        except (TypeError, ValueError):
            size = 0
        return SongUrl(
            url=entry.get("url") or None,
            level=entry.get("level"),
            size=size,
            extension=str(ext).lower() if ext else None,
        )


__all__ = ["CatalogClient", "dig", "extract_wiki_tags", "normalize_cover"]
