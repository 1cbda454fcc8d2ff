# ☁️ songbot/infrastructure/netease/cloud_api.py
"""
☁️ Ендпоінти персональної хмари NetEase (`/user/cloud`, `/cloud`, `/cloud/match`).

Усі запити йдуть з cookie хмари (`CredentialKind.LIBRARY`).
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
import aiofiles
import httpx

# 🔠 Системні імпорти
import logging
import os
from typing import List, Optional

# 🧩 Внутрішні модулі проєкту
from songbot.config.config_service import ConfigService
from songbot.config.setup.constants import CONST
from songbot.domain.music.entities import CLOUD_DURATION_LABEL, CloudSummary, CredentialKind, Track
from songbot.errors.custom_errors import CloudApiError
from songbot.shared.utils.logger import LOG_NAME
from .catalog_client import dig
from .credential_gate import CredentialGate
from .http_client import NeteaseHttpClient

logger = logging.getLogger(LOG_NAME)


class CloudApi:
    """☁️ Читання та запис персональної хмари."""

    def __init__(self, config: ConfigService, http: NeteaseHttpClient, gate: CredentialGate) -> None:
        self._config = config
        self._http = http
        self._gate = gate

    @property
    def _cookie(self) -> str:
        return self._gate.cookie_for(CredentialKind.LIBRARY)

    async def list_songs(self) -> List[Track]:
        """
        Повний список пісень хмари сторінками по 100.

        Помилка сторінки зупиняє обхід: повертається те, що вже зібрано.
        """
        page_size = CONST.AUDIO.CLOUD_PAGE_SIZE
        offset = 0
        tracks: List[Track] = []
        while True:
            try:
                payload = await self._http.fetch_json(
                    "GET",
                    "/user/cloud",
                    params={"limit": page_size, "offset": offset},
                    cookie=self._cookie,
                    bust_cache=True,
                )
                songs = payload["data"]
                for song in songs:
                    tracks.append(
                        Track(
                            id=int(song["songId"]),
                            title=str(song.get("songName") or ""),
                            artist=str(song.get("artist") or CONST.AUDIO.CLOUD_ARTIST_PLACEHOLDER),
                            duration_label=CLOUD_DURATION_LABEL,
                        )
                    )
            except (httpx.HTTPError, ValueError, KeyError, TypeError) as exc:
                logger.error("❌ Не вдалося отримати сторінку хмари (offset=%s): %s", offset, exc)
                break
            if not payload.get("hasMore"):
                break
            offset += page_size
        logger.info("☁️ Отримано %d пісень із хмари", len(tracks))
        return tracks

    async def summary(self) -> CloudSummary:
        """Кількість пісень та використаний / доступний обсяг. Помилки HTTP піднімаються."""
        payload = await self._http.fetch_json("GET", "/user/cloud", cookie=self._cookie, bust_cache=True)
        return CloudSummary(
            count=int(dig(payload, "count") or 0),
            used_bytes=int(dig(payload, "size") or 0),
            max_bytes=int(dig(payload, "maxSize") or 0),
        )

    async def upload(self, path: str) -> int:
        """
        Завантажує файл у хмару та повертає ідентифікатор пісні в хмарі.

        Raises:
            httpx.HTTPError: збій транспорту.
            CloudApiError: відповідь без `code == 200` або без `privateCloud.songId`.
        """
        async with aiofiles.open(path, "rb") as file_handle:
            content = await file_handle.read()
        payload = await self._http.fetch_json(
            "POST",
            "/cloud",
            files={"songFile": (os.path.basename(path), content)},
            cookie=self._cookie,
            bust_cache=True,
        )
        code = dig(payload, "code")
        song_id = dig(payload, "privateCloud", "songId")
        if code != 200 or song_id is None:
            raise CloudApiError("Cloud upload rejected", details=f"code={code}")
        return int(song_id)

    async def match(self, cloud_song_id: int, catalog_id: int, user_id: Optional[object] = None) -> None:
        """Привʼязує завантажену копію до треку каталогу. Помилки піднімаються."""
        uid = user_id if user_id is not None else self._config.get("netease.user_id")
        payload = await self._http.fetch_json(
            "GET",
            "/cloud/match",
            params={"uid": uid if uid is not None else "", "sid": cloud_song_id, "asid": catalog_id},
            cookie=self._cookie,
            bust_cache=True,
        )
        code = dig(payload, "code")
        if code is not None and code != 200:
            raise CloudApiError("Cloud match rejected", details=f"code={code}")


__all__ = ["CloudApi"]
