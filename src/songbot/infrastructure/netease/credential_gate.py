# 🔐 songbot/infrastructure/netease/credential_gate.py
"""
🔐 Перевірка cookie перед запитом високої якості.

🔹 `probe` → True лише коли `/login/status` повертає непорожній `data.profile`.
🔹 Будь-який збій транспорту чи форми відповіді → False (тихе зниження якості).
🔹 Тільки для cookie відтворення успішна перевірка зберігає `netease.user_id`.
🔹 Результат не кешується: кожна доставка перевіряє cookie заново.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
import httpx

# 🔠 Системні імпорти
import asyncio
import logging
from typing import Mapping

# 🧩 Внутрішні модулі проєкту
from songbot.config.config_service import ConfigService
from songbot.domain.music.entities import CredentialKind
from songbot.shared.utils.logger import LOG_NAME
from .catalog_client import dig
from .http_client import NeteaseHttpClient

logger = logging.getLogger(LOG_NAME)

LOGIN_STATUS_PATH = "/login/status"


class CredentialGate:
    """🔐 Вибір та перевірка cookie за типом."""

    def __init__(self, config: ConfigService, http: NeteaseHttpClient) -> None:
        self._config = config
        self._http = http

    def cookie_for(self, kind: CredentialKind) -> str:
        """LIBRARY → cloud_cookie, PLAYBACK → song_cookie; обидва з відкатом на cookie."""
        specific = "netease.cloud_cookie" if kind is CredentialKind.LIBRARY else "netease.song_cookie"
        return str(self._config.get(specific) or self._config.get("netease.cookie") or "")

    async def probe(self, status_url: str, kind: CredentialKind) -> bool:
        cookie = self.cookie_for(kind)
        if not cookie:
            logger.info("🔐 [%s] cookie не задано, використаємо резервне джерело", kind.value)
            return False

        try:
            payload = await self._http.fetch_json("GET", status_url, cookie=cookie, bust_cache=True)
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("⚠️ [%s] перевірка cookie не вдалася: %s", kind.value, exc)
            return False

        profile = dig(payload, "data", "profile")
        if not isinstance(profile, Mapping) or not profile:
            logger.info("🔐 [%s] cookie недійсна, використаємо резервне джерело", kind.value)
            return False

        logger.info("🔐 [%s] cookie дійсна, завантажуємо у високій якості", kind.value)
        if kind is CredentialKind.PLAYBACK and profile.get("userId") is not None:
            await self._remember_user_id(profile["userId"])
        return True

    async def _remember_user_id(self, user_id: object) -> None:
        try:
            await asyncio.to_thread(self._config.update_field, "netease.user_id", user_id)
        except OSError as exc:
            logger.warning("⚠️ Не вдалося зберегти netease.user_id: %s", exc)


__all__ = ["CredentialGate", "LOGIN_STATUS_PATH"]
