# 🌐 songbot/infrastructure/netease/http_client.py
"""
🌐 Спільний HTTP-транспорт до API каталогу.

🔹 Один `httpx.AsyncClient` на процес (таймаут і User-Agent з конфігу).
🔹 Відносні шляхи (`/search`) доповнюються базовим URL від `RegionSelector`.
🔹 `fetch_json` піднімає винятки, `get_json`: best-effort (None + лог).
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
import httpx

# 🔠 Системні імпорти
import logging
import time
from typing import Any, Dict, Mapping, Optional

# 🧩 Внутрішні модулі проєкту
from songbot.config.config_service import ConfigService
from songbot.config.setup.constants import CONST
from songbot.shared.utils.logger import LOG_NAME
from .region_selector import RegionSelector

logger = logging.getLogger(LOG_NAME)


class NeteaseHttpClient:
    """🌐 Тонка обгортка над httpx для JSON-ендпоінтів каталогу."""

    def __init__(
        self,
        config: ConfigService,
        region: RegionSelector,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._region = region
        self._user_agent = str(config.get("http.user_agent") or CONST.DEFAULTS.USER_AGENT)
        timeout = float(config.get("http.timeout_sec", CONST.DEFAULTS.HTTP_TIMEOUT_SEC) or CONST.DEFAULTS.HTTP_TIMEOUT_SEC)
        self._client = client or httpx.AsyncClient(timeout=httpx.Timeout(timeout), follow_redirects=True)
        self._owns_client = client is None

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client

    async def url_for(self, path: str) -> str:
        """Повний URL для шляху API; абсолютні URL повертаються без змін."""
        if path.startswith(("http://", "https://")):
            return path
        base = await self._region.resolve_base_url()
        return f"{base}{path}"

    def headers(self, cookie: Optional[str] = None) -> Dict[str, str]:
        headers = {"User-Agent": self._user_agent}
        if cookie:
            headers["Cookie"] = cookie
        return headers

    async def fetch_json(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        cookie: Optional[str] = None,
        files: Optional[Mapping[str, Any]] = None,
        bust_cache: bool = False,
    ) -> Any:
        """
        Виконує запит і повертає розібраний JSON.

        Raises:
            httpx.HTTPError: мережеві збої та статуси 4xx/5xx.
            ValueError: тіло відповіді не є JSON.
        """
        query: Dict[str, Any] = dict(params or {})
        if bust_cache:
            query["timestamp"] = int(time.time() * 1000)				# 🕒 API кешує GET-відповіді
        url = await self.url_for(path)
        response = await self._client.request(
            method,
            url,
            params=query or None,
            headers=self.headers(cookie),
            files=files,
        )
        response.raise_for_status()
        return response.json()

    async def get_json(
        self,
        path: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        cookie: Optional[str] = None,
        bust_cache: bool = False,
    ) -> Optional[Any]:
        """Best-effort GET: будь-яка помилка транспорту чи парсингу → None."""
        try:
            return await self.fetch_json("GET", path, params=params, cookie=cookie, bust_cache=bust_cache)
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("⚠️ GET %s не вдався: %s", path, exc)
            return None

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


__all__ = ["NeteaseHttpClient"]
