# ⬇️ songbot/infrastructure/music/audio_downloader.py
"""
⬇️ Потокове завантаження аудіо на диск.

🔹 Стримить відповідь `httpx` у тимчасовий `.part`-файл поруч із ціллю.
🔹 Після успіху атомарно перейменовує `.part` у фінальний шлях.
🔹 Помилка → `.part` видаляється, виняток піднімається далі.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
import aiofiles
import httpx

# 🔠 Системні імпорти
import logging
import os
from pathlib import Path
from typing import Optional

# 🧩 Внутрішні модулі проєкту
from songbot.config.config_service import ConfigService
from songbot.config.setup.constants import CONST
from songbot.domain.music.interfaces import IAudioDownloader
from songbot.shared.utils.files import remove_file
from songbot.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.downloader")


class AudioDownloader(IAudioDownloader):
    """⬇️ Завантажує аудіо за URL у вказаний файл."""

    def __init__(
        self,
        config: ConfigService,
        client: Optional[httpx.AsyncClient] = None,
        *,
        chunk_size: int = 64 * 1024,
    ) -> None:
        user_agent = str(config.get("http.user_agent") or CONST.DEFAULTS.USER_AGENT)
        timeout = float(config.get("http.timeout_sec", CONST.DEFAULTS.HTTP_TIMEOUT_SEC) or CONST.DEFAULTS.HTTP_TIMEOUT_SEC)
        self._client = client or httpx.AsyncClient(
            headers={"User-Agent": user_agent},
            timeout=httpx.Timeout(timeout),
            follow_redirects=True,
        )
        self._owns_client = client is None
        self._chunk_size = int(chunk_size)

    async def download(self, url: str, dest_path: str) -> str:
        """
        Raises:
            ValueError: порожній URL або порожнє тіло відповіді.
            httpx.HTTPError: мережевий збій чи статус 4xx/5xx.
            OSError: помилка запису на диск.
        """
        if not url:
            raise ValueError("empty download url")

        target = Path(dest_path)
        target.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = f"{target}.part"
        bytes_written = 0
        logger.info("⬇️ download start: %s -> %s", url, target)

        try:
            async with self._client.stream("GET", url) as response:
                response.raise_for_status()
                async with aiofiles.open(tmp_path, "wb") as file_handle:
                    async for chunk in response.aiter_bytes(self._chunk_size):
                        if not chunk:
                            continue
                        await file_handle.write(chunk)
                        bytes_written += len(chunk)
            if bytes_written == 0:
                raise ValueError(f"empty response body: {url}")
            os.replace(tmp_path, target)							# 🔀 Ціль зʼявляється лише цілою
        except Exception:
            await remove_file(tmp_path)								# 🧹 Не лишаємо недокачаний файл
            raise

        logger.info("✅ download ok: %s (bytes=%d)", target, bytes_written)
        return str(target)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


__all__ = ["AudioDownloader"]
