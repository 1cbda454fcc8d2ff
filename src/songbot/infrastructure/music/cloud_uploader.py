# ☁️ songbot/infrastructure/music/cloud_uploader.py
"""
☁️ Завантаження файлів у персональну хмару з повторами.

🔹 `upload_with_retry`: `POST /cloud` через спільний `retry_async`;
   потім best-effort `/cloud/match`, оновлення знімка хмари.
🔹 Локальний файл видаляється за будь-якого результату.
🔹 Помилки `/cloud/match` лише логуються: файл уже в хмарі.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
import httpx

# 🔠 Системні імпорти
import asyncio
import logging
from typing import Awaitable, Callable, Optional

# 🧩 Внутрішні модулі проєкту
from songbot.bot.ui import static_messages as msg
from songbot.config.config_service import ConfigService
from songbot.config.setup.constants import CONST
from songbot.domain.music.entities import ShareCard
from songbot.errors.custom_errors import CloudApiError, FileNotReadyError, UploadFailedError
from songbot.infrastructure.netease.cloud_api import CloudApi
from songbot.shared.metrics.music import CLOUD_UPLOADS_TOTAL
from songbot.shared.utils.files import remove_file, split_extension
from songbot.shared.utils.logger import LOG_NAME
from songbot.shared.utils.retry import RetryExhaustedError, retry_async
from .delivery_orchestrator import DeliveryOrchestrator
from .personal_library import PersonalLibrary
from .share_card import parse_track_file_name

logger = logging.getLogger(LOG_NAME)

Materializer = Callable[[], Awaitable[str]]


class CloudUploader:
    """☁️ Координує завантаження в хмару."""

    def __init__(
        self,
        config: ConfigService,
        cloud_api: CloudApi,
        library: PersonalLibrary,
        orchestrator: DeliveryOrchestrator,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._config = config
        self._cloud_api = cloud_api
        self._library = library
        self._orchestrator = orchestrator
        self._sleep = sleep

    async def upload_with_retry(self, path: str, linked_catalog_id: Optional[int] = None) -> int:
        """
        Повертає ідентифікатор пісні в хмарі.

        Raises:
            UploadFailedError: усі спроби вичерпано.
        """
        attempts = int(self._config.get("upload.retries", CONST.DEFAULTS.UPLOAD_RETRIES) or 1)
        backoff = float(self._config.get("upload.backoff_sec", CONST.DEFAULTS.UPLOAD_BACKOFF_SEC) or 0.0)
        try:
            cloud_id = await retry_async(
                lambda: self._cloud_api.upload(path),
                attempts=attempts,
                delay=backoff,
                retry_on=(httpx.HTTPError, CloudApiError, OSError),
                label=f"cloud upload {path}",
                sleep=self._sleep,
            )
        except RetryExhaustedError as exc:
            CLOUD_UPLOADS_TOTAL.labels(outcome="failed").inc()
            raise UploadFailedError(
                msg.CLOUD_UPLOAD_FAILED,
                details=str(exc.last_error),
                attempts=exc.attempts,
            ) from exc
        finally:
            await remove_file(path)

        logger.info("☁️ Файл завантажено в хмару: songId=%s", cloud_id)
        if linked_catalog_id:
            await self._match(cloud_id, linked_catalog_id)
        await self._library.refresh()
        CLOUD_UPLOADS_TOTAL.labels(outcome="ok").inc()
        return cloud_id

    async def upload_named_file(self, file_name: str, materialize: Materializer) -> int:
        """
        Завантажує файл чату, назва якого має вигляд «виконавець - назва».

        Назва перевіряється до будь-яких мережевих запитів.

        Raises:
            FileNameFormatError: назва не відповідає шаблону.
            UploadFailedError: усі спроби вичерпано.
        """
        base_name, _ = split_extension(file_name)
        artist, title = parse_track_file_name(base_name)
        logger.info("📁 Завантаження файлу чату: %s - %s", artist, title)
        path = await materialize()
        return await self.upload_with_retry(path)

    async def upload_share_card(self, card: ShareCard, requester_id: str) -> int:
        """
        Raises:
            FileNotReadyError: локальна копія не зʼявилась вчасно.
            DeliveryFailedError: URL не знайдено або завантаження впало.
            UploadFailedError: усі спроби вичерпано.
        """
        timeout = self._orchestrator.watch_timeout()
        path = await self._orchestrator.fetch_local_copy(card, requester_id, timeout)
        if path is None:
            raise FileNotReadyError(msg.FILE_WAIT_TIMEOUT.format(seconds=int(timeout)), timeout_sec=timeout)
        return await self.upload_with_retry(path, card.song_id)

    async def _match(self, cloud_id: int, catalog_id: int) -> None:
        try:
            await self._cloud_api.match(cloud_id, catalog_id)
        except (httpx.HTTPError, CloudApiError, ValueError) as exc:
            logger.error("❌ Не вдалося зіставити songId=%s з треком %s: %s", cloud_id, catalog_id, exc)
            return
        logger.info("🔗 Пісню %s зіставлено з треком каталогу %s", cloud_id, catalog_id)


__all__ = ["CloudUploader"]
