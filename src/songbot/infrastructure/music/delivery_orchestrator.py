# 🚚 songbot/infrastructure/music/delivery_orchestrator.py
"""
🚚 Доставка одного треку від URL до файлу в чаті.

Етапи виконуються строго послідовно, кожен повертає `StageResult`:

    RESOLVE_URL → (cookie дійсна ? DIRECT : FALLBACK_RESOLVE)
                → ANNOUNCE → DOWNLOAD → DELIVER → CLEANUP

🔹 Треки з хмари завжди йдуть з cookie хмари, треки каталогу: з cookie відтворення.
🔹 Резервний резолвер ніколи не зриває доставку: порожній URL провалить DOWNLOAD.
🔹 Картка → файл (+ голосове) без повторних повідомлень користувачу.
🔹 Локальний файл видаляється завжди.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
import httpx

# 🔠 Системні імпорти
import asyncio
import logging
import os
from typing import List, Optional
from urllib.parse import urlparse

# 🧩 Внутрішні модулі проєкту
from songbot.bot.ui import static_messages as msg
from songbot.bot.ui.formatters import render_track_summary
from songbot.config.config_service import ConfigService
from songbot.config.setup.constants import CONST
from songbot.domain.music.entities import (
    CredentialKind,
    DeliveryAttempt,
    DeliveryReport,
    DeliveryStage,
    ShareCard,
    StageResult,
    Track,
)
from songbot.domain.music.interfaces import IAudioDownloader, IDeliveryChannel
from songbot.errors.custom_errors import DeliveryFailedError
from songbot.infrastructure.netease.catalog_client import CatalogClient
from songbot.infrastructure.netease.credential_gate import LOGIN_STATUS_PATH, CredentialGate
from songbot.infrastructure.netease.fallback_resolver import FallbackResolver
from songbot.shared.metrics.music import DELIVERIES_TOTAL, FALLBACK_RESOLUTIONS_TOTAL, FILE_WAIT_TIMEOUTS_TOTAL
from songbot.shared.utils.files import remove_file
from songbot.shared.utils.formatting import bytes_to_mb, sanitize_filename
from songbot.shared.utils.logger import LOG_NAME
from .file_watcher import FileReadinessWatcher

logger = logging.getLogger(LOG_NAME)

_KNOWN_EXTENSIONS = frozenset({"mp3", "flac", "m4a", "mp4", "ogg", "wav", "aac"})


def extension_from_url(url: str) -> Optional[str]:
    """Розширення з шляху URL, якщо воно схоже на аудіо."""
    _, ext = os.path.splitext(urlparse(url or "").path)
    ext = ext.lstrip(".").lower()
    return ext if ext in _KNOWN_EXTENSIONS else None


class DeliveryOrchestrator:
    """🚚 Керує етапами доставки та локальними копіями для завантажень."""

    def __init__(
        self,
        config: ConfigService,
        catalog: CatalogClient,
        gate: CredentialGate,
        fallback: FallbackResolver,
        downloader: IAudioDownloader,
        watcher: FileReadinessWatcher,
    ) -> None:
        self._config = config
        self._catalog = catalog
        self._gate = gate
        self._fallback = fallback
        self._downloader = downloader
        self._watcher = watcher

    # ================================
    # 🔑 ПУБЛІЧНИЙ API
    # ================================
    async def deliver(self, track: Track, requester_id: str, channel: IDeliveryChannel) -> DeliveryReport:
        attempt = DeliveryAttempt(track=track, extension=CONST.AUDIO.DEFAULT_EXTENSION)
        stages: List[StageResult] = []
        delivered_via: Optional[str] = None
        kind = CredentialKind.LIBRARY if track.is_cloud else CredentialKind.PLAYBACK
        cookie = self._gate.cookie_for(kind)

        try:
            stages.append(await self._resolve_url(attempt, kind, cookie))
            if not attempt.entitled:
                stages.append(await self._fallback_resolve(attempt))
            stages.append(await self._announce(attempt, channel, cookie))

            download = await self._download(attempt, requester_id)
            stages.append(download)
            if download.failed:
                DELIVERIES_TOTAL.labels(channel="none", outcome="download_failed").inc()
            else:
                deliver = await self._deliver(attempt, channel)
                stages.append(deliver)
                delivered_via = deliver.value
                DELIVERIES_TOTAL.labels(
                    channel=delivered_via or "none",
                    outcome="failed" if deliver.failed else "ok",
                ).inc()
        finally:
            if attempt.local_path:
                await remove_file(attempt.local_path)
            stages.append(StageResult.ok(DeliveryStage.CLEANUP))

        report = DeliveryReport(track=track, stages=tuple(stages), channel=delivered_via)
        logger.info(
            "🚚 %s: канал=%s резервний=%s",
            track.display_name,
            report.channel or "none",
            report.via_fallback,
        )
        return report

    async def fetch_local_copy(
        self,
        card: ShareCard,
        requester_id: str,
        timeout: Optional[float] = None,
    ) -> Optional[str]:
        """
        Локальна копія поділеної пісні для подальшого завантаження.

        Завантаження працює як окремий продюсер, готовність перевіряє
        `FileReadinessWatcher`; обидва виконуються навперегони.
        Таймаут → None (продюсер скасовано).

        Raises:
            DeliveryFailedError: URL не знайдено або завантаження впало
                раніше, ніж файл став готовим.
        """
        track = await self._track_for_card(card)
        attempt = DeliveryAttempt(track=track, extension=CONST.AUDIO.DEFAULT_EXTENSION)
        cookie = self._gate.cookie_for(CredentialKind.LIBRARY)
        await self._resolve_url(attempt, CredentialKind.LIBRARY, cookie)
        if not attempt.entitled:
            await self._fallback_resolve(attempt)
        if not attempt.resolved_url:
            logger.error("❌ Немає URL для завантаження: %s", track.display_name)
            raise DeliveryFailedError(msg.DELIVERY_FAILED.format(title=track.display_name))

        path = self._target_path(attempt, requester_id)
        wait_for = self.watch_timeout() if timeout is None else float(timeout)
        producer = asyncio.create_task(self._downloader.download(attempt.resolved_url, path))
        watcher = asyncio.create_task(self._watcher.await_stable(path, wait_for))
        try:
            await asyncio.wait({producer, watcher}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            await self._cancel(producer, watcher)
            raise

        if producer.done() and producer.exception() is not None:
            await self._cancel(watcher)
            error = producer.exception()
            logger.error("❌ Завантаження %s завершилося помилкою: %s", track.display_name, error)
            await remove_file(path)
            raise DeliveryFailedError(
                msg.DELIVERY_FAILED.format(title=track.display_name),
                details=str(error),
            ) from error

        ready = await watcher
        if not ready:
            await self._cancel(producer)
            FILE_WAIT_TIMEOUTS_TOTAL.inc()
            return None

        try:
            return await producer
        except (httpx.HTTPError, OSError, ValueError) as exc:
            logger.error("❌ Завантаження %s завершилося помилкою: %s", track.display_name, exc)
            await remove_file(path)
            raise DeliveryFailedError(
                msg.DELIVERY_FAILED.format(title=track.display_name),
                details=str(exc),
            ) from exc

    # ================================
    # 🧩 ЕТАПИ
    # ================================
    async def _resolve_url(self, attempt: DeliveryAttempt, kind: CredentialKind, cookie: str) -> StageResult:
        entitled = await self._gate.probe(LOGIN_STATUS_PATH, kind)
        quality = str(self._config.get("netease.audio_quality") or CONST.DEFAULTS.AUDIO_QUALITY)
        song_url = await self._catalog.song_url(attempt.track.id, quality, cookie)

        if song_url is not None:
            attempt.extension = song_url.extension or attempt.extension
            attempt.quality_label = CONST.quality_label(song_url.level)
            attempt.size_label = f"{bytes_to_mb(song_url.size)} MB"

        if entitled and song_url is not None and song_url.url:
            attempt.entitled = True
            attempt.resolved_url = song_url.url
            return StageResult.ok(DeliveryStage.RESOLVE_URL, song_url.url)

        reason = "credential rejected" if not entitled else "no playable url"
        logger.info("🪂 %s: %s, переходимо до резервного резолвера", attempt.track.display_name, reason)
        return StageResult.fallback(DeliveryStage.RESOLVE_URL, reason=reason)

    async def _fallback_resolve(self, attempt: DeliveryAttempt) -> StageResult:
        FALLBACK_RESOLUTIONS_TOTAL.inc()
        result = await self._fallback.resolve(attempt.track)
        attempt.resolved_url = result.url
        attempt.quality_label = result.quality_label
        attempt.size_label = ""
        if result.url:
            attempt.extension = extension_from_url(result.url) or attempt.extension
            return StageResult.ok(DeliveryStage.FALLBACK_RESOLVE, result.url)
        return StageResult.fallback(DeliveryStage.FALLBACK_RESOLVE, reason="fallback returned no url")

    async def _announce(self, attempt: DeliveryAttempt, channel: IDeliveryChannel, cookie: str) -> StageResult:
        tags = (await self._catalog.wiki(attempt.track.id, cookie))[: CONST.AUDIO.MAX_WIKI_TAGS]
        text = render_track_summary(attempt, tags)
        cover = attempt.track.cover_url if attempt.track.has_cover else None
        try:
            await channel.send_announcement(text, cover)
        except asyncio.CancelledError:
            raise
        except Exception as exc:									# noqa: BLE001
            logger.warning("⚠️ Анонс %s не надіслано: %s", attempt.track.display_name, exc)
            return StageResult.fallback(DeliveryStage.ANNOUNCE, reason=str(exc))
        return StageResult.ok(DeliveryStage.ANNOUNCE, text)

    async def _download(self, attempt: DeliveryAttempt, requester_id: str) -> StageResult:
        title = attempt.track.display_name
        if not attempt.resolved_url:
            logger.error("❌ Завантаження неможливе, URL порожній: %s", title)
            return StageResult.fail(DeliveryStage.DOWNLOAD, "empty url")

        path = self._target_path(attempt, requester_id)
        try:
            attempt.local_path = await self._downloader.download(attempt.resolved_url, path)
        except (httpx.HTTPError, OSError, ValueError) as exc:
            logger.error("❌ Не вдалося завантажити %s: %s", title, exc)
            await remove_file(path)
            return StageResult.fail(DeliveryStage.DOWNLOAD, str(exc))
        return StageResult.ok(DeliveryStage.DOWNLOAD, attempt.local_path)

    async def _deliver(self, attempt: DeliveryAttempt, channel: IDeliveryChannel) -> StageResult:
        path = attempt.local_path or ""
        try:
            await channel.send_audio_card(attempt.track, path)
            return StageResult.ok(DeliveryStage.DELIVER, "card")
        except asyncio.CancelledError:
            raise
        except Exception as exc:									# noqa: BLE001
            logger.debug("🎴 Картка недоступна (%s), надсилаємо файл", exc)

        try:
            await channel.send_file(path, os.path.basename(path))
        except asyncio.CancelledError:
            raise
        except Exception as exc:									# noqa: BLE001
            logger.error("❌ Усі канали доставки вичерпано для %s: %s", attempt.track.display_name, exc)
            return StageResult.fail(DeliveryStage.DELIVER, str(exc))

        if self._config.get("song_request.send_voice", False) and attempt.extension != "mp4":
            try:
                await channel.send_voice(path)
            except asyncio.CancelledError:
                raise
            except Exception as exc:								# noqa: BLE001
                logger.warning("⚠️ Голосове повідомлення не надіслано: %s", exc)
        return StageResult.fallback(DeliveryStage.DELIVER, "file", reason="card unsupported")

    # ================================
    # 🛠️ ДОПОМІЖНІ МЕТОДИ
    # ================================
    @staticmethod
    async def _cancel(*tasks: asyncio.Task) -> None:
        """Скасовує задачі та дочікується їх завершення."""
        for task in tasks:
            task.cancel()
        await asyncio.wait(set(tasks))

    def _target_path(self, attempt: DeliveryAttempt, requester_id: str) -> str:
        base_dir = str(self._config.get("files.download_dir") or CONST.DEFAULTS.DOWNLOAD_DIR)
        stem = sanitize_filename(attempt.track.display_name)
        folder = sanitize_filename(str(requester_id), fallback="anonymous")
        return os.path.join(base_dir, folder, f"{stem}.{attempt.extension}")

    def watch_timeout(self) -> float:
        try:
            return float(self._config.get("file_watch.timeout_sec", CONST.DEFAULTS.WATCH_TIMEOUT_SEC))
        except (TypeError, ValueError):
            return CONST.DEFAULTS.WATCH_TIMEOUT_SEC

    async def _track_for_card(self, card: ShareCard) -> Track:
        track = Track(id=card.song_id, title=card.title, artist=card.artist, duration_label="")
        if card.title and card.artist:
            return track
        details = await self._catalog.detail([card.song_id])
        return track.with_detail(details[card.song_id]) if card.song_id in details else track


__all__ = ["DeliveryOrchestrator", "extension_from_url"]
