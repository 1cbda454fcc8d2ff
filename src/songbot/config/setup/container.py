# 📦 songbot/config/setup/container.py
"""
📦 Контейнер залежностей музичного бота.

🔹 Створює сервіси в правильному порядку DI
🔹 Інкапсулює HTTP-клієнти та сховище, щоб закрити їх при зупинці
🔹 Дає єдину точку доступу до обробників Telegram
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                           # 🧾 Базові засоби логування
from typing import TYPE_CHECKING, Any, List                              # 🧮 Допоміжні типи

# 🧩 Внутрішні модулі проєкту
from songbot.bot.handlers.song_request_handler import SongRequestHandler  # 🎶 Команди музичного бота
from songbot.config.setup.constants import CONST, AppConstants           # ⚙️ Глобальні константи
from songbot.errors.error_handler import make_error_handler              # 🚨 Обгортка обробки помилок
from songbot.errors.exception_handler_service import ExceptionHandlerService  # 🛡️ Менеджер винятків
from songbot.errors.strategies import HttpxErrorStrategy, TelegramErrorStrategy  # 🧱 Набір стратегій помилок
from songbot.infrastructure.music.audio_downloader import AudioDownloader  # ⬇️ Потокове завантаження аудіо
from songbot.infrastructure.music.cloud_uploader import CloudUploader    # ☁️ Завантаження в хмару
from songbot.infrastructure.music.delivery_orchestrator import DeliveryOrchestrator  # 🚚 Етапи доставки
from songbot.infrastructure.music.file_watcher import FileReadinessWatcher  # ⏳ Очікування файлу
from songbot.infrastructure.music.personal_library import PersonalLibrary  # 📚 Знімок хмари
from songbot.infrastructure.music.search_service import SongSearchService  # 🔍 Об'єднаний пошук
from songbot.infrastructure.music.session_store import SessionStore      # 📋 Сесії пошуку
from songbot.infrastructure.netease.catalog_client import CatalogClient  # 🎼 Каталог NetEase
from songbot.infrastructure.netease.cloud_api import CloudApi            # ☁️ API хмари
from songbot.infrastructure.netease.credential_gate import CredentialGate  # 🔑 Перевірка cookie
from songbot.infrastructure.netease.fallback_resolver import FallbackResolver  # 🪂 Публічний резолвер
from songbot.infrastructure.netease.http_client import NeteaseHttpClient  # 🌐 HTTP-клієнт API
from songbot.infrastructure.netease.region_selector import RegionSelector  # 🌍 Вибір сервера
from songbot.infrastructure.storage.json_store import JsonFileStore      # 💾 Key-value сховище
from songbot.shared.metrics.exporters import maybe_start_prometheus      # 📈 Bootstrap метрик
from songbot.shared.utils.logger import LOG_NAME, init_logging_from_config  # 🧾 Конфіг логування

if TYPE_CHECKING:
    from songbot.config.config_service import ConfigService              # 🗂️ Тип під час перевірки

logger = logging.getLogger(LOG_NAME)                                     # 🧾 Модульний логер контейнера


# ================================
# 🛠️ ДОПОМІЖНІ ФУНКЦІЇ
# ================================
def _float_or_default(value: Any, default: float) -> float:
    if value is None:
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def bootstrap_logging() -> logging.Logger:
    """
    Зчитує конфіг логування і запускає кореневий логер.
    """
    from songbot.config.config_service import ConfigService              # 🧭 Локальний імпорт для уникнення циклів

    node = ConfigService().get("logging", {}) or {}                      # 📄 Вузол логування
    return init_logging_from_config(node)                                # 🧾 Стартуємо логер за конфігом


# ================================
# 🏛️ КОНТЕЙНЕР ЗАЛЕЖНОСТЕЙ
# ================================
class Container:
    """
    Координує ініціалізацію інфраструктурних сервісів та обробників бота.
    """

    def __init__(self, config: ConfigService):
        self.config = config                                              # ⚙️ Джерело конфігурацій DI
        self.constants: AppConstants = CONST                              # 🧱 Глобальні константи
        logger.info("🚀 Стартуємо побудову контейнера залежностей")
        self._bootstrap_metrics_if_enabled()                              # 📈 Можливий запуск експорту метрик
        self._setup_error_handlers()                                      # 🛡️ Стратегії помилок
        self._setup_infrastructure()                                      # 🌐 Клієнти API та сховище
        self._setup_music_services()                                      # 🎵 Пошук, доставка, хмара
        self._setup_handlers()                                            # 📚 Telegram-обробники
        logger.info("✅ Контейнер ініціалізовано успішно")

    # ================================
    # 📈 МЕТРИКИ
    # ================================
    def _bootstrap_metrics_if_enabled(self) -> None:
        """
        Стартує Prometheus-експортер, якщо це дозволено конфігурацією.
        """
        if not bool(self.config.get("metrics.enabled", False)):
            logger.debug("📉 Prometheus вимкнено конфігом")
            return
        try:
            port = int(self.config.get("metrics.port", 9108) or 9108)
        except (TypeError, ValueError):
            port = 9108
        maybe_start_prometheus(port)

    # ================================
    # 🛡️ ОБРОБКА ПОМИЛОК
    # ================================
    def _setup_error_handlers(self) -> None:
        strategies = [
            HttpxErrorStrategy(),                                        # 🌐 HTTP-рівень
            TelegramErrorStrategy(),                                     # ✉️ Telegram Bot API
        ]
        self.exception_handler_service = ExceptionHandlerService(strategies=strategies)
        self.error_handler = make_error_handler(self.exception_handler_service)
        logger.debug("🛡️ ExceptionHandlerService активовано (%d стратегій)", len(strategies))

    # ================================
    # 🌐 ІНФРАСТРУКТУРА
    # ================================
    def _setup_infrastructure(self) -> None:
        self.store = JsonFileStore(self.config)                           # 💾 Регіон, сесії, знімок хмари
        self.region_selector = RegionSelector(self.config, self.store)    # 🌍 Закордонний чи материковий API
        self.http_client = NeteaseHttpClient(self.config, self.region_selector)
        self.catalog_client = CatalogClient(self.http_client)
        self.credential_gate = CredentialGate(self.config, self.http_client)
        self.cloud_api = CloudApi(self.config, self.http_client, self.credential_gate)
        self.fallback_resolver = FallbackResolver(self.config, self.http_client)
        self.audio_downloader = AudioDownloader(self.config)

    # ================================
    # 🎵 МУЗИЧНІ СЕРВІСИ
    # ================================
    def _setup_music_services(self) -> None:
        self.file_watcher = FileReadinessWatcher(
            poll_interval=_float_or_default(
                self.config.get("file_watch.poll_interval_sec"), CONST.DEFAULTS.WATCH_POLL_SEC
            ),
            default_timeout=_float_or_default(
                self.config.get("file_watch.timeout_sec"), CONST.DEFAULTS.WATCH_TIMEOUT_SEC
            ),
        )
        self.personal_library = PersonalLibrary(self.store, self.cloud_api)
        self.session_store = SessionStore(self.store)
        self.search_service = SongSearchService(
            self.config, self.catalog_client, self.personal_library, self.session_store
        )
        self.delivery_orchestrator = DeliveryOrchestrator(
            self.config,
            self.catalog_client,
            self.credential_gate,
            self.fallback_resolver,
            self.audio_downloader,
            self.file_watcher,
        )
        self.cloud_uploader = CloudUploader(
            self.config, self.cloud_api, self.personal_library, self.delivery_orchestrator
        )

    # ================================
    # 📚 ОБРОБНИКИ
    # ================================
    def _setup_handlers(self) -> None:
        self.song_request_handler = SongRequestHandler(
            config=self.config,
            search=self.search_service,
            orchestrator=self.delivery_orchestrator,
            uploader=self.cloud_uploader,
            library=self.personal_library,
            cloud_api=self.cloud_api,
            error_handler=self.error_handler,
        )
        self.features: List[SongRequestHandler] = [self.song_request_handler]
        logger.debug("📚 Обробники ініціалізовані (%d)", len(self.features))

    # ================================
    # 🛑 ЗУПИНКА
    # ================================
    async def aclose(self) -> None:
        """Закриває HTTP-клієнти."""
        await self.http_client.aclose()
        await self.audio_downloader.aclose()
        logger.info("🛑 HTTP-клієнти закрито")


__all__ = ["Container", "bootstrap_logging"]
