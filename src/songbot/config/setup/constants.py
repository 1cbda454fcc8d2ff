# 📖 songbot/config/setup/constants.py
"""
📖 Типобезпечні константи музичного бота.

🔹 Централізує ключі сховища, патерни команд і рівні якості
🔹 Гарантує імутабельність через `dataclass(slots=True, frozen=True)`
🔹 Містить словник перекладу рівнів якості NetEase
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                         # 🧾 Логування ініціалізації констант
from dataclasses import dataclass                                      # 🧱 Опис імутабельних структур
from types import MappingProxyType                                     # 🧊 Імутабельні словники
from typing import ClassVar, Final, Mapping                            # 🧮 Типізація

# 🧩 Внутрішні модулі проєкту
from songbot.shared.utils.logger import LOG_NAME

# ================================
# 🧾 ЛОГЕР
# ================================
logger = logging.getLogger(f"{LOG_NAME}.config.constants")


# ================================
# 💾 КЛЮЧІ СХОВИЩА
# ================================
@dataclass(frozen=True, slots=True)
class _CacheKeys:
    """Ключі у key-value сховищі."""

    REGION: Final[str] = "songbot:region"                                # 🌍 Прапорець {"os": bool}
    SESSIONS: Final[str] = "songbot:song_sessions"                       # 📋 Списки пошуку по чатах
    CLOUD_LIBRARY: Final[str] = "songbot:cloud_library"                  # ☁️ Знімок хмари


# ================================
# ⌨️ ПАТЕРНИ КОМАНД
# ================================
@dataclass(frozen=True, slots=True)
class _CommandPatterns:
    """Регулярні вирази текстових команд чату."""

    SEARCH: Final[str] = r"^#点歌\s+(?P<keyword>.+)"                      # 🔍 #点歌 <ключове слово>
    PICK: Final[str] = r"^#听(?P<ordinal>[1-9][0-9]*)$"                  # 🎯 #听<номер>
    PLAY: Final[str] = r"^#播放\s*(?P<keyword>.*)"                        # ▶️ #播放 <ключове слово>
    UPLOAD_TO_CHAT: Final[str] = r"^#?上传$"                             # 📤 Файл пісні в чат
    MY_CLOUD: Final[str] = r"^#?我的云盘$|#rnc|#RNC"                      # ☁️ Статистика хмари
    CLOUD_REFRESH: Final[str] = r"^#?云盘更新$|#?更新云盘$"               # 🔄 Оновлення кешу хмари
    CLOUD_UPLOAD: Final[str] = r"^#?上传云盘|#?上传网盘$|#rnu|#RNU"        # ☁️ Поділена пісня → хмара
    CLOUD_CLEAR: Final[str] = r"^#?清除云盘缓存$"                         # 🧹 Очищення кешу хмари
    FILE_TO_CLOUD: Final[str] = r"^#?文件上传云盘$|#?群文件上传云盘$|#rngu|#RNGU"  # 📁 Файл чату → хмара


# ================================
# 🎚️ АУДІО
# ================================
@dataclass(frozen=True, slots=True)
class _Audio:
    """Рівні якості та пов'язані з ними значення."""

    PLACEHOLDER_COVER: Final[str] = "109951169484091680.jpg"             # 🖼️ Заглушка обкладинки NetEase
    CLOUD_ARTIST_PLACEHOLDER: Final[str] = "喵喵~"                       # 🐱 Виконавець невідомий
    DEFAULT_EXTENSION: Final[str] = "mp3"
    DOLBY_LABEL: Final[str] = "杜比全景声"
    DOLBY_CAVEAT: Final[str] = "\n(杜比下载文件为MP4，编码格式为AC-4，需要设备支持才可播放)"
    MAX_WIKI_TAGS: Final[int] = 3
    CLOUD_PAGE_SIZE: Final[int] = 100

    QUALITY_LABELS: ClassVar[Mapping[str, str]] = MappingProxyType(
        {
            "standard": "标准",
            "higher": "较高",
            "exhigh": "极高",
            "lossless": "无损",
            "hires": "Hi-Res",
            "jyeffect": "高清环绕声",
            "sky": "沉浸环绕声",
            "dolby": "杜比全景声",
            "jymaster": "超清母带",
        }
    )                                                                   # 🈶 Рівень → підпис китайською


@dataclass(frozen=True, slots=True)
class _Defaults:
    """Значення за замовчуванням, якщо конфіг мовчить."""

    MAX_LIST: Final[int] = 20
    AUDIO_QUALITY: Final[str] = "exhigh"
    WATCH_TIMEOUT_SEC: Final[float] = 120.0
    WATCH_POLL_SEC: Final[float] = 0.5
    UPLOAD_RETRIES: Final[int] = 3
    UPLOAD_BACKOFF_SEC: Final[float] = 2.0
    HTTP_TIMEOUT_SEC: Final[float] = 30.0
    DOWNLOAD_DIR: Final[str] = "data/music"
    CACHE_STORE: Final[str] = "data/cache.json"
    USER_AGENT: Final[str] = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
    )


# ================================
# 🌍 ГОЛОВНИЙ ОБʼЄКТ КОНСТАНТ
# ================================
@dataclass(frozen=True, slots=True)
class AppConstants:
    """Єдина точка доступу до всіх констант проєкту."""

    CACHE_KEYS: Final[_CacheKeys] = _CacheKeys()
    COMMANDS: Final[_CommandPatterns] = _CommandPatterns()
    AUDIO: Final[_Audio] = _Audio()
    DEFAULTS: Final[_Defaults] = _Defaults()

    def quality_label(self, level: str | None) -> str:
        """Перекладає рівень якості; невідомий рівень повертається як є."""
        if not level:
            return ""
        return self.AUDIO.QUALITY_LABELS.get(level, level)


# ================================
# 🏁 ІНСТАНЦІЯ ТА ПУБЛІЧНИЙ API
# ================================
CONST = AppConstants()                                                  # 🧱 Єдиний екземпляр констант
logger.debug("📖 AppConstants initialised")

__all__ = ["AppConstants", "CONST"]
