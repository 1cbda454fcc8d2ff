# 🚨 songbot/errors/custom_errors.py
"""
🚨 Ієрархія доменних винятків музичного бота.

🔹 `AppError`: корінь усіх помилок застосунку.
🔹 `UserVisibleError`: текст `message` можна показати користувачу як є.
🔹 `UnsupportedCardError`: внутрішній сигнал «канал картки недоступний», завжди перехоплюється.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging														# 🧾 Логування створення винятків
from typing import Dict, Optional									# 📐 Типізація

# 🧩 Внутрішні модулі проєкту
from songbot.shared.utils.logger import LOG_NAME


# ================================
# 🧾 ЛОГЕР
# ================================
logger = logging.getLogger(f"{LOG_NAME}.errors")


# ================================
# ⚠️ КОДИ ПОМИЛОК
# ================================
class ErrorCode:
    """⚠️ Категорії для поля `error_code` у логах."""

    NETWORK = "network_error"										# 🌐 Мережеві збої
    NOT_FOUND = "not_found"											# 🔍 Нічого не знайдено
    INPUT = "bad_input"												# ✍️ Некоректна команда
    FILE = "file_error"												# 📁 Файл не готовий
    UPLOAD = "upload_error"											# ☁️ Завантаження в хмару
    DELIVERY = "delivery_error"										# 📦 Доставка треку
    UNKNOWN = "unknown_error"										# ❓ Резервний код


# ================================
# 🧱 БАЗОВІ КЛАСИ
# ================================
class AppError(Exception):
    """🧠 Базовий виняток застосунку."""

    code: str = ErrorCode.UNKNOWN

    def __init__(self, message: str, *, details: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message										# 💬 Текст для користувача / логів
        self.details = details										# 🔎 Технічні деталі

    def to_log_extra(self) -> Dict[str, object]:
        """📦 Формує словник для logger.extra."""
        extra: Dict[str, object] = {"error_code": self.code}
        if self.details:
            extra["details"] = self.details
        return extra


class UserVisibleError(AppError):
    """👀 Помилка, повідомлення якої показується користувачу без змін."""


# ================================
# 🎵 ПОШУК ТА СЕСІЇ
# ================================
class SongNotFoundError(UserVisibleError):
    """🔍 Ні хмара, ні каталог нічого не знайшли."""

    code = ErrorCode.NOT_FOUND

    def __init__(self, message: str, *, keyword: Optional[str] = None) -> None:
        super().__init__(message)
        self.keyword = keyword

    def to_log_extra(self) -> Dict[str, object]:
        extra = super().to_log_extra()
        if self.keyword:
            extra["keyword"] = self.keyword
        return extra


class SessionNotFoundError(UserVisibleError):
    """📋 Для чату немає списку пошуку або номер поза списком."""

    code = ErrorCode.NOT_FOUND


# ================================
# ✍️ НЕКОРЕКТНИЙ ВВІД
# ================================
class ShareCardParseError(UserVisibleError):
    """🎴 Повідомлення не схоже на поділену пісню NetEase."""

    code = ErrorCode.INPUT


class FileNameFormatError(UserVisibleError):
    """📝 Імʼя файлу не відповідає шаблону «виконавець - назва»."""

    code = ErrorCode.INPUT

    def __init__(self, message: str, *, file_name: Optional[str] = None) -> None:
        super().__init__(message)
        self.file_name = file_name

    def to_log_extra(self) -> Dict[str, object]:
        extra = super().to_log_extra()
        if self.file_name:
            extra["file_name"] = self.file_name
        return extra


# ================================
# 📁 ФАЙЛИ, ДОСТАВКА, ХМАРА
# ================================
class FileNotReadyError(UserVisibleError):
    """⏳ Файл не стабілізувався за відведений час."""

    code = ErrorCode.FILE

    def __init__(self, message: str, *, path: Optional[str] = None, timeout_sec: Optional[float] = None) -> None:
        super().__init__(message)
        self.path = path
        self.timeout_sec = timeout_sec

    def to_log_extra(self) -> Dict[str, object]:
        extra = super().to_log_extra()
        if self.path:
            extra["path"] = self.path
        if self.timeout_sec is not None:
            extra["timeout_sec"] = self.timeout_sec
        return extra


class UploadFailedError(UserVisibleError):
    """☁️ Завантаження в хмару не вдалося після всіх повторів."""

    code = ErrorCode.UPLOAD

    def __init__(self, message: str, *, details: Optional[str] = None, attempts: Optional[int] = None) -> None:
        super().__init__(message, details=details)
        self.attempts = attempts

    def to_log_extra(self) -> Dict[str, object]:
        extra = super().to_log_extra()
        if self.attempts is not None:
            extra["attempts"] = self.attempts
        return extra


class DeliveryFailedError(UserVisibleError):
    """📦 Трек не вдалося завантажити або надіслати."""

    code = ErrorCode.DELIVERY


class UnsupportedCardError(AppError):
    """🎴 Канал не вміє надсилати музичну картку; викликач переходить на файл."""

    code = ErrorCode.DELIVERY


class CloudApiError(AppError):
    """☁️ API хмари відповіло неуспішним кодом або без ідентифікатора пісні."""

    code = ErrorCode.UPLOAD


# ================================
# 🌐 МЕРЕЖА
# ================================
class NetworkRequestError(UserVisibleError):
    """🌐 Помилка мережевого запиту (httpx / Telegram)."""

    code = ErrorCode.NETWORK

    def __init__(
        self,
        message: str,
        *,
        details: Optional[str] = None,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        retry_after_s: Optional[int] = None,
    ) -> None:
        super().__init__(message, details=details)
        self.url = url												# 🔗 URL, що викликав помилку
        self.status_code = status_code								# 🔢 HTTP-код відповіді
        self.retry_after_s = retry_after_s							# ⏳ Рекомендація щодо повторного запиту

    def to_log_extra(self) -> Dict[str, object]:
        extra = super().to_log_extra()
        if self.url:
            extra["url"] = self.url
        if self.status_code is not None:
            extra["status_code"] = self.status_code
        if self.retry_after_s is not None:
            extra["retry_after_s"] = self.retry_after_s
        return extra


# ================================
# 📤 ПУБЛІЧНИЙ API
# ================================
__all__ = [
    "ErrorCode",
    "AppError",
    "UserVisibleError",
    "SongNotFoundError",
    "SessionNotFoundError",
    "ShareCardParseError",
    "FileNameFormatError",
    "FileNotReadyError",
    "UploadFailedError",
    "DeliveryFailedError",
    "UnsupportedCardError",
    "CloudApiError",
    "NetworkRequestError",
]
