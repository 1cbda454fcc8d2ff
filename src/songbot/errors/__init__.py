# 🚨 songbot/errors/__init__.py
"""🚨 Доменні винятки та централізована обробка помилок."""

from .custom_errors import (
    AppError,
    CloudApiError,
    DeliveryFailedError,
    ErrorCode,
    FileNameFormatError,
    FileNotReadyError,
    NetworkRequestError,
    SessionNotFoundError,
    ShareCardParseError,
    SongNotFoundError,
    UnsupportedCardError,
    UploadFailedError,
    UserVisibleError,
)

__all__ = [
    "AppError",
    "CloudApiError",
    "DeliveryFailedError",
    "ErrorCode",
    "FileNameFormatError",
    "FileNotReadyError",
    "NetworkRequestError",
    "SessionNotFoundError",
    "ShareCardParseError",
    "SongNotFoundError",
    "UnsupportedCardError",
    "UploadFailedError",
    "UserVisibleError",
]
