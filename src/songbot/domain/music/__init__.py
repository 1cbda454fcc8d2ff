# 🎵 songbot/domain/music/__init__.py
"""🎵 Доменний шар: DTO та контракти музичного пайплайна."""

from .entities import (
    CloudSummary,
    CredentialKind,
    DeliveryAttempt,
    DeliveryReport,
    DeliveryStage,
    FallbackSong,
    SearchSession,
    ShareCard,
    SongUrl,
    StageResult,
    StageStatus,
    Track,
    TrackDetail,
)
from .interfaces import IAudioDownloader, IDeliveryChannel, IKeyValueStore

__all__ = [
    "CloudSummary",
    "CredentialKind",
    "DeliveryAttempt",
    "DeliveryReport",
    "DeliveryStage",
    "FallbackSong",
    "SearchSession",
    "ShareCard",
    "SongUrl",
    "StageResult",
    "StageStatus",
    "Track",
    "TrackDetail",
    "IAudioDownloader",
    "IDeliveryChannel",
    "IKeyValueStore",
]
