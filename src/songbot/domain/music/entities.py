# 🎵 songbot/domain/music/entities.py
"""
🎵 DTO домену «пошук та доставка музики».

🔹 `Track`: єдиний запис списку пошуку (хмара або каталог).
🔹 `SearchSession`: останній показаний список для конкретного чату.
🔹 `DeliveryAttempt` / `StageResult` / `DeliveryReport`: стан однієї доставки.
🔹 Без інфраструктури: лише структури та прості інваріанти.
"""

from __future__ import annotations

# 🔠 Системні імпорти
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

CLOUD_DURATION_LABEL = "cloud"                                      # ☁️ Сентинел треку з хмари
NO_COVER = "def"                                                    # 🚫 Сентинел «без обкладинки»


# ================================
# 🎼 ТРЕКИ
# ================================
@dataclass(frozen=True, slots=True)
class TrackDetail:
    """Виправлені поля з `/song/detail`."""

    title: str
    artist: str
    cover_url: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Track:
    """
    ✅ Один трек у списку пошуку.

    `id`: єдине стабільне посилання між шарами; `title`/`artist` можуть
    бути уточнені детальним запитом. `duration_label` дорівнює `"cloud"`
    для треків із персональної хмари.
    """

    id: int
    title: str
    artist: str
    duration_label: str
    cover_url: Optional[str] = None

    @property
    def is_cloud(self) -> bool:
        return self.duration_label == CLOUD_DURATION_LABEL

    @property
    def has_cover(self) -> bool:
        return bool(self.cover_url) and self.cover_url != NO_COVER

    @property
    def display_name(self) -> str:
        """«Виконавець-Назва», так само формується імʼя файлу."""
        return f"{self.artist}-{self.title}"

    def with_detail(self, detail: TrackDetail) -> "Track":
        """Повертає копію з уточненими назвою, виконавцем та обкладинкою."""
        return replace(
            self,
            title=detail.title or self.title,
            artist=detail.artist or self.artist,
            cover_url=detail.cover_url or self.cover_url,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "artist": self.artist,
            "duration": self.duration_label,
            "cover": self.cover_url,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Track":
        return cls(
            id=int(data["id"]),
            title=str(data.get("title") or ""),
            artist=str(data.get("artist") or ""),
            duration_label=str(data.get("duration") or ""),
            cover_url=data.get("cover"),
        )


@dataclass(frozen=True, slots=True)
class SearchSession:
    """📋 Останній список пошуку чату; порядкові номери стабільні."""

    conversation_id: str
    tracks: Tuple[Track, ...] = ()

    def track_at(self, ordinal: int) -> Optional[Track]:
        """Трек за номером, який бачив користувач (нумерація з 1)."""
        if ordinal < 1 or ordinal > len(self.tracks):
            return None
        return self.tracks[ordinal - 1]

    def to_dict(self) -> Dict[str, Any]:
        return {"conversation_id": self.conversation_id, "tracks": [t.to_dict() for t in self.tracks]}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SearchSession":
        return cls(
            conversation_id=str(data["conversation_id"]),
            tracks=tuple(Track.from_dict(item) for item in data.get("tracks") or ()),
        )


# ================================
# 🔐 ОБЛІКОВІ ДАНІ ТА URL
# ================================
class CredentialKind(str, Enum):
    """Яка cookie використовується: хмара чи відтворення."""

    LIBRARY = "library"
    PLAYBACK = "playback"


@dataclass(frozen=True, slots=True)
class SongUrl:
    """Результат `/song/url/v1` для одного треку."""

    url: Optional[str]
    level: Optional[str] = None
    size: int = 0
    extension: Optional[str] = None


@dataclass(frozen=True, slots=True)
class FallbackSong:
    """Відповідь публічного резервного резолвера."""

    url: str = ""
    quality_label: str = ""


@dataclass(frozen=True, slots=True)
class CloudSummary:
    """☁️ Статистика персональної хмари."""

    count: int
    used_bytes: int
    max_bytes: int


@dataclass(frozen=True, slots=True)
class ShareCard:
    """🎴 Поділена пісня NetEase, розібрана з повідомлення."""

    song_id: int
    title: str
    artist: str

    @property
    def display_name(self) -> str:
        return f"{self.artist}-{self.title}"


# ================================
# 🚚 ДОСТАВКА
# ================================
class DeliveryStage(str, Enum):
    RESOLVE_URL = "resolve_url"
    FALLBACK_RESOLVE = "fallback_resolve"
    ANNOUNCE = "announce"
    DOWNLOAD = "download"
    DELIVER = "deliver"
    CLEANUP = "cleanup"


class StageStatus(str, Enum):
    OK = "ok"
    FALLBACK = "fallback"
    FAIL = "fail"


@dataclass(frozen=True, slots=True)
class StageResult:
    """Результат одного етапу доставки."""

    stage: DeliveryStage
    status: StageStatus
    value: Any = None
    reason: Optional[str] = None

    @classmethod
    def ok(cls, stage: DeliveryStage, value: Any = None) -> "StageResult":
        return cls(stage, StageStatus.OK, value)

    @classmethod
    def fallback(cls, stage: DeliveryStage, value: Any = None, reason: Optional[str] = None) -> "StageResult":
        return cls(stage, StageStatus.FALLBACK, value, reason)

    @classmethod
    def fail(cls, stage: DeliveryStage, reason: str) -> "StageResult":
        return cls(stage, StageStatus.FAIL, None, reason)

    @property
    def failed(self) -> bool:
        return self.status is StageStatus.FAIL


@dataclass(slots=True)
class DeliveryAttempt:
    """
    Стан однієї доставки. Живе лише протягом виклику оркестратора.

    Розширення файлу зберігається тут, а не глобально: паралельні доставки
    не впливають одна на одну.
    """

    track: Track
    resolved_url: str = ""
    quality_label: str = ""
    size_label: str = ""
    extension: str = "mp3"
    local_path: Optional[str] = None
    entitled: bool = False


@dataclass(frozen=True, slots=True)
class DeliveryReport:
    """Підсумок доставки: усі етапи по порядку та використаний канал."""

    track: Track
    stages: Tuple[StageResult, ...] = field(default_factory=tuple)
    channel: Optional[str] = None

    @property
    def delivered(self) -> bool:
        return self.channel is not None

    @property
    def via_fallback(self) -> bool:
        return any(s.stage is DeliveryStage.FALLBACK_RESOLVE for s in self.stages)

    def status_of(self, stage: DeliveryStage) -> Optional[StageStatus]:
        for result in self.stages:
            if result.stage is stage:
                return result.status
        return None


__all__ = [
    "CLOUD_DURATION_LABEL",
    "NO_COVER",
    "TrackDetail",
    "Track",
    "SearchSession",
    "CredentialKind",
    "SongUrl",
    "FallbackSong",
    "CloudSummary",
    "ShareCard",
    "DeliveryStage",
    "StageStatus",
    "StageResult",
    "DeliveryAttempt",
    "DeliveryReport",
]
