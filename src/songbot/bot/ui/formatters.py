# 🧱 songbot/bot/ui/formatters.py
"""
🧱 Текстові представлення для чату (HTML parse mode).

🔹 `render_song_list`: нумерований список пошуку (номер = аргумент `#听N`).
🔹 `render_track_summary`: анонс треку перед надсиланням файлу.
🔹 `render_cloud_summary`: статистика персональної хмари.
"""

from __future__ import annotations

# 🔠 Системні імпорти
from html import escape
from typing import Iterable, List, Sequence

# 🧩 Внутрішні модулі проєкту
from songbot.config.setup.constants import CONST
from songbot.domain.music.entities import CloudSummary, DeliveryAttempt, Track
from songbot.shared.utils.formatting import to_gb_or_tb
from . import static_messages as msg


def render_song_list(tracks: Sequence[Track]) -> str:
    lines: List[str] = ["🎵 <b>点歌列表</b>", ""]
    for ordinal, track in enumerate(tracks, start=1):
        duration = "云盘" if track.is_cloud else track.duration_label
        lines.append(f"{ordinal}. {escape(track.title)} - {escape(track.artist)} <i>[{escape(duration)}]</i>")
    lines.append("")
    lines.append("发送 <code>#听序号</code> 播放，例如 <code>#听1</code>")
    return "\n".join(lines)


def quality_with_caveat(label: str) -> str:
    """Для Dolby Atmos додаємо примітку про формат файлу."""
    if label == CONST.AUDIO.DOLBY_LABEL:
        return label + CONST.AUDIO.DOLBY_CAVEAT
    return label


def render_track_summary(attempt: DeliveryAttempt, tags: Iterable[str] = ()) -> str:
    track = attempt.track
    lines = [
        f"🎵 <b>{escape(track.title)}</b>",
        f"👤 {escape(track.artist)}",
    ]
    if attempt.size_label:
        lines.append(f"💾 {escape(attempt.size_label)}")
    if attempt.quality_label:
        lines.append(f"🎚️ {escape(quality_with_caveat(attempt.quality_label))}")
    tag_list = [escape(tag) for tag in tags if tag]
    if tag_list:
        lines.append("🏷️ " + " · ".join(tag_list))
    return "\n".join(lines)


def render_cloud_summary(summary: CloudSummary) -> str:
    return msg.CLOUD_SUMMARY.format(
        count=summary.count,
        capacity=to_gb_or_tb(summary.max_bytes),
        used=to_gb_or_tb(summary.used_bytes),
    )


__all__ = ["render_song_list", "render_track_summary", "render_cloud_summary", "quality_with_caveat"]
