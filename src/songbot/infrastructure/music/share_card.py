# 🎴 songbot/infrastructure/music/share_card.py
"""
🎴 Розбір поділеної пісні NetEase з тексту повідомлення.

Підтримує посилання `music.163.com/song/media/outer/url?id=`,
`y.music.163.com/m/song?...&id=`, `music.163.com/m/song/<id>`,
`music.163.com/#/song?id=` та JSON-картки з полями `title` / `desc`.
Назва та виконавець можуть бути відсутні: тоді їх уточнює каталог.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import re
from typing import Optional, Tuple

# 🧩 Внутрішні модулі проєкту
from songbot.bot.ui import static_messages as msg
from songbot.domain.music.entities import ShareCard
from songbot.errors.custom_errors import FileNameFormatError, ShareCardParseError

_ID_PATTERNS = (
    re.compile(r"https?://y\.music\.163\.com/m/song\?(?:.*?&)?id=(\d+)"),
    re.compile(r"https?://music\.163\.com/song/media/outer/url\?id=(\d+)"),
    re.compile(r"https?://music\.163\.com/m/song/(\d+)"),
    re.compile(r"(?<!user)id=(\d+)"),
)
_JSON_TITLE = re.compile(r'"title"\s*:\s*"([^"]+)"')
_JSON_DESC = re.compile(r'"desc"\s*:\s*"([^"]+)"')
_TEXT_TITLE = re.compile(r"《(.+?)》")
_TEXT_ARTIST = re.compile(r"分享(.+?)的(?:单曲|歌曲)")
_FILE_NAME = re.compile(r"^([\s\S]+)\s*-\s*([\s\S]+)$")


def parse_share_card(text: Optional[str]) -> ShareCard:
    """
    Raises:
        ShareCardParseError: у тексті немає ідентифікатора пісні.
    """
    body = text or ""
    song_id = next((m.group(1) for m in (p.search(body) for p in _ID_PATTERNS) if m), None)
    if not song_id:
        raise ShareCardParseError(msg.REPLY_TO_SHARE_CARD)

    title_match = _JSON_TITLE.search(body) or _TEXT_TITLE.search(body)
    artist_match = _JSON_DESC.search(body) or _TEXT_ARTIST.search(body)
    return ShareCard(
        song_id=int(song_id),
        title=title_match.group(1).strip() if title_match else "",
        artist=artist_match.group(1).strip() if artist_match else "",
    )


def parse_track_file_name(base_name: str) -> Tuple[str, str]:
    """
    `"梁静茹 - 勇气"` → (`"梁静茹"`, `"勇气"`).

    Raises:
        FileNameFormatError: імʼя не має вигляду «виконавець - назва».
    """
    match = _FILE_NAME.match((base_name or "").strip())
    artist, title = (match.group(1).strip(), match.group(2).strip()) if match else ("", "")
    if not artist or not title:
        raise FileNameFormatError(msg.BAD_FILE_NAME, file_name=base_name)
    return artist, title


__all__ = ["parse_share_card", "parse_track_file_name"]
