# ⌨️ songbot/bot/handlers/command_parser.py
"""
⌨️ Розбір текстових команд чату на `ParsedCommand`.

Пошук і відтворення перевіряються першими; серед команд хмари довші йдуть раніше коротших.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Pattern, Tuple

# 🧩 Внутрішні модулі проєкту
from songbot.config.setup.constants import CONST


class CommandKind(str, Enum):
    SEARCH = "search"
    PICK = "pick"
    PLAY = "play"
    UPLOAD_TO_CHAT = "upload_to_chat"
    MY_CLOUD = "my_cloud"
    CLOUD_REFRESH = "cloud_refresh"
    CLOUD_UPLOAD = "cloud_upload"
    CLOUD_CLEAR = "cloud_clear"
    FILE_TO_CLOUD = "file_to_cloud"


@dataclass(frozen=True, slots=True)
class ParsedCommand:
    kind: CommandKind
    keyword: str = ""
    ordinal: int = 0


_COMMANDS = CONST.COMMANDS
_ROUTES: Tuple[Tuple[CommandKind, Pattern[str]], ...] = (
    (CommandKind.SEARCH, re.compile(_COMMANDS.SEARCH, re.DOTALL)),
    (CommandKind.PICK, re.compile(_COMMANDS.PICK)),
    (CommandKind.PLAY, re.compile(_COMMANDS.PLAY, re.DOTALL)),
    (CommandKind.FILE_TO_CLOUD, re.compile(_COMMANDS.FILE_TO_CLOUD)),
    (CommandKind.CLOUD_UPLOAD, re.compile(_COMMANDS.CLOUD_UPLOAD)),
    (CommandKind.CLOUD_CLEAR, re.compile(_COMMANDS.CLOUD_CLEAR)),
    (CommandKind.CLOUD_REFRESH, re.compile(_COMMANDS.CLOUD_REFRESH)),
    (CommandKind.MY_CLOUD, re.compile(_COMMANDS.MY_CLOUD)),
    (CommandKind.UPLOAD_TO_CHAT, re.compile(_COMMANDS.UPLOAD_TO_CHAT)),
)


def parse_command(text: Optional[str]) -> Optional[ParsedCommand]:
    """Повертає команду або None, якщо текст не є командою бота."""
    normalized = (text or "").strip()
    if not normalized:
        return None

    for kind, pattern in _ROUTES:
        match = pattern.search(normalized)
        if match is None:
            continue
        groups = match.groupdict()
        if kind is CommandKind.PICK:
            return ParsedCommand(kind, ordinal=int(groups["ordinal"]))
        if kind in (CommandKind.SEARCH, CommandKind.PLAY):
            keyword = (groups.get("keyword") or "").strip()
            return ParsedCommand(kind, keyword=keyword) if keyword else None
        return ParsedCommand(kind)
    return None


__all__ = ["CommandKind", "ParsedCommand", "parse_command"]
