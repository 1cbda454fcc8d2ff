"""
🧪 test_command_parser.py: розбір текстових команд.
"""

import pytest

from songbot.bot.handlers.command_parser import CommandKind, parse_command


@pytest.mark.parametrize(
    "text,kind,keyword,ordinal",
    [
        ("#点歌 晴天", CommandKind.SEARCH, "晴天", 0),
        ("#点歌   周杰伦 晴天 ", CommandKind.SEARCH, "周杰伦 晴天", 0),
        ("#听2", CommandKind.PICK, "", 2),
        ("#听12", CommandKind.PICK, "", 12),
        ("#播放 勇气", CommandKind.PLAY, "勇气", 0),
        ("#上传", CommandKind.UPLOAD_TO_CHAT, "", 0),
        ("上传", CommandKind.UPLOAD_TO_CHAT, "", 0),
        ("#我的云盘", CommandKind.MY_CLOUD, "", 0),
        ("#rnc", CommandKind.MY_CLOUD, "", 0),
        ("#云盘更新", CommandKind.CLOUD_REFRESH, "", 0),
        ("#更新云盘", CommandKind.CLOUD_REFRESH, "", 0),
        ("#上传云盘", CommandKind.CLOUD_UPLOAD, "", 0),
        ("#RNU", CommandKind.CLOUD_UPLOAD, "", 0),
        ("#清除云盘缓存", CommandKind.CLOUD_CLEAR, "", 0),
        ("#文件上传云盘", CommandKind.FILE_TO_CLOUD, "", 0),
        ("#群文件上传云盘", CommandKind.FILE_TO_CLOUD, "", 0),
        ("#rngu", CommandKind.FILE_TO_CLOUD, "", 0),
    ],
)
def test_recognised_commands(text, kind, keyword, ordinal):
    command = parse_command(text)

    assert command is not None
    assert command.kind is kind
    assert command.keyword == keyword
    assert command.ordinal == ordinal


@pytest.mark.parametrize("text", [None, "", "hello", "#点歌", "#听0", "#听x", "#播放", "上传一下"])
def test_non_commands_are_ignored(text):
    assert parse_command(text) is None
