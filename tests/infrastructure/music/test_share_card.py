"""
🧪 test_share_card.py: розбір поділених пісень та імен файлів.
"""

import pytest

from songbot.errors.custom_errors import FileNameFormatError, ShareCardParseError
from songbot.infrastructure.music.share_card import parse_share_card, parse_track_file_name


def test_plain_text_share():
    text = "分享周杰伦的单曲《晴天》: https://y.music.163.com/m/song?app_version=9.0&id=186016&uct2=x (来自@网易云音乐)"

    card = parse_share_card(text)

    assert card.song_id == 186016
    assert card.title == "晴天"
    assert card.artist == "周杰伦"


def test_json_card_share():
    text = '{"title":"勇气","desc":"梁静茹","jumpUrl":"https://music.163.com/song/media/outer/url?id=254574"}'

    card = parse_share_card(text)

    assert (card.song_id, card.title, card.artist) == (254574, "勇气", "梁静茹")


def test_bare_link_has_empty_names():
    card = parse_share_card("https://music.163.com/m/song/1234567")

    assert card.song_id == 1234567
    assert card.title == ""
    assert card.artist == ""


@pytest.mark.parametrize("text", [None, "", "just chatting", "https://music.163.com/user/home?userid=5"])
def test_not_a_share_raises(text):
    with pytest.raises(ShareCardParseError):
        parse_share_card(text)


def test_file_name_split():
    assert parse_track_file_name("梁静茹 - 勇气") == ("梁静茹", "勇气")
    assert parse_track_file_name("梁静茹-勇气") == ("梁静茹", "勇气")


@pytest.mark.parametrize("name", ["", "勇气", "-勇气", "梁静茹-"])
def test_bad_file_name_raises(name):
    with pytest.raises(FileNameFormatError):
        parse_track_file_name(name)
