"""
🧪 test_telegram_channel.py: Telegram-реалізація каналу доставки.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from telegram.error import BadRequest

from songbot.bot.delivery.telegram_channel import TelegramDeliveryChannel
from songbot.domain.music.entities import Track
from songbot.errors.custom_errors import UnsupportedCardError

TRACK = Track(id=1, title="晴天", artist="周杰伦", duration_label="04:29")


@pytest.fixture
def message():
    message = MagicMock()
    for name in ("reply_text", "reply_photo", "reply_audio", "reply_document", "reply_voice"):
        setattr(message, name, AsyncMock())
    return message


@pytest.fixture
def audio(tmp_path):
    path = tmp_path / "周杰伦-晴天.mp3"
    path.write_bytes(b"audio")
    return str(path)


@pytest.mark.asyncio
async def test_announcement_with_cover_uses_photo(config, message):
    await TelegramDeliveryChannel(message, config).send_announcement("text", "http://c/1.jpg")

    message.reply_photo.assert_awaited_once()
    assert message.reply_photo.await_args.kwargs["caption"] == "text"
    message.reply_text.assert_not_awaited()


@pytest.mark.asyncio
async def test_announcement_without_cover_is_text(config, message):
    await TelegramDeliveryChannel(message, config).send_announcement("text", None)

    message.reply_text.assert_awaited_once()
    message.reply_photo.assert_not_awaited()


@pytest.mark.asyncio
async def test_audio_card_carries_title_and_performer(config, message, audio):
    await TelegramDeliveryChannel(message, config).send_audio_card(TRACK, audio)

    kwargs = message.reply_audio.await_args.kwargs
    assert kwargs["title"] == "晴天"
    assert kwargs["performer"] == "周杰伦"


@pytest.mark.asyncio
async def test_disabled_cards_are_unsupported(make_config, message, audio):
    channel = TelegramDeliveryChannel(message, make_config(song_request__send_card=False))

    with pytest.raises(UnsupportedCardError):
        await channel.send_audio_card(TRACK, audio)
    message.reply_audio.assert_not_awaited()


@pytest.mark.asyncio
async def test_rejected_card_is_unsupported(config, message, audio):
    message.reply_audio.side_effect = BadRequest("Wrong file type")

    with pytest.raises(UnsupportedCardError):
        await TelegramDeliveryChannel(message, config).send_audio_card(TRACK, audio)


@pytest.mark.asyncio
async def test_file_keeps_name(config, message, audio):
    await TelegramDeliveryChannel(message, config).send_file(audio, "周杰伦-晴天.mp3")

    assert message.reply_document.await_args.kwargs["filename"] == "周杰伦-晴天.mp3"
