"""
🧪 test_audio_downloader.py: потокове завантаження через httpx.MockTransport.
"""

import os

import httpx
import pytest

from songbot.infrastructure.music.audio_downloader import AudioDownloader


def _downloader(config, handler):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return AudioDownloader(config, client=client, chunk_size=4)


@pytest.mark.asyncio
async def test_download_writes_target_and_no_part_file(config, tmp_path):
    target = tmp_path / "42" / "a-b.mp3"
    downloader = _downloader(config, lambda request: httpx.Response(200, content=b"0123456789"))

    path = await downloader.download("http://cdn/a.mp3", str(target))

    assert path == str(target)
    assert target.read_bytes() == b"0123456789"
    assert not os.path.exists(f"{target}.part")


@pytest.mark.asyncio
async def test_http_error_leaves_nothing_behind(config, tmp_path):
    target = tmp_path / "a.mp3"
    downloader = _downloader(config, lambda request: httpx.Response(404))

    with pytest.raises(httpx.HTTPStatusError):
        await downloader.download("http://cdn/a.mp3", str(target))

    assert not target.exists()
    assert not os.path.exists(f"{target}.part")


@pytest.mark.asyncio
async def test_empty_body_is_an_error(config, tmp_path):
    downloader = _downloader(config, lambda request: httpx.Response(200, content=b""))

    with pytest.raises(ValueError):
        await downloader.download("http://cdn/a.mp3", str(tmp_path / "a.mp3"))


@pytest.mark.asyncio
async def test_empty_url_is_rejected(config, tmp_path):
    downloader = _downloader(config, lambda request: httpx.Response(200, content=b"x"))

    with pytest.raises(ValueError):
        await downloader.download("", str(tmp_path / "a.mp3"))
