"""
🧪 test_cloud_api.py: ендпоінти персональної хмари.
"""

import httpx
import pytest

from songbot.config.setup.constants import CONST
from songbot.errors.custom_errors import CloudApiError
from songbot.infrastructure.netease.cloud_api import CloudApi
from songbot.infrastructure.netease.credential_gate import CredentialGate


def _cloud_api(config, http):
    return CloudApi(config, http, CredentialGate(config, http))


def _page(start, count, has_more):
    return {
        "data": [{"songId": start + i, "songName": f"song{start + i}", "artist": ""} for i in range(count)],
        "hasMore": has_more,
    }


@pytest.mark.asyncio
async def test_list_songs_walks_pages_of_100(config, make_http):
    offsets = []

    def handler(request):
        offset = int(request.url.params["offset"])
        offsets.append(offset)
        assert request.url.params["limit"] == "100"
        return httpx.Response(200, json=_page(offset, 100 if offset == 0 else 5, offset == 0))

    tracks = await _cloud_api(config, make_http(handler, config)).list_songs()

    assert offsets == [0, 100]
    assert len(tracks) == 105
    assert all(t.is_cloud for t in tracks)
    assert tracks[0].artist == CONST.AUDIO.CLOUD_ARTIST_PLACEHOLDER


@pytest.mark.asyncio
async def test_list_songs_page_error_keeps_collected(config, make_http):
    def handler(request):
        if request.url.params["offset"] == "0":
            return httpx.Response(200, json=_page(0, 100, True))
        return httpx.Response(502)

    tracks = await _cloud_api(config, make_http(handler, config)).list_songs()
    assert len(tracks) == 100


@pytest.mark.asyncio
async def test_summary_reads_counts(config, make_http):
    handler = lambda request: httpx.Response(200, json={"count": 12, "size": 2048, "maxSize": 4096})  # noqa: E731

    summary = await _cloud_api(config, make_http(handler, config)).summary()

    assert (summary.count, summary.used_bytes, summary.max_bytes) == (12, 2048, 4096)


@pytest.mark.asyncio
async def test_upload_posts_multipart_and_returns_song_id(config, make_http, tmp_path):
    path = tmp_path / "a - b.mp3"
    path.write_bytes(b"ID3-audio")
    seen = {}

    def handler(request):
        seen["method"] = request.method
        seen["body"] = request.read()
        return httpx.Response(200, json={"code": 200, "privateCloud": {"songId": 555}})

    song_id = await _cloud_api(config, make_http(handler, config)).upload(str(path))

    assert song_id == 555
    assert seen["method"] == "POST"
    assert b'name="songFile"' in seen["body"]
    assert b"ID3-audio" in seen["body"]


@pytest.mark.asyncio
async def test_upload_rejected_raises(config, make_http, tmp_path):
    path = tmp_path / "x.mp3"
    path.write_bytes(b"1")
    handler = lambda request: httpx.Response(200, json={"code": 503})  # noqa: E731

    with pytest.raises(CloudApiError):
        await _cloud_api(config, make_http(handler, config)).upload(str(path))


@pytest.mark.asyncio
async def test_match_sends_ids(make_config, make_http):
    config = make_config(netease__user_id=42)
    seen = {}

    def handler(request):
        seen.update(dict(request.url.params))
        return httpx.Response(200, json={"code": 200})

    await _cloud_api(config, make_http(handler, config)).match(555, 1001)

    assert (seen["uid"], seen["sid"], seen["asid"]) == ("42", "555", "1001")
