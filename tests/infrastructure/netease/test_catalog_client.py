"""
🧪 test_catalog_client.py: розбір відповідей каталогу через httpx.MockTransport.
"""

import httpx
import pytest

from songbot.domain.music.entities import NO_COVER
from songbot.infrastructure.netease.catalog_client import CatalogClient, extract_wiki_tags, normalize_cover


def _search_payload():
    return {
        "result": {
            "songs": [
                {"id": 1, "name": "晴天", "artists": [{"name": "周杰伦"}], "duration": 269_000},
                {"id": 2, "name": "七里香", "artists": [{"name": "周杰伦"}], "duration": 299_000},
                {"name": "broken entry without id"},
            ]
        }
    }


@pytest.mark.asyncio
async def test_search_parses_tracks_and_sends_limit(make_http):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["params"] = dict(request.url.params)
        return httpx.Response(200, json=_search_payload())

    catalog = CatalogClient(make_http(handler))
    tracks = await catalog.search("周杰伦", 5)

    assert seen["path"] == "/search"
    assert seen["params"] == {"keywords": "周杰伦", "limit": "5"}
    assert [t.id for t in tracks] == [1, 2]
    assert tracks[0].artist == "周杰伦"
    assert tracks[0].duration_label == "04:29"
    assert not tracks[0].is_cloud


@pytest.mark.asyncio
async def test_search_with_zero_limit_makes_no_request(make_http):
    def handler(request):  # pragma: no cover - не має викликатися
        raise AssertionError("no request expected")

    assert await CatalogClient(make_http(handler)).search("x", 0) == []


@pytest.mark.asyncio
async def test_search_transport_error_yields_empty_list(make_http):
    def handler(request):
        raise httpx.ConnectError("down", request=request)

    assert await CatalogClient(make_http(handler)).search("x", 3) == []


@pytest.mark.asyncio
async def test_detail_maps_placeholder_cover_to_sentinel(make_http):
    def handler(request):
        assert request.url.params["ids"] == "1,2"
        return httpx.Response(
            200,
            json={
                "songs": [
                    {"id": 1, "name": "晴天", "ar": [{"name": "周杰伦"}], "al": {"picUrl": "http://p/a.jpg"}},
                    {
                        "id": 2,
                        "name": "七里香",
                        "ar": [{"name": "周杰伦"}],
                        "al": {"picUrl": "http://p/109951169484091680.jpg"},
                    },
                ]
            },
        )

    details = await CatalogClient(make_http(handler)).detail([1, 2])

    assert details[1].cover_url == "http://p/a.jpg"
    assert details[2].cover_url == NO_COVER


def test_normalize_cover():
    assert normalize_cover(None) is None
    assert normalize_cover("") is None
    assert normalize_cover("https://x/109951169484091680.jpg") == NO_COVER


@pytest.mark.asyncio
async def test_song_url_reads_first_entry(make_http):
    def handler(request):
        assert request.url.path == "/song/url/v1"
        assert request.headers["Cookie"] == "MUSIC_U=main"
        return httpx.Response(
            200,
            json={"data": [{"url": "http://cdn/a.flac", "level": "lossless", "size": 1048576, "type": "FLAC"}]},
        )

    song_url = await CatalogClient(make_http(handler)).song_url(1, "lossless", "MUSIC_U=main")

    assert song_url.url == "http://cdn/a.flac"
    assert song_url.level == "lossless"
    assert song_url.size == 1048576
    assert song_url.extension == "flac"


@pytest.mark.asyncio
async def test_song_url_without_data_is_none(make_http):
    catalog = CatalogClient(make_http(lambda request: httpx.Response(200, json={"code": 404})))
    assert await catalog.song_url(1, "exhigh") is None


def _creative(title=None, resources=None, text=None):
    ui = {}
    if title is not None:
        ui["mainTitle"] = {"title": title}
    if text is not None:
        ui["textLinks"] = [{"text": text}]
    node = {"uiElement": ui}
    if resources is not None:
        node["resources"] = resources
    return node


def _resource(title):
    return {"uiElement": {"mainTitle": {"title": title}}}


def test_wiki_tags_full_payload():
    payload = {
        "data": {
            "blocks": [
                {},
                {
                    "creatives": [
                        _creative(resources=[_resource("流行")]),
                        _creative(resources=[_resource("治愈"), _resource("夜晚"), _resource("学习"), _resource("多余")]),
                        _creative(title="BPM", text="120"),
                    ]
                },
            ]
        }
    }

    assert extract_wiki_tags(payload) == ["流行", "治愈", "夜晚", "学习", "BPM 120"]


@pytest.mark.parametrize(
    "payload",
    [
        None,
        {},
        {"data": {"blocks": []}},
        {"data": {"blocks": [{}, {"creatives": "oops"}]}},
    ],
)
def test_wiki_tags_tolerate_missing_blocks(payload):
    assert extract_wiki_tags(payload) == []


def test_wiki_tags_partial_payload_keeps_what_exists():
    payload = {"data": {"blocks": [{}, {"creatives": [_creative(resources=[_resource("摇滚")])]}]}}
    assert extract_wiki_tags(payload) == ["摇滚"]
