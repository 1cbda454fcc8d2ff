"""
🧪 test_cloud_uploader.py: завантаження в хмару з повторами.
"""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from songbot.domain.music.entities import ShareCard
from songbot.errors.custom_errors import CloudApiError, FileNameFormatError, FileNotReadyError, UploadFailedError
from songbot.infrastructure.music.cloud_uploader import CloudUploader


class _Sleeper:
    def __init__(self):
        self.calls = []

    async def __call__(self, seconds):
        self.calls.append(seconds)


def _uploader(config, *, upload=None, match=None, local_copy=None):
    cloud_api = AsyncMock()
    if upload is not None:
        cloud_api.upload.side_effect = upload
    else:
        cloud_api.upload.return_value = 555
    if match is not None:
        cloud_api.match.side_effect = match
    library = AsyncMock()
    orchestrator = MagicMock()
    orchestrator.watch_timeout.return_value = 120.0
    orchestrator.fetch_local_copy = AsyncMock(return_value=local_copy)
    sleeper = _Sleeper()
    uploader = CloudUploader(config, cloud_api, library, orchestrator, sleep=sleeper)
    return uploader, cloud_api, library, orchestrator, sleeper


@pytest.fixture
def audio_file(tmp_path):
    path = tmp_path / "梁静茹 - 勇气.mp3"
    path.write_bytes(b"audio")
    return path


@pytest.mark.asyncio
async def test_success_matches_refreshes_and_removes_file(config, audio_file):
    uploader, cloud_api, library, _, _ = _uploader(config)

    song_id = await uploader.upload_with_retry(str(audio_file), linked_catalog_id=254574)

    assert song_id == 555
    cloud_api.match.assert_awaited_once_with(555, 254574)
    library.refresh.assert_awaited_once()
    assert not audio_file.exists()


@pytest.mark.asyncio
async def test_match_failure_is_logged_not_retried(config, audio_file):
    uploader, cloud_api, library, _, _ = _uploader(config, match=CloudApiError("rejected"))

    assert await uploader.upload_with_retry(str(audio_file), linked_catalog_id=1) == 555

    cloud_api.upload.assert_awaited_once()
    cloud_api.match.assert_awaited_once()
    library.refresh.assert_awaited_once()


@pytest.mark.asyncio
async def test_exhausted_retries_remove_temp_file(make_config, audio_file):
    config = make_config(upload__retries=3, upload__backoff_sec=2.0)
    uploader, cloud_api, library, _, sleeper = _uploader(config, upload=httpx.ConnectError("down"))

    with pytest.raises(UploadFailedError) as info:
        await uploader.upload_with_retry(str(audio_file))

    assert info.value.attempts == 3
    assert cloud_api.upload.await_count == 3
    assert sleeper.calls == [2.0, 4.0]
    assert not audio_file.exists()
    library.refresh.assert_not_awaited()


@pytest.mark.asyncio
async def test_transient_error_then_success(config, audio_file):
    uploader, cloud_api, _, _, _ = _uploader(config, upload=[CloudApiError("busy"), 777])

    assert await uploader.upload_with_retry(str(audio_file)) == 777
    assert cloud_api.upload.await_count == 2
    cloud_api.match.assert_not_awaited()


@pytest.mark.asyncio
async def test_bad_file_name_rejected_before_any_network(config):
    uploader, cloud_api, _, _, _ = _uploader(config)
    materialize = AsyncMock(return_value="/tmp/whatever.mp3")

    with pytest.raises(FileNameFormatError):
        await uploader.upload_named_file("勇气.mp3", materialize)

    materialize.assert_not_awaited()
    cloud_api.upload.assert_not_awaited()


@pytest.mark.asyncio
async def test_named_file_is_materialized_and_uploaded(config, audio_file):
    uploader, cloud_api, _, _, _ = _uploader(config)
    materialize = AsyncMock(return_value=str(audio_file))

    assert await uploader.upload_named_file("梁静茹 - 勇气.mp3", materialize) == 555

    materialize.assert_awaited_once()
    cloud_api.upload.assert_awaited_once_with(str(audio_file))


@pytest.mark.asyncio
async def test_share_card_timeout_reports_wait(config):
    uploader, cloud_api, _, orchestrator, _ = _uploader(config, local_copy=None)

    with pytest.raises(FileNotReadyError) as info:
        await uploader.upload_share_card(ShareCard(song_id=1, title="t", artist="a"), "42")

    assert "120" in info.value.message
    orchestrator.fetch_local_copy.assert_awaited_once()
    cloud_api.upload.assert_not_awaited()


@pytest.mark.asyncio
async def test_share_card_upload_links_catalog_id(config, audio_file):
    uploader, cloud_api, _, _, _ = _uploader(config, local_copy=str(audio_file))

    await uploader.upload_share_card(ShareCard(song_id=254574, title="勇气", artist="梁静茹"), "42")

    cloud_api.match.assert_awaited_once_with(555, 254574)
