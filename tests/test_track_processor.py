import asyncio

import pytest

from soundcloud_cli.core.track_processor import TrackProcessor, track_filename
from soundcloud_cli.exceptions import IncompatibleStreamError, TrackWriteError
from soundcloud_cli.media.tagger import Tagger
from soundcloud_cli.models.entities import Track
from tests.support import factories
from tests.support.fakes import FakeAPIClient, FakeDownloader


class BrokenTagger:
    def render(self, **kwargs):
        raise RuntimeError("tag exploded")


def _track(**kwargs):
    return Track.model_validate(factories.track_payload(1, **kwargs))


def test_process_track_writes_tag_then_audio(tmp_path):
    client = FakeAPIClient()
    downloader = FakeDownloader(default=b"AUDIO-FRAMES")
    processor = TrackProcessor(client, downloader, Tagger(), embed_art=False)

    path, written = asyncio.run(processor.process_track(_track(), tmp_path))

    data = path.read_bytes()
    assert path == tmp_path / "song-1.mp3"
    assert data.startswith(b"ID3")
    assert data.endswith(b"AUDIO-FRAMES")
    assert written == len(data)
    assert client.streams == ["https://api/media/1/hls"]
    assert downloader.hls_calls == ["https://api/media/1/hls/playlist.m3u8"]


def test_process_track_embeds_artwork(tmp_path):
    downloader = FakeDownloader()
    processor = TrackProcessor(FakeAPIClient(), downloader, Tagger(), embed_art=True)
    track = _track(artwork_url="https://i1.sndcdn.com/artworks-1-large.jpg")

    asyncio.run(processor.process_track(track, tmp_path))

    assert downloader.image_calls == ["https://i1.sndcdn.com/artworks-1-large.jpg"]


def test_process_track_without_artwork_skips_image(tmp_path):
    downloader = FakeDownloader()
    processor = TrackProcessor(FakeAPIClient(), downloader, Tagger(), embed_art=True)

    asyncio.run(processor.process_track(_track(), tmp_path))

    assert downloader.image_calls == []


def test_incompatible_stream(tmp_path):
    processor = TrackProcessor(FakeAPIClient(), FakeDownloader(), Tagger())
    track = _track(transcodings=[])

    with pytest.raises(IncompatibleStreamError) as excinfo:
        asyncio.run(processor.process_track(track, tmp_path))
    assert "blocked" not in str(excinfo.value)
    assert not any(tmp_path.iterdir())


def test_incompatible_blocked_stream_says_so(tmp_path):
    processor = TrackProcessor(FakeAPIClient(), FakeDownloader(), Tagger())
    track = _track(transcodings=[], policy="BLOCK")

    with pytest.raises(IncompatibleStreamError, match="blocked"):
        asyncio.run(processor.process_track(track, tmp_path))


def test_tag_failure_reports_bytes_written(tmp_path):
    processor = TrackProcessor(FakeAPIClient(), FakeDownloader(), BrokenTagger())

    with pytest.raises(TrackWriteError, match="failed to add metadata") as excinfo:
        asyncio.run(processor.process_track(_track(), tmp_path))
    assert excinfo.value.bytes_written == 0


def test_track_filename_falls_back_to_id():
    track = Track.model_validate({"id": 77, "title": "x", "permalink": ""})

    assert track_filename(track) == "77.mp3"
