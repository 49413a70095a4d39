import pytest

from soundcloud_cli.models.config import DownloadConfig
from tests.support import fakes


@pytest.fixture
def fake_downloader():
    return fakes.FakeDownloader()


@pytest.fixture
def config(tmp_path):
    """A config writing into a temporary directory, without cover art."""
    return DownloadConfig(output_dir=str(tmp_path / "out"), embed_art=False)
