import pytest

from soundcloud_cli.utils.formatting import format_duration, format_size
from soundcloud_cli.utils.path import create_dir, parse_soundcloud_url, safe_name


@pytest.mark.parametrize(
    "url, expected",
    [
        ("https://soundcloud.com/artist", ("user", "artist")),
        ("https://soundcloud.com/artist/", ("user", "artist")),
        ("https://soundcloud.com/artist/a-track", ("track", "artist/a-track")),
        (
            "https://soundcloud.com/artist/sets/mix?si=123",
            ("playlist", "artist/sets/mix"),
        ),
        ("https://soundcloud.com/", None),
        ("", None),
    ],
)
def test_parse_soundcloud_url(url, expected):
    assert parse_soundcloud_url(url) == expected


def test_create_dir_refuses_existing(tmp_path):
    target = tmp_path / "set"
    create_dir(target)

    assert target.is_dir()
    with pytest.raises(FileExistsError):
        create_dir(target)


def test_safe_name():
    assert safe_name("a/b") == "ab"
    assert safe_name("") == "untitled"
    assert safe_name("", fallback="42") == "42"


@pytest.mark.parametrize(
    "size, expected",
    [(0, "0 B"), (512, "512.0 B"), (1536, "1.5 KB"), (5 * 1024**2, "5.0 MB")],
)
def test_format_size(size, expected):
    assert format_size(size) == expected


@pytest.mark.parametrize(
    "seconds, expected",
    [(0, "0s"), (59.9, "59s"), (61, "1m 1s"), (3600, "1h"), (3725, "1h 2m 5s")],
)
def test_format_duration(seconds, expected):
    assert format_duration(seconds) == expected
