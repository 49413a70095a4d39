import io

import mutagen.id3 as id3

from soundcloud_cli.media.tagger import Tagger


def _load(data: bytes) -> id3.ID3:
    return id3.ID3(io.BytesIO(data), load_v1=False)


def test_render_produces_id3v23_header():
    data = Tagger().render(title="Song", artist="Artist")

    assert data[:3] == b"ID3"
    assert data[3] == 3


def test_render_text_frames():
    tags = _load(Tagger().render(title="Song", artist="Artist", genre="House"))

    assert tags["TIT2"].text == ["Song"]
    assert tags["TPE1"].text == ["Artist"]
    assert tags["TCON"].text == ["House"]


def test_render_without_genre_or_cover():
    tags = _load(Tagger().render(title="Song", artist="Artist"))

    assert "TCON" not in tags
    assert not tags.getall("APIC")


def test_render_front_cover():
    tags = _load(
        Tagger().render(
            title="Song", artist="Artist", cover=b"\x89PNGdata", cover_mime="image/png"
        )
    )

    (apic,) = tags.getall("APIC")
    assert apic.type == 3
    assert apic.mime == "image/png"
    assert apic.data == b"\x89PNGdata"


def test_render_cover_defaults_to_jpeg():
    tags = _load(Tagger().render(title="Song", artist="Artist", cover=b"\xff\xd8"))

    assert tags.getall("APIC")[0].mime == "image/jpeg"
