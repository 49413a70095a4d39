"""
Renders ID3v2 tags for downloaded tracks.
"""

import io
from typing import Optional

import mutagen.id3 as id3

DEFAULT_COVER_MIME = "image/jpeg"


class Tagger:
    """Builds the ID3v2.3 tag block that is written in front of the MP3 data."""

    def render(
        self,
        title: str,
        artist: str,
        genre: Optional[str] = None,
        cover: Optional[bytes] = None,
        cover_mime: Optional[str] = None,
    ) -> bytes:
        """
        Returns a serialized ID3v2.3 tag. Prepending it to raw MPEG audio frames
        yields a tagged MP3 file.
        """
        tag = id3.ID3()
        tag.add(id3.TIT2(encoding=3, text=title))
        tag.add(id3.TPE1(encoding=3, text=artist))
        if genre:
            tag.add(id3.TCON(encoding=3, text=genre))
        if cover:
            tag.add(
                id3.APIC(
                    encoding=3,
                    mime=cover_mime or DEFAULT_COVER_MIME,
                    type=3,  # front cover
                    desc="Cover",
                    data=cover,
                )
            )

        buffer = io.BytesIO()
        tag.save(buffer, v2_version=3)
        return buffer.getvalue()
