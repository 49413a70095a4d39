"""
Handles the processing of a single track, from stream resolution to tagging.
"""

import logging
from pathlib import Path
from typing import Tuple

import aiofiles
from rich.markup import escape

from soundcloud_cli.api.client import SoundCloudAPIClient
from soundcloud_cli.exceptions import IncompatibleStreamError, TrackWriteError
from soundcloud_cli.media import Downloader, Tagger
from soundcloud_cli.models.entities import Track
from soundcloud_cli.utils.formatting import format_size
from soundcloud_cli.utils.path import safe_name

log = logging.getLogger(__name__)


def track_filename(track: Track) -> str:
    return f"{safe_name(track.permalink, fallback=str(track.id))}.mp3"


class TrackProcessor:
    """
    Runs the single-track pipeline: pick a rendition, exchange it for a manifest,
    rebuild the stream, then write the tag followed by the audio data.
    """

    def __init__(
        self,
        api_client: SoundCloudAPIClient,
        downloader: Downloader,
        tagger: Tagger,
        embed_art: bool = True,
    ):
        self.api_client = api_client
        self.downloader = downloader
        self.tagger = tagger
        self.embed_art = embed_art

    async def _render_tag(self, track: Track) -> bytes:
        cover, cover_mime = None, None
        if self.embed_art and track.artwork_url:
            cover, cover_mime = await self.downloader.download_image(track.artwork_url)

        return self.tagger.render(
            title=track.title,
            artist=track.user.username,
            genre=track.genre or None,
            cover=cover,
            cover_mime=cover_mime,
        )

    async def process_track(self, track: Track, directory: Path) -> Tuple[Path, int]:
        """
        Downloads one track into `directory`.

        Returns:
            The written file and the number of bytes written.

        Raises:
            IncompatibleStreamError: The track has no HLS MP3 rendition.
            TrackWriteError: Writing the tag or the audio failed part-way.
        """
        transcoding = track.media.select_compatible()
        if transcoding is None:
            reason = "incompatible stream"
            if track.is_blocked:
                reason += " (track is blocked)"
            raise IncompatibleStreamError(reason)

        manifest_url = await self.api_client.get_stream(
            transcoding, track.track_authorization
        )
        data = await self.downloader.download_hls(manifest_url)

        final_path = directory / track_filename(track)
        written = 0
        async with aiofiles.open(final_path, "wb") as f:
            try:
                written += await f.write(await self._render_tag(track))
            except Exception as e:
                raise TrackWriteError(
                    f"failed to add metadata: {e} --- wrote {format_size(written)}",
                    written,
                ) from e

            try:
                written += await f.write(data)
            except Exception as e:
                raise TrackWriteError(
                    f"failed to write track: {e} --- wrote {format_size(written)}",
                    written,
                ) from e

        log.info(
            f"  [green]✓[/] Wrote {format_size(written)} to "
            f"[dim]{escape(final_path.name)}[/dim]"
        )
        return final_path, written
