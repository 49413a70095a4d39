"""
The main orchestrator for handling URLs, resolving entities, and fanning out
track downloads.
"""

import asyncio
import logging
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from rich.markup import escape

from soundcloud_cli.api.client import SoundCloudAPIClient
from soundcloud_cli.api.pagination import PaginationCursor
from soundcloud_cli.exceptions import InvalidURLError
from soundcloud_cli.media import Downloader, Tagger
from soundcloud_cli.models.config import DownloadConfig
from soundcloud_cli.models.entities import MissingTrack, Playlist, Track, User
from soundcloud_cli.models.stats import DownloadStats, TrackOutcome
from soundcloud_cli.utils.batch_fetcher import BatchTrackFetcher
from soundcloud_cli.utils.path import (
    KIND_PLAYLIST,
    KIND_TRACK,
    KIND_USER,
    create_dir,
    parse_soundcloud_url,
    safe_name,
)

from .track_processor import TrackProcessor

log = logging.getLogger(__name__)


def partition_playlist(playlist: Playlist) -> Tuple[List[Track], List[MissingTrack]]:
    """
    Splits playlist entries into fully populated tracks and references to the
    partial ones, which keep their original position.
    """
    tracks: List[Track] = []
    missing: List[MissingTrack] = []
    for index, track in enumerate(playlist.tracks):
        if track.is_partial:
            missing.append(MissingTrack(id=track.id, index=index))
        else:
            tracks.append(track)
    return tracks, missing


class DownloadManager:
    """Orchestrates the entire download process."""

    def __init__(
        self,
        config: DownloadConfig,
        api_client: SoundCloudAPIClient,
        downloader: Optional[Downloader] = None,
        tagger: Optional[Tagger] = None,
    ):
        self.config = config
        self.api_client = api_client
        self.stats = DownloadStats()
        self.base_dir = Path(config.output_dir)
        self.track_processor = TrackProcessor(
            api_client,
            downloader or Downloader(config.max_workers, config.request_attempts),
            tagger or Tagger(),
            embed_art=config.embed_art,
        )
        self.batch_fetcher = BatchTrackFetcher(api_client)
        self.semaphore = asyncio.Semaphore(config.max_workers)

    async def execute_download(self, url: Optional[str] = None) -> None:
        """
        Routes a URL to the handler for the entity it points at.

        Resolution failures are logged, not raised: the run is best-effort once
        the URL itself has been accepted.

        Raises:
            InvalidURLError: The URL does not point at a track, playlist or user.
        """
        url = url or self.config.source_url
        url_info = parse_soundcloud_url(url)
        if not url_info:
            raise InvalidURLError(f"Invalid or unsupported URL: {url}")

        kind, path = url_info
        handlers = {
            KIND_TRACK: self.download_by_path,
            KIND_PLAYLIST: self.download_playlist,
            KIND_USER: self.download_user,
        }

        self.base_dir.mkdir(parents=True, exist_ok=True)
        try:
            await handlers[kind](path)
        except Exception as e:
            log.error(f"[red]✗ Failed to download {escape(path)}: {escape(str(e))}[/red]")
            log.debug("Full traceback:", exc_info=True)

    async def download_by_path(self, path: str) -> TrackOutcome:
        """Downloads the single track behind `path` into the output directory."""
        track = await self.api_client.resolve(path, Track, KIND_TRACK)
        return await self._download_and_record(track, self.base_dir)

    async def download_playlist(self, path: str) -> Dict[int, TrackOutcome]:
        """Downloads every track of a playlist into a directory named after it."""
        playlist = await self.api_client.resolve(path, Playlist, KIND_PLAYLIST)
        log.info(f"\n[bold green]🎵 Playlist:[/] {escape(playlist.permalink)}")

        tracks, missing = partition_playlist(playlist)
        if missing:
            log.debug(f"{len(missing)} playlist entries are partial; backfilling.")
            tracks.extend(await self.batch_fetcher.backfill(missing))

        if not tracks:
            log.info("No tracks in playlist")
            return {}

        directory = self.base_dir / safe_name(playlist.permalink)
        return await self.download_tracks(directory, tracks)

    async def download_user(self, path: str) -> Dict[int, TrackOutcome]:
        """Downloads every track uploaded by a user into a directory named after them."""
        user = await self.api_client.resolve(path, User, KIND_USER)
        log.info(f"\n[bold magenta]🎤 User:[/] {escape(user.username or user.permalink)}")

        cursor = PaginationCursor(
            self.api_client, Track, self.api_client.user_tracks_url(user.id)
        )
        tracks: List[Track] = []
        while not cursor.exhausted:
            tracks.extend(await cursor.proceed(unfold=True))

        if not tracks:
            log.info("User has no tracks")
            return {}

        directory = self.base_dir / safe_name(user.permalink)
        return await self.download_tracks(directory, tracks)

    async def download_tracks(
        self, directory: Path, tracks: Sequence[Track]
    ) -> Dict[int, TrackOutcome]:
        """
        Creates `directory` and downloads all tracks into it concurrently, at most
        `max_workers` at a time. A failing track never stops its siblings. A track
        listed more than once is downloaded once.

        Returns:
            A mapping of track id to the outcome of its download.

        Raises:
            OSError: The directory already exists or cannot be created.
        """
        unique = list({track.id: track for track in tracks}.values())
        if len(unique) < len(tracks):
            log.debug(f"Skipping {len(tracks) - len(unique)} duplicate entries.")

        log.info(f"Downloading {len(unique)} tracks")
        directory.parent.mkdir(parents=True, exist_ok=True)
        create_dir(directory)

        async def worker(track: Track) -> TrackOutcome:
            async with self.semaphore:
                return await self._download_and_record(track, directory)

        outcomes = await asyncio.gather(*(worker(track) for track in unique))
        return {outcome.track_id: outcome for outcome in outcomes}

    async def download(self, track: Track, directory: Path) -> TrackOutcome:
        """
        Runs the single-track pipeline, restarting it from scratch on any failure
        up to `track_attempts` times.
        """
        outcome = TrackOutcome(track_id=track.id, permalink=track.permalink)
        attempts = self.config.track_attempts
        for attempt in range(1, attempts + 1):
            outcome.attempts = attempt
            try:
                path, written = await self.track_processor.process_track(
                    track, directory
                )
            except Exception as e:
                outcome.error = e
                log.debug(
                    f"Attempt {attempt}/{attempts} for '{track.permalink}' failed: {e}"
                )
                continue

            outcome.path, outcome.bytes_written, outcome.error = str(path), written, None
            break
        return outcome

    async def _download_and_record(self, track: Track, directory: Path) -> TrackOutcome:
        outcome = await self.download(track, directory)
        self.stats.record(outcome)
        if not outcome.success:
            log.error(
                f"[red]  ✗ Failed to download {escape(track.permalink)}: "
                f"{escape(str(outcome.error))}[/red]"
            )
        return outcome
