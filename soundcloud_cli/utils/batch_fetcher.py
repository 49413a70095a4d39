"""
Backfills partially populated playlist entries by fetching the full tracks in
id batches.
"""

import logging
from typing import TYPE_CHECKING, List, Sequence, Tuple

from soundcloud_cli.models.entities import MissingTrack, Track

if TYPE_CHECKING:
    from soundcloud_cli.api.client import SoundCloudAPIClient

log = logging.getLogger(__name__)

MAX_BATCH_SIZE = 50


def split_batch(
    missing: Sequence[MissingTrack], size: int = MAX_BATCH_SIZE
) -> Tuple[List[MissingTrack], List[MissingTrack]]:
    """Splits off the first `size` references; the rest is returned for the next round."""
    return list(missing[:size]), list(missing[size:])


class BatchTrackFetcher:
    """
    Fetches tracks by id, at most MAX_BATCH_SIZE per request.
    """

    def __init__(
        self, api_client: "SoundCloudAPIClient", batch_size: int = MAX_BATCH_SIZE
    ):
        """
        Args:
            api_client: The SoundCloudAPIClient instance.
            batch_size: Maximum number of ids per request.
        """
        self.api_client = api_client
        self.batch_size = batch_size

    async def fetch_next(
        self, missing: Sequence[MissingTrack]
    ) -> Tuple[List[Track], List[MissingTrack]]:
        """
        Fetches the first batch of `missing`.

        Returns:
            The fetched tracks, in whatever order the API returns them, and the
            references still left to fetch.
        """
        batch, rest = split_batch(missing, self.batch_size)
        log.debug(
            f"Fetching {len(batch)} missing tracks ({len(rest)} left afterwards)..."
        )
        tracks = await self.api_client.fetch_tracks(ref.id for ref in batch)
        return tracks, rest

    async def backfill(self, missing: Sequence[MissingTrack]) -> List[Track]:
        """Fetches every referenced track, batch after batch."""
        tracks: List[Track] = []
        while missing:
            fetched, missing = await self.fetch_next(missing)
            tracks.extend(fetched)
        return tracks
