"""
Dataclasses for per-track outcomes and download session statistics.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass
class TrackOutcome:
    """The result of running the single-track pipeline, including its retries."""

    track_id: int
    permalink: str
    path: Optional[str] = None
    bytes_written: int = 0
    attempts: int = 0
    error: Optional[BaseException] = field(default=None, repr=False)

    @property
    def success(self) -> bool:
        return self.error is None


@dataclass
class DownloadStats:
    """Tracks statistics for a download session."""

    tracks_downloaded: int = 0
    tracks_failed: int = 0
    total_size_downloaded: int = 0
    outcomes: Dict[int, TrackOutcome] = field(default_factory=dict, repr=False)

    def record(self, outcome: TrackOutcome) -> None:
        """Folds a track outcome into the session totals."""
        self.outcomes[outcome.track_id] = outcome
        if outcome.success:
            self.tracks_downloaded += 1
            self.total_size_downloaded += outcome.bytes_written
        else:
            self.tracks_failed += 1

    @property
    def failed_outcomes(self) -> list[TrackOutcome]:
        return [o for o in self.outcomes.values() if not o.success]
