"""
Data Models Layer.

This package contains the Pydantic models for API entities and configuration,
and the dataclasses used to report download outcomes.
"""

from .config import DownloadConfig
from .entities import (
    Format,
    Media,
    MissingTrack,
    Paginated,
    Playlist,
    Stream,
    Track,
    Transcoding,
    User,
)
from .stats import DownloadStats, TrackOutcome

__all__ = [
    "DownloadConfig",
    "DownloadStats",
    "Format",
    "Media",
    "MissingTrack",
    "Paginated",
    "Playlist",
    "Stream",
    "Track",
    "TrackOutcome",
    "Transcoding",
    "User",
]
