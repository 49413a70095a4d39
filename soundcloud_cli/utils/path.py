"""
Utilities for handling file paths and URL parsing.
"""

from pathlib import Path
from typing import Optional, Tuple
from urllib.parse import urlparse

from pathvalidate import sanitize_filename

KIND_TRACK = "track"
KIND_PLAYLIST = "playlist"
KIND_USER = "user"


def parse_soundcloud_url(url: str) -> Optional[Tuple[str, str]]:
    """
    Parses a SoundCloud URL into the kind of entity it points at and its path.

        https://soundcloud.com/artist              -> ("user", "artist")
        https://soundcloud.com/artist/track        -> ("track", "artist/track")
        https://soundcloud.com/artist/sets/mixtape -> ("playlist", "artist/sets/mixtape")
    """
    path = urlparse(url.strip()).path.strip("/")
    if not path:
        return None
    if "/sets/" in path:
        return KIND_PLAYLIST, path
    if "/" not in path:
        return KIND_USER, path
    return KIND_TRACK, path


def create_dir(directory_path: Path) -> None:
    """
    Creates a fresh directory. Fails if it already exists, so a run never
    merges into the output of an earlier one.
    """
    directory_path.mkdir(parents=False, exist_ok=False)


def safe_name(name: str, fallback: str = "untitled") -> str:
    """Sanitizes a permalink for use as a file or directory name."""
    return sanitize_filename(name, platform="auto") or fallback
