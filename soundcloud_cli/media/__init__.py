"""
Media Processing Layer.

This package is responsible for all media operations: rebuilding HLS streams,
fetching cover art and rendering metadata tags.
"""

from .downloader import Downloader, close_connection_pool, parse_manifest
from .tagger import Tagger

__all__ = ["Downloader", "Tagger", "close_connection_pool", "parse_manifest"]
