"""
Web Scraping Layer.

This package contains modules for fetching and parsing the SoundCloud web
player, primarily to extract the public API client_id.
"""

from .client_id import (
    extract_client_id,
    extract_script_urls,
    fetch_client_id,
    find_client_id,
)

__all__ = [
    "extract_client_id",
    "extract_script_urls",
    "fetch_client_id",
    "find_client_id",
]
