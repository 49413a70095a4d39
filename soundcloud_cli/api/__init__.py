"""
SoundCloud API Layer.

This package handles all communication with the SoundCloud v2 API.
"""

from .client import SoundCloudAPIClient
from .executor import FetchedResponse, execute, is_retryable
from .pagination import PaginationCursor

__all__ = [
    "FetchedResponse",
    "PaginationCursor",
    "SoundCloudAPIClient",
    "execute",
    "is_retryable",
]
