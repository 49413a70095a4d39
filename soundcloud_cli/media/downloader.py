"""
Rebuilds HLS streams into a single byte stream and fetches cover art, using
shared connection pools for the media and image CDNs.
"""

import asyncio
import logging
from typing import Dict, List, Optional, Tuple

import aiohttp

from soundcloud_cli.api.executor import DEFAULT_HEADERS, MAX_REQUEST_ATTEMPTS, execute
from soundcloud_cli.exceptions import HTTPStatusError

log = logging.getLogger(__name__)

HLS_POOL = "hls"
IMAGE_POOL = "img"

_connection_pools: Dict[str, aiohttp.ClientSession] = {}
_pool_lock = asyncio.Lock()


async def get_connection_pool(name: str, max_workers: int = 8) -> aiohttp.ClientSession:
    """
    Gets or creates the shared aiohttp ClientSession for one CDN.

    Only one pool per name is created for the lifetime of the application run.

    Args:
        name: The pool to fetch, HLS_POOL or IMAGE_POOL.
        max_workers: Maximum concurrent connections (should match config.max_workers).
    """
    async with _pool_lock:
        pool = _connection_pools.get(name)
        if pool and not pool.closed:
            return pool

        connector = aiohttp.TCPConnector(
            limit=max_workers * 2,  # Total connections
            limit_per_host=max_workers,
            ttl_dns_cache=600,  # 10 minutes
            keepalive_timeout=30,
            enable_cleanup_closed=True,
        )
        timeout = aiohttp.ClientTimeout(total=None, sock_connect=15, sock_read=90)
        pool = aiohttp.ClientSession(
            connector=connector, timeout=timeout, headers=DEFAULT_HEADERS
        )
        _connection_pools[name] = pool
        log.debug(f"Created '{name}' pool with limit_per_host={max_workers}")

    return pool


async def close_connection_pool() -> None:
    """Closes every shared CDN connection pool."""
    async with _pool_lock:
        for name, pool in list(_connection_pools.items()):
            if not pool.closed:
                await pool.close()
                log.debug(f"Shared '{name}' connection pool closed.")
        _connection_pools.clear()


def parse_manifest(manifest: str) -> List[str]:
    """
    Returns the segment URLs of an HLS media playlist in file order.
    Blank lines and `#` directives never name a segment.
    """
    segments = []
    for line in manifest.split("\n"):
        line = line.rstrip("\r")
        if not line or line.startswith("#"):
            continue
        segments.append(line)
    return segments


class Downloader:
    """Fetches HLS segments and artwork through the retrying executor."""

    def __init__(
        self,
        max_workers: int = 8,
        request_attempts: int = MAX_REQUEST_ATTEMPTS,
        hls_session: Optional[aiohttp.ClientSession] = None,
        image_session: Optional[aiohttp.ClientSession] = None,
    ):
        self.max_workers = max_workers
        self.request_attempts = request_attempts
        self._hls_session = hls_session
        self._image_session = image_session

    async def _pool(self, name: str) -> aiohttp.ClientSession:
        override = self._hls_session if name == HLS_POOL else self._image_session
        return override or await get_connection_pool(name, self.max_workers)

    async def download_hls(self, manifest_url: str) -> bytes:
        """
        Downloads an HLS manifest and every segment it lists, one after another,
        and returns the concatenated payloads in manifest order.

        Any failing segment aborts the whole reconstruction; nothing partial is
        returned.
        """
        session = await self._pool(HLS_POOL)
        response = await execute(session, manifest_url, attempts=self.request_attempts)
        if response.status != 200:
            raise HTTPStatusError("download_hls: manifest", response.status)

        segments = parse_manifest(response.text())
        log.debug(f"Manifest lists {len(segments)} segments.")

        result = bytearray()
        for segment_url in segments:
            response = await execute(
                session, segment_url, attempts=self.request_attempts
            )
            if response.status != 200:
                raise HTTPStatusError("download_hls: segment", response.status)
            result += response.body

        return bytes(result)

    async def download_image(self, artwork_url: str) -> Tuple[bytes, str]:
        """
        Downloads cover art at 500x500 and returns its bytes and MIME type.
        """
        url = artwork_url.replace("-large.", "-t500x500.", 1)
        session = await self._pool(IMAGE_POOL)
        response = await execute(session, url, attempts=self.request_attempts)
        if response.status != 200:
            raise HTTPStatusError("download_image", response.status)
        return response.body, response.content_type
