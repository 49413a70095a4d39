"""
Executes single HTTP requests against a shared aiohttp pool, retrying
transient transport failures without delay.
"""

import asyncio
import errno
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

import aiohttp

log = logging.getLogger(__name__)

MAX_REQUEST_ATTEMPTS = 10

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/130.0.0.0 Safari/537.3"
)
# aiohttp decodes these transparently (br and zstd via the speedups extra)
ACCEPT_ENCODING = "gzip, deflate, br, zstd"
DEFAULT_HEADERS = {"User-Agent": USER_AGENT, "Accept-Encoding": ACCEPT_ENCODING}

_RETRYABLE_ERRNOS = frozenset({errno.ETIMEDOUT, errno.EPIPE})


@dataclass(frozen=True)
class FetchedResponse:
    """A completed response whose body has already been read and decompressed."""

    status: int
    headers: Mapping[str, str]
    body: bytes

    @property
    def content_type(self) -> str:
        return self.headers.get("Content-Type", "")

    def text(self, encoding: str = "utf-8") -> str:
        return self.body.decode(encoding, errors="replace")


def is_retryable(exc: BaseException) -> bool:
    """
    Classifies a transport error. Timeouts of any kind (read, connect, TLS
    handshake, OS level), a server closing the connection and broken pipes are
    transient; everything else is fatal for the request.
    """
    if isinstance(exc, (asyncio.TimeoutError, aiohttp.ServerDisconnectedError)):
        return True
    if isinstance(exc, aiohttp.ClientConnectorError) and isinstance(
        exc.os_error, TimeoutError
    ):
        return True
    if isinstance(exc, OSError):
        return (
            isinstance(exc, (TimeoutError, BrokenPipeError))
            or exc.errno in _RETRYABLE_ERRNOS
        )
    return False


async def execute(
    session: aiohttp.ClientSession,
    url: str,
    params: Optional[Mapping[str, Any]] = None,
    attempts: int = MAX_REQUEST_ATTEMPTS,
) -> FetchedResponse:
    """
    Issues a GET request, retrying up to `attempts` times on transient transport
    errors. The HTTP status is not inspected; callers decide what a non-200
    response means.

    Raises:
        The last transport error once all attempts are exhausted, or the first
        non-retryable one immediately.
    """
    last_exception: Optional[BaseException] = None
    for attempt in range(1, attempts + 1):
        try:
            async with session.get(url, params=params) as response:
                body = await response.read()
                return FetchedResponse(response.status, response.headers, body)
        except Exception as e:
            if not is_retryable(e):
                raise
            last_exception = e
            log.debug(f"Request attempt {attempt}/{attempts} for {url} failed: {e!r}")

    raise last_exception
