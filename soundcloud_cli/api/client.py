"""
Async client for the SoundCloud v2 JSON API.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Type, TypeVar

import aiohttp
from pydantic import BaseModel, TypeAdapter

from soundcloud_cli.exceptions import HTTPStatusError, KindNotCorrectError, NoURLError
from soundcloud_cli.models.entities import Stream, Track, Transcoding

from .executor import DEFAULT_HEADERS, MAX_REQUEST_ATTEMPTS, execute

log = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

_TRACK_LIST = TypeAdapter(List[Track])


class SoundCloudAPIClient:
    """
    Client for api-v2.soundcloud.com.

    Every request carries the client_id scraped at startup; the client never
    renews it. All calls go through the retrying executor on one pooled session.
    """

    API_HOST = "api-v2.soundcloud.com"
    BASE_URL = f"https://{API_HOST}"
    SITE_URL = "https://soundcloud.com"

    def __init__(
        self,
        client_id: str,
        max_workers: int = 8,
        request_attempts: int = MAX_REQUEST_ATTEMPTS,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        """
        Initializes the API client.

        Args:
            client_id: 32-character client_id scraped from the web player scripts.
            max_workers: The number of concurrent workers, used to tune the connection pool.
            request_attempts: Attempts per request for transient transport errors.
            session: An existing session to use instead of creating one.
        """
        self.client_id = client_id
        self.max_workers = max_workers
        self.request_attempts = request_attempts
        self._session = session
        self._owns_session = session is None

    async def _initialize_session(self) -> aiohttp.ClientSession:
        """Ensures an active aiohttp session is available."""
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(
                limit=self.max_workers * 2,
                limit_per_host=self.max_workers,
                ttl_dns_cache=300,
                enable_cleanup_closed=True,
            )
            self._session = aiohttp.ClientSession(
                connector=connector,
                headers=DEFAULT_HEADERS,
                timeout=aiohttp.ClientTimeout(total=60, connect=15, sock_read=30),
            )
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Gracefully closes the aiohttp session if this client created it."""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()

    async def api_call(
        self, operation: str, endpoint: str, params: Optional[Dict[str, Any]] = None
    ) -> bytes:
        """
        Makes an authenticated GET request and returns the raw body. `params`
        are merged into any query string `endpoint` already carries.

        Raises:
            HTTPStatusError: The API answered with anything but 200.
        """
        session = await self._initialize_session()
        query = {**(params or {}), "client_id": self.client_id}

        response = await execute(
            session, endpoint, query, attempts=self.request_attempts
        )
        if response.status != 200:
            log.debug(f"{operation} for {endpoint} returned {response.status}")
            raise HTTPStatusError(operation, response.status)
        return response.body

    async def resolve(self, path: str, model: Type[M], kind: str) -> M:
        """
        Resolves a soundcloud.com path (e.g. "artist/track") to an entity.

        Raises:
            KindNotCorrectError: The entity behind the path is not a `kind`.
        """
        body = await self.api_call(
            "resolve", f"{self.BASE_URL}/resolve", {"url": f"{self.SITE_URL}/{path}"}
        )
        entity = model.model_validate_json(body)
        actual = getattr(entity, "kind", "")
        if actual != kind:
            raise KindNotCorrectError(kind, actual)
        return entity

    async def fetch_tracks(self, track_ids: Iterable[int]) -> List[Track]:
        """Fetches full track objects for a comma-joined list of ids in one call."""
        ids = ",".join(str(track_id) for track_id in track_ids)
        body = await self.api_call("tracks", f"{self.BASE_URL}/tracks", {"ids": ids})
        return _TRACK_LIST.validate_json(body)

    async def fetch_page(self, url: str) -> bytes:
        """Fetches one page of a listing endpoint given its cursor URL."""
        return await self.api_call("paginated.proceed", url)

    async def get_stream(self, transcoding: Transcoding, authorization: str) -> str:
        """
        Exchanges a rendition for the short-lived URL of its HLS manifest.

        Raises:
            NoURLError: The API returned no manifest URL.
        """
        body = await self.api_call(
            "getstream", transcoding.url, {"track_authorization": authorization}
        )
        stream = Stream.model_validate_json(body)
        if not stream.url:
            raise NoURLError("no url")
        return stream.url

    def user_tracks_url(self, user_id: int) -> str:
        return f"{self.BASE_URL}/users/{user_id}/tracks?limit=80000"
