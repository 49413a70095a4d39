"""
Cursor-based pagination over SoundCloud listing endpoints.
"""

import logging
from typing import TYPE_CHECKING, Generic, List, Type, TypeVar

from soundcloud_cli.models.entities import Paginated

if TYPE_CHECKING:
    from .client import SoundCloudAPIClient

log = logging.getLogger(__name__)

T = TypeVar("T")


class PaginationCursor(Generic[T]):
    """
    Walks a listing endpoint by following its `next_href` cursor.

    The caller drives the walk:

        cursor = PaginationCursor(client, Track, first_url)
        while cursor.next_href:
            await cursor.proceed(unfold=True)
            items.extend(cursor.collection)
    """

    def __init__(
        self, api_client: "SoundCloudAPIClient", item_type: Type[T], next_href: str
    ):
        self._api_client = api_client
        self._page_model = Paginated[item_type]
        self.collection: List[T] = []
        self.next_href = next_href

    @property
    def exhausted(self) -> bool:
        return not self.next_href

    async def proceed(self, unfold: bool = False) -> List[T]:
        """
        Fetches the page behind the current cursor and advances it.

        A page whose cursor equals the one that fetched it ends the walk, since the
        API sometimes echoes the same cursor forever. With `unfold`, empty pages
        that still carry a cursor are skipped until items appear or the listing
        ends.
        """
        while True:
            old_next = self.next_href
            body = await self._api_client.fetch_page(old_next)
            page = self._page_model.model_validate_json(body)

            self.collection = page.collection
            self.next_href = page.next_href
            if self.next_href == old_next:
                log.debug(f"Cursor did not advance past {old_next}; stopping.")
                self.next_href = ""

            if not (unfold and not self.collection and self.next_href):
                return self.collection
