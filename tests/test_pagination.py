import asyncio

from soundcloud_cli.api.pagination import PaginationCursor
from soundcloud_cli.models.entities import Track
from tests.support import factories
from tests.support.fakes import FakeAPIClient


def test_proceed_follows_next_href():
    client = FakeAPIClient(
        pages={
            "p1": {"collection": [factories.track_payload(1)], "next_href": "p2"},
            "p2": {"collection": [factories.track_payload(2)], "next_href": None},
        }
    )
    cursor = PaginationCursor(client, Track, "p1")

    first = asyncio.run(cursor.proceed())
    assert [t.id for t in first] == [1]
    assert cursor.next_href == "p2"

    second = asyncio.run(cursor.proceed())
    assert [t.id for t in second] == [2]
    assert cursor.exhausted


def test_repeated_cursor_ends_the_walk():
    client = FakeAPIClient(
        pages={"p1": {"collection": [factories.track_payload(1)], "next_href": "p1"}}
    )
    cursor = PaginationCursor(client, Track, "p1")

    items = asyncio.run(cursor.proceed())

    assert [t.id for t in items] == [1]
    assert cursor.next_href == ""
    assert cursor.exhausted


def test_unfold_skips_empty_pages():
    client = FakeAPIClient(
        pages={
            "p1": {"collection": [], "next_href": "p2"},
            "p2": {"collection": [], "next_href": "p3"},
            "p3": {"collection": [factories.track_payload(3)], "next_href": "p4"},
        }
    )
    cursor = PaginationCursor(client, Track, "p1")

    items = asyncio.run(cursor.proceed(unfold=True))

    assert [t.id for t in items] == [3]
    assert cursor.next_href == "p4"


def test_without_unfold_empty_page_is_returned():
    client = FakeAPIClient(pages={"p1": {"collection": [], "next_href": "p2"}})
    cursor = PaginationCursor(client, Track, "p1")

    assert asyncio.run(cursor.proceed()) == []
    assert cursor.next_href == "p2"


def test_unfold_stops_on_empty_last_page():
    client = FakeAPIClient(pages={"p1": {"collection": [], "next_href": None}})
    cursor = PaginationCursor(client, Track, "p1")

    assert asyncio.run(cursor.proceed(unfold=True)) == []
    assert cursor.exhausted
