from __future__ import annotations

from datetime import datetime

import pytest

from core.models import Album, Tag
from core.services.interfaces import TagOperator, TagQuery
from core.services.search_service import SearchService


@pytest.fixture
def searcher() -> SearchService:
    return SearchService()


@pytest.fixture
def albums(make_photo):
    nyc_john = make_photo("/nyc_john.jpg", datetime(2024, 1, 15))
    nyc_john.add_tag(Tag("location", "NYC"))
    nyc_john.add_tag(Tag("person", "John"))
    nyc = make_photo("/nyc.jpg", datetime(2024, 1, 20))
    nyc.add_tag(Tag("location", "NYC"))
    john = make_photo("/john.jpg", datetime(2024, 2, 1))
    john.add_tag(Tag("person", "John"))
    plain = make_photo("/plain.jpg", datetime(2023, 12, 31))

    first = Album("first")
    for p in (plain, nyc, nyc_john):
        first.add_photo(p)
    second = Album("second")
    for p in (john, nyc_john, nyc):
        second.add_photo(p)
    return [first, second]


def _paths(photos):
    return [p.file_path for p in photos]


def test_date_range_is_inclusive_and_scenario(searcher, make_photo):
    album = Album("jan")
    album.add_photo(make_photo("/dec.jpg", datetime(2023, 12, 31)))
    album.add_photo(make_photo("/mid.jpg", datetime(2024, 1, 15)))
    album.add_photo(make_photo("/feb.jpg", datetime(2024, 2, 1)))
    result = searcher.search_by_date_range([album], datetime(2024, 1, 1), datetime(2024, 1, 31))
    assert _paths(result) == ["/mid.jpg"]

    edges = searcher.search_by_date_range([album], datetime(2023, 12, 31), datetime(2024, 2, 1))
    assert _paths(edges) == ["/dec.jpg", "/mid.jpg", "/feb.jpg"]


def test_date_range_bounds_truncated_to_seconds(searcher, make_photo):
    album = Album("a")
    album.add_photo(make_photo("/a.jpg", datetime(2024, 1, 1, 10, 0, 0)))
    start = datetime(2024, 1, 1, 10, 0, 0, 500_000)
    end = datetime(2024, 1, 1, 10, 0, 0, 900_000)
    assert _paths(searcher.search_by_date_range([album], start, end)) == ["/a.jpg"]


def test_results_deduplicated_in_first_seen_order(searcher, albums):
    result = searcher.search_by_date_range(albums, datetime(2023, 1, 1), datetime(2025, 1, 1))
    assert _paths(result) == ["/plain.jpg", "/nyc.jpg", "/nyc_john.jpg", "/john.jpg"]


def test_search_by_tag(searcher, albums):
    assert _paths(searcher.search_by_tag(albums, "location", "NYC")) == [
        "/nyc.jpg",
        "/nyc_john.jpg",
    ]
    assert searcher.search_by_tag(albums, "location", "nyc") == []
    assert searcher.search_by_tag([], "location", "NYC") == []
    assert searcher.search_by_tag(albums, "", "") == []


def test_and_is_subset_of_intersection(searcher, albums):
    both = searcher.search_by_tags_and(albums, "location", "NYC", "person", "John")
    a = set(searcher.search_by_tag(albums, "location", "NYC"))
    b = set(searcher.search_by_tag(albums, "person", "John"))
    assert set(both) <= a & b
    assert _paths(both) == ["/nyc_john.jpg"]


def test_or_is_union(searcher, albums):
    either = searcher.search_by_tags_or(albums, "location", "NYC", "person", "John")
    a = set(searcher.search_by_tag(albums, "location", "NYC"))
    b = set(searcher.search_by_tag(albums, "person", "John"))
    assert set(either) == a | b
    assert len(either) == len(set(_paths(either)))


def test_tagging_then_and_search_scenario(searcher, make_photo):
    first = make_photo("/1.jpg")
    second = make_photo("/2.jpg")
    first.add_tag(Tag("location", "NYC"))
    second.add_tag(Tag("location", "NYC"))
    album = Album("a")
    album.add_photo(first)
    album.add_photo(second)
    assert len(searcher.search_by_tag([album], "location", "NYC")) == 2

    second.add_tag(Tag("person", "John"))
    result = searcher.search_by_tags_and([album], "location", "NYC", "person", "John")
    assert result == [second]


def test_search_by_tags_dispatch(searcher, albums):
    single = TagQuery("person", "John")
    both = TagQuery("location", "NYC", TagOperator.AND, "person", "John")
    either = TagQuery("location", "NYC", TagOperator.OR, "person", "John")
    assert searcher.search_by_tags(albums, single) == searcher.search_by_tag(
        albums, "person", "John"
    )
    assert _paths(searcher.search_by_tags(albums, both)) == ["/nyc_john.jpg"]
    assert len(searcher.search_by_tags(albums, either)) == 3


def test_search_does_not_mutate(searcher, albums):
    before = [list(a.photos) for a in albums]
    searcher.search_by_tags_or(albums, "location", "NYC", "person", "John")
    assert [list(a.photos) for a in albums] == before
