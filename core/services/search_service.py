"""Search service for photos across a user's albums.

Every search is a linear scan over albums in the given order and photos in
album order. Results are deduplicated by file path and keep the order in which
photos were first encountered. The albums are never mutated.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import datetime

from core.models import Album, Photo, truncate_to_second
from core.services.interfaces import TagOperator, TagQuery


class SearchService:
    """Provides date-range and tag searches over `Album` collections."""

    def search_by_date_range(
        self, albums: Iterable[Album], start: datetime, end: datetime
    ) -> list[Photo]:
        """Return photos with `start <= date_taken <= end`, compared to the second."""
        start = truncate_to_second(start)
        end = truncate_to_second(end)
        return self._collect(albums, lambda p: start <= truncate_to_second(p.date_taken) <= end)

    def search_by_tag(self, albums: Iterable[Album], name: str, value: str) -> list[Photo]:
        """Return photos carrying the tag `name=value`."""
        return self._collect(albums, lambda p: p.has_tag(name, value))

    def search_by_tags_and(
        self,
        albums: Iterable[Album],
        name1: str,
        value1: str,
        name2: str,
        value2: str,
    ) -> list[Photo]:
        """Return photos carrying both tags."""
        return self._collect(
            albums, lambda p: p.has_tag(name1, value1) and p.has_tag(name2, value2)
        )

    def search_by_tags_or(
        self,
        albums: Iterable[Album],
        name1: str,
        value1: str,
        name2: str,
        value2: str,
    ) -> list[Photo]:
        """Return photos carrying at least one of the tags."""
        return self._collect(
            albums, lambda p: p.has_tag(name1, value1) or p.has_tag(name2, value2)
        )

    def search_by_tags(self, albums: Iterable[Album], query: TagQuery) -> list[Photo]:
        """Dispatch `query` to the single, AND or OR search."""
        if query.operator is TagOperator.AND:
            return self.search_by_tags_and(
                albums, query.name, query.value, query.second_name, query.second_value
            )
        if query.operator is TagOperator.OR:
            return self.search_by_tags_or(
                albums, query.name, query.value, query.second_name, query.second_value
            )
        return self.search_by_tag(albums, query.name, query.value)

    @staticmethod
    def _collect(albums: Iterable[Album], predicate: Callable[[Photo], bool]) -> list[Photo]:
        results: list[Photo] = []
        seen: set[str] = set()
        for album in albums:
            for photo in album.photos:
                if photo.file_path in seen or not predicate(photo):
                    continue
                seen.add(photo.file_path)
                results.append(photo)
        return results
