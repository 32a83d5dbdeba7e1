"""ViewModel for a user's album list and photo searches."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date

from loguru import logger

from app.viewmodels.album_vm import AlbumVM
from core.models import Album, Photo, User
from core.services.interfaces import OperationResult, TagOperator, TagQuery
from core.services.search_service import SearchService
from core.services.user_store import UserStore
from infrastructure.image_service import ImageService
from infrastructure.utils import end_of_day, format_display_date, start_of_day


@dataclass
class AlbumRow:
    """One line of the album list."""

    name: str
    photo_count: int
    date_range_label: str


class AlbumListVM:
    """Album management and search for one logged-in user.

    Every applied mutation is followed by a store save.
    """

    def __init__(
        self,
        store: UserStore,
        user: User,
        searcher: SearchService | None = None,
        image_service: ImageService | None = None,
    ) -> None:
        self._store = store
        self._user = user
        self._searcher = searcher or SearchService()
        self._images = image_service
        self.search_results: list[Photo] = []

    @property
    def user(self) -> User:
        return self._user

    def rows(self) -> list[AlbumRow]:
        """Album summaries in user order."""
        result: list[AlbumRow] = []
        for album in self._user.albums:
            date_range = album.get_date_range()
            if date_range is None:
                label = "No photos"
            else:
                earliest, latest = date_range
                label = f"{format_display_date(earliest)} - {format_display_date(latest)}"
            result.append(AlbumRow(album.name, album.photo_count, label))
        return result

    def create_album(self, name: str) -> OperationResult:
        name = (name or "").strip()
        if not name:
            return OperationResult.rejected("Please enter an album name")
        if not self._user.add_album(Album(name)):
            return OperationResult.rejected("An album with this name already exists")
        logger.info("User {} created album {}", self._user.username, name)
        self._store.save()
        return OperationResult.success()

    def rename_album(self, album: Album | None, new_name: str) -> OperationResult:
        if album is None:
            return OperationResult.rejected("Please select an album to rename")
        new_name = (new_name or "").strip()
        if not new_name:
            return OperationResult.rejected("Please enter an album name")
        old_name = album.name
        if not self._user.rename_album(album, new_name):
            return OperationResult.rejected("An album with this name already exists")
        logger.info("User {} renamed album {} to {}", self._user.username, old_name, new_name)
        self._store.save()
        return OperationResult.success()

    def delete_album(self, album: Album | None) -> OperationResult:
        if album is None:
            return OperationResult.rejected("Please select an album to delete")
        if not self._user.remove_album(album):
            return OperationResult.rejected("Album not found")
        logger.info("User {} deleted album {}", self._user.username, album.name)
        self._store.save()
        return OperationResult.success()

    def open_album(self, album: Album) -> AlbumVM:
        return AlbumVM(self._store, self._user, album, self._images)

    def search_by_date(self, start_date: date, end_date: date) -> OperationResult:
        """Search from the start of `start_date` to 23:59:59 on `end_date`."""
        if start_date > end_date:
            return OperationResult.rejected("Start date must be on or before end date")
        self.search_results = self._searcher.search_by_date_range(
            self._user.albums, start_of_day(start_date), end_of_day(end_date)
        )
        return OperationResult.success()

    def search_by_tags(self, query: TagQuery) -> OperationResult:
        query = TagQuery(
            query.name.strip(),
            query.value.strip(),
            query.operator,
            query.second_name.strip(),
            query.second_value.strip(),
        )
        if not query.name or not query.value:
            return OperationResult.rejected("Please enter a tag name and value")
        if query.operator is not TagOperator.SINGLE and (
            not query.second_name or not query.second_value
        ):
            return OperationResult.rejected("Please enter a tag name and value")
        self.search_results = self._searcher.search_by_tags(self._user.albums, query)
        return OperationResult.success()

    def create_album_from_results(
        self, name: str, photos: Iterable[Photo] | None = None
    ) -> OperationResult:
        """Create album `name` holding the same photo instances as the results."""
        photos = list(self.search_results if photos is None else photos)
        if not photos:
            return OperationResult.rejected("No photos to add")
        name = (name or "").strip()
        if not name:
            return OperationResult.rejected("Please enter an album name")
        if self._user.find_album_by_name(name) is not None:
            return OperationResult.rejected("An album with this name already exists")
        album = Album(name)
        for photo in photos:
            album.add_photo(photo)
        self._user.add_album(album)
        logger.info(
            "User {} created album {} from {} search results",
            self._user.username,
            name,
            album.photo_count,
        )
        self._store.save()
        return OperationResult.success()
