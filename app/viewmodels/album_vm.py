"""ViewModel for a single open album: photos, captions, tags, copy/move."""

from __future__ import annotations

from dataclasses import dataclass

from loguru import logger

from app.viewmodels.photo_vm import PhotoVM
from core.models import Album, Photo, Tag, User
from core.services.interfaces import OperationResult
from core.services.user_store import UserStore
from infrastructure.image_service import ImageService, PhotoFileInfo, PhotoFileStatus


@dataclass
class PhotoDisplay:
    """Everything the UI needs to show one photo.

    Attributes:
        photo: Display strings for the photo.
        file_info: Probe result for the photo's file.
        message: Error text when the file cannot be shown.
    """

    photo: PhotoVM
    file_info: PhotoFileInfo
    message: str = ""


class AlbumVM:
    """Mediates between an open `Album` and the UI.

    Every applied mutation is followed by a store save.
    """

    def __init__(
        self,
        store: UserStore,
        user: User,
        album: Album,
        image_service: ImageService | None = None,
    ) -> None:
        self._store = store
        self._user = user
        self._album = album
        self._images = image_service or ImageService()
        self.current_index: int | None = 0 if album.photos else None

    @property
    def album(self) -> Album:
        return self._album

    @property
    def photos(self) -> list[Photo]:
        return list(self._album.photos)

    @property
    def current_photo(self) -> Photo | None:
        if self.current_index is None or not self._album.photos:
            return None
        return self._album.photos[self.current_index]

    def select(self, index: int) -> Photo | None:
        """Select the photo at `index`; out-of-range clears the selection."""
        if 0 <= index < self._album.photo_count:
            self.current_index = index
        else:
            self.current_index = None
        return self.current_photo

    def next_photo(self) -> Photo | None:
        if self.current_index is not None and self.current_index + 1 < self._album.photo_count:
            self.current_index += 1
        return self.current_photo

    def previous_photo(self) -> Photo | None:
        if self.current_index is not None and self.current_index > 0:
            self.current_index -= 1
        return self.current_photo

    def _reset_selection(self) -> None:
        count = self._album.photo_count
        if count == 0:
            self.current_index = None
        elif self.current_index is None or self.current_index >= count:
            self.current_index = count - 1

    def display(self, photo: Photo) -> PhotoDisplay:
        """Probe `photo`'s file and build its display strings."""
        info = self._images.probe(photo.file_path)
        message = ""
        if not info.is_displayable:
            message = (
                f"Photo file not found: {photo.file_path}"
                if info.status is PhotoFileStatus.MISSING
                else f"Error displaying photo: {photo.file_name}"
            )
        return PhotoDisplay(PhotoVM(photo), info, message)

    def add_photo(self, file_path: str) -> OperationResult:
        """Add the photo at `file_path`, reusing the user's existing instance."""
        if not file_path:
            return OperationResult.rejected("Please select a photo")
        if self._album.find_photo(file_path) is not None:
            return OperationResult.rejected("This photo is already in the album")
        photo = self._user.resolve_photo(file_path)
        self._album.add_photo(photo)
        logger.info("Added {} to album {}", file_path, self._album.name)
        self._reset_selection()
        self._store.save()
        return OperationResult.success()

    def remove_photo(self, photo: Photo | None) -> OperationResult:
        if photo is None:
            return OperationResult.rejected("Please select a photo to remove")
        if not self._album.remove_photo(photo):
            return OperationResult.rejected("Photo is not in this album")
        logger.info("Removed {} from album {}", photo.file_path, self._album.name)
        self._reset_selection()
        self._store.save()
        return OperationResult.success()

    def set_caption(self, photo: Photo | None, caption: str) -> OperationResult:
        if photo is None:
            return OperationResult.rejected("Please select a photo to caption")
        photo.set_caption((caption or "").strip())
        self._store.save()
        return OperationResult.success()

    def add_tag(self, photo: Photo | None, name: str, value: str) -> OperationResult:
        if photo is None:
            return OperationResult.rejected("Please select a photo to tag")
        name = (name or "").strip()
        value = (value or "").strip()
        if not name or not value:
            return OperationResult.rejected("Tag name and value cannot be empty")
        if not photo.add_tag(Tag(name, value)):
            return OperationResult.rejected("This tag already exists on the photo")
        self._store.save()
        return OperationResult.success()

    def remove_tag(self, photo: Photo | None, tag: Tag | None) -> OperationResult:
        if photo is None or tag is None:
            return OperationResult.rejected("Please select a tag to remove")
        if not photo.remove_tag(tag):
            return OperationResult.rejected("Tag not found on the photo")
        self._store.save()
        return OperationResult.success()

    def other_album_names(self) -> list[str]:
        """Names of the user's albums other than this one, in user order."""
        return [a.name for a in self._user.albums if a is not self._album]

    def _resolve_target(self, photo: Photo | None, target_name: str) -> Album | OperationResult:
        if photo is None:
            return OperationResult.rejected("Please select a photo")
        if not self.other_album_names():
            return OperationResult.rejected("No other albums available")
        target = self._user.find_album_by_name(target_name)
        if target is None or target is self._album:
            return OperationResult.rejected("Album not found")
        if target.contains(photo):
            return OperationResult.rejected("Photo already exists in the target album")
        return target

    def copy_photo(self, photo: Photo | None, target_name: str) -> OperationResult:
        """Add the same `photo` instance to another album of this user."""
        target = self._resolve_target(photo, target_name)
        if isinstance(target, OperationResult):
            return target
        target.add_photo(photo)
        logger.info("Copied {} to album {}", photo.file_path, target.name)
        self._store.save()
        return OperationResult.success()

    def move_photo(self, photo: Photo | None, target_name: str) -> OperationResult:
        """Add `photo` to another album and remove it from this one."""
        target = self._resolve_target(photo, target_name)
        if isinstance(target, OperationResult):
            return target
        target.add_photo(photo)
        self._album.remove_photo(photo)
        logger.info("Moved {} from {} to {}", photo.file_path, self._album.name, target.name)
        self._reset_selection()
        self._store.save()
        return OperationResult.success()
