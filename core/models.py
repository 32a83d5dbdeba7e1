"""Core domain models for users, albums, photos and tags."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
import os
from pathlib import Path

ADMIN_USERNAME = "admin"
STOCK_USERNAME = "stock"
STOCK_ALBUM_NAME = "stock"


def truncate_to_second(value: datetime) -> datetime:
    """Drop sub-second precision so comparisons happen on whole seconds."""
    return value.replace(microsecond=0)


def _default_date_taken(file_path: str) -> datetime:
    try:
        return datetime.fromtimestamp(os.path.getmtime(file_path))
    except (OSError, ValueError):
        return datetime.now()


@dataclass(frozen=True)
class Tag:
    """A name/value label, equal to any other tag with the same pair."""

    name: str
    value: str

    def __str__(self) -> str:
        return f"{self.name}:{self.value}"


@dataclass(eq=False)
class Photo:
    """A photo file with caption, capture date and an ordered set of tags.

    Two photos are equal when their `file_path` matches, regardless of caption
    or tags. `date_taken` defaults to the file's modification time and is not
    recomputed afterwards.
    """

    file_path: str
    caption: str = ""
    date_taken: datetime | None = None
    tags: list[Tag] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.date_taken is None:
            self.date_taken = _default_date_taken(self.file_path)
        self.date_taken = truncate_to_second(self.date_taken)
        self.tags = list(dict.fromkeys(self.tags))

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Photo):
            return NotImplemented
        return self.file_path == other.file_path

    def __hash__(self) -> int:
        return hash(self.file_path)

    @property
    def file_name(self) -> str:
        """Base name of the file path."""
        return Path(self.file_path).name

    def add_tag(self, tag: Tag) -> bool:
        """Add `tag` unless an equal (name, value) tag is already present."""
        if tag in self.tags:
            return False
        self.tags.append(tag)
        return True

    def remove_tag(self, tag: Tag) -> bool:
        if tag not in self.tags:
            return False
        self.tags.remove(tag)
        return True

    def has_tag(self, name: str, value: str) -> bool:
        return Tag(name, value) in self.tags

    def find_tags_by_name(self, name: str) -> list[Tag]:
        return [t for t in self.tags if t.name == name]

    def set_caption(self, text: str) -> None:
        self.caption = text


@dataclass(eq=False)
class Album:
    """A named, ordered collection of shared `Photo` references."""

    name: str
    photos: list[Photo] = field(default_factory=list)

    def __str__(self) -> str:
        return f"{self.name} ({len(self.photos)} photos)"

    @property
    def photo_count(self) -> int:
        """Number of photos currently in the album."""
        return len(self.photos)

    def contains(self, photo: Photo) -> bool:
        return photo in self.photos

    def find_photo(self, file_path: str) -> Photo | None:
        for photo in self.photos:
            if photo.file_path == file_path:
                return photo
        return None

    def add_photo(self, photo: Photo) -> bool:
        """Append `photo` unless one with the same file path is present."""
        if photo in self.photos:
            return False
        self.photos.append(photo)
        return True

    def remove_photo(self, photo: Photo) -> bool:
        if photo not in self.photos:
            return False
        self.photos.remove(photo)
        return True

    def get_date_range(self) -> tuple[datetime, datetime] | None:
        """Return (earliest, latest) `date_taken`, or None for an empty album."""
        if not self.photos:
            return None
        earliest: datetime | None = None
        latest: datetime | None = None
        for photo in self.photos:
            taken = truncate_to_second(photo.date_taken)
            if earliest is None or taken < earliest:
                earliest = taken
            if latest is None or taken > latest:
                latest = taken
        return earliest, latest

    def set_name(self, new_name: str) -> None:
        # Uniqueness is enforced by the owning User.
        self.name = new_name


@dataclass(eq=False)
class User:
    """A user owning uniquely-named albums."""

    username: str
    albums: list[Album] = field(default_factory=list)

    @property
    def is_admin(self) -> bool:
        """True for the operator account."""
        return self.username == ADMIN_USERNAME

    def add_album(self, album: Album) -> bool:
        """Append `album` unless another album already uses its name."""
        if self.find_album_by_name(album.name) is not None:
            return False
        self.albums.append(album)
        return True

    def remove_album(self, album: Album) -> bool:
        """Detach `album`; its photos stay alive in any other album."""
        for i, existing in enumerate(self.albums):
            if existing is album:
                del self.albums[i]
                return True
        return False

    def find_album_by_name(self, name: str) -> Album | None:
        for album in self.albums:
            if album.name == name:
                return album
        return None

    def rename_album(self, album: Album, new_name: str) -> bool:
        """Rename `album` unless another album of this user has `new_name`."""
        existing = self.find_album_by_name(new_name)
        if existing is not None and existing is not album:
            return False
        album.set_name(new_name)
        return True

    def find_photo(self, file_path: str) -> Photo | None:
        """Return the photo instance any album already holds for `file_path`."""
        for album in self.albums:
            photo = album.find_photo(file_path)
            if photo is not None:
                return photo
        return None

    def resolve_photo(self, file_path: str) -> Photo:
        """Return the shared instance for `file_path`, creating one if needed."""
        return self.find_photo(file_path) or Photo(file_path)
