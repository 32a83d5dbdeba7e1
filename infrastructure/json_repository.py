"""JSON persistence for the username -> User graph.

Photos are stored once per user, keyed by file path, and albums reference them
by path. Loading maps every path back to a single `Photo` instance so albums
sharing a photo keep sharing it after a restart. Writes are atomic.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from loguru import logger

from core.errors import StoreLoadError
from core.models import Album, Photo, Tag, User
from core.services.interfaces import IUserRepository
from infrastructure.utils import format_store_datetime, parse_store_datetime


def atomic_write_text(path: Path, data: str) -> None:
    """Write `data` to a temp file beside `path`, then swap it into place."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    try:
        with tmp_path.open("w", encoding="utf-8") as handle:
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
        tmp_path.replace(path)
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise


def _encode_photo(photo: Photo) -> dict[str, Any]:
    return {
        "file_path": photo.file_path,
        "caption": photo.caption,
        "date_taken": format_store_datetime(photo.date_taken),
        "tags": [{"name": t.name, "value": t.value} for t in photo.tags],
    }


def _encode_user(user: User) -> dict[str, Any]:
    photos: dict[str, Photo] = {}
    for album in user.albums:
        for photo in album.photos:
            canonical = photos.setdefault(photo.file_path, photo)
            if canonical is not photo:
                logger.debug(
                    "User {} holds two instances of {}; keeping the first",
                    user.username,
                    photo.file_path,
                )
    return {
        "username": user.username,
        "photos": [_encode_photo(p) for p in photos.values()],
        "albums": [
            {"name": album.name, "photos": [p.file_path for p in album.photos]}
            for album in user.albums
        ],
    }


def _decode_photo(row: dict[str, Any]) -> Photo:
    photo = Photo(
        file_path=str(row["file_path"]),
        caption=str(row.get("caption", "")),
        date_taken=parse_store_datetime(row["date_taken"]),
    )
    for tag in row.get("tags", []):
        photo.add_tag(Tag(str(tag["name"]), str(tag["value"])))
    return photo


def _decode_user(row: dict[str, Any]) -> User:
    user = User(str(row["username"]))
    photos: dict[str, Photo] = {}
    for photo_row in row.get("photos", []):
        photo = _decode_photo(photo_row)
        photos[photo.file_path] = photo
    for album_row in row.get("albums", []):
        album = Album(str(album_row["name"]))
        for file_path in album_row.get("photos", []):
            if file_path not in photos:
                raise StoreLoadError(
                    f"Album {album.name!r} of {user.username!r} "
                    f"references unknown photo {file_path!r}"
                )
            album.add_photo(photos[file_path])
        if not user.add_album(album):
            logger.warning("Skipping duplicate album {} for user {}", album.name, user.username)
    return user


class JsonUserRepository(IUserRepository):
    """Load and save the user graph as a single JSON document."""

    def load(self, path: Path) -> dict[str, User]:
        """Return users stored at `path`; empty when the file does not exist."""
        path = Path(path)
        if not path.exists():
            logger.info("No user data at {}", path)
            return {}
        try:
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError, RecursionError) as ex:
            raise StoreLoadError(f"Cannot read user data {path}: {ex}") from ex

        try:
            users: dict[str, User] = {}
            for row in data["users"]:
                user = _decode_user(row)
                users[user.username] = user
        except (KeyError, TypeError, ValueError, AttributeError) as ex:
            raise StoreLoadError(f"Malformed user data in {path}: {ex!r}") from ex
        return users

    def save(self, path: Path, users: dict[str, User]) -> None:
        """Write `users` to `path`, creating the parent directory if needed."""
        payload = {"users": [_encode_user(u) for u in users.values()]}
        atomic_write_text(Path(path), json.dumps(payload, ensure_ascii=False, indent=2))
