"""Display-time probing of photo files with Pillow.

The probe tells the UI whether a photo's file can be shown. It reports
missing or unreadable files as a display condition and never touches the
model: a `Photo` whose file is gone still exists in every album holding it.
"""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass
from enum import Enum
import hashlib
import os

from loguru import logger
from PIL import Image, UnidentifiedImageError


class PhotoFileStatus(Enum):
    OK = "ok"
    MISSING = "missing"
    UNREADABLE = "unreadable"


@dataclass(frozen=True)
class PhotoFileInfo:
    """Result of probing a photo file.

    Attributes:
        status: Whether the file exists and decodes as an image.
        width: Pixel width when readable, else None.
        height: Pixel height when readable, else None.
    """

    status: PhotoFileStatus
    width: int | None = None
    height: int | None = None

    @property
    def is_displayable(self) -> bool:
        return self.status is PhotoFileStatus.OK


def _compute_cache_key(path: str) -> str | None:
    """Stable key from path, mtime and size; None when the file cannot be stat'ed."""
    try:
        st = os.stat(path)
    except OSError:
        return None
    sig = f"{path}|{int(st.st_mtime_ns)}|{int(st.st_size)}".encode("utf-8", errors="ignore")
    return hashlib.sha1(sig).hexdigest()


class _LRUCache:
    def __init__(self, capacity: int) -> None:
        self._cap = max(1, int(capacity or 1))
        self._data: OrderedDict[str, PhotoFileInfo] = OrderedDict()

    def __len__(self) -> int:
        return len(self._data)

    def get(self, key: str) -> PhotoFileInfo | None:
        """Return the cached info for key, moving it to the MRU position."""
        info = self._data.get(key)
        if info is None:
            return None
        self._data.move_to_end(key)
        return info

    def put(self, key: str, info: PhotoFileInfo) -> None:
        """Insert or update `key`, evicting LRU entries when over capacity."""
        self._data[key] = info
        self._data.move_to_end(key)
        while len(self._data) > self._cap:
            self._data.popitem(last=False)


class ImageService:
    """Probe photo files for display with a small in-memory cache."""

    def __init__(self, settings: object | None = None) -> None:
        """Read the cache size from `image_probe.cache_size` when settings are given."""
        cache_size = 256
        if settings is not None:
            try:
                cache_size = int(settings.get("image_probe.cache_size", 256) or 256)
            except (ValueError, TypeError):
                cache_size = 256
        self._cache = _LRUCache(cache_size)

    def probe(self, path: str) -> PhotoFileInfo:
        """Return the display status of the file at `path`."""
        key = _compute_cache_key(path)
        if key is None:
            logger.debug("Photo file not found: {}", path)
            return PhotoFileInfo(PhotoFileStatus.MISSING)
        cached = self._cache.get(key)
        if cached is not None:
            return cached
        info = self._read(path)
        self._cache.put(key, info)
        return info

    @staticmethod
    def _read(path: str) -> PhotoFileInfo:
        try:
            with Image.open(path) as im:
                width, height = im.size
            return PhotoFileInfo(PhotoFileStatus.OK, width, height)
        except FileNotFoundError:
            return PhotoFileInfo(PhotoFileStatus.MISSING)
        except (UnidentifiedImageError, OSError, ValueError) as ex:
            logger.debug("Cannot decode {}: {}", path, ex)
            return PhotoFileInfo(PhotoFileStatus.UNREADABLE)
