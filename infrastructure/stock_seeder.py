"""Stock content seeding for the reserved `stock` account.

Guarantees that the stock user owns a `stock` album holding one photo for
every image file in the stock directory. When fewer than the minimum number of
image files are present, plain-text placeholder files (not real images) are
written under fixed names first.
"""

from __future__ import annotations

from pathlib import Path

from loguru import logger

from core.models import STOCK_ALBUM_NAME, STOCK_USERNAME, Album, Photo, Tag, User
from core.services.user_store import UserStore
from infrastructure.utils import list_image_files

PLACEHOLDER_NAMES: tuple[str, ...] = (
    "beach.jpg",
    "mountains.jpg",
    "city.jpg",
    "forest.jpg",
    "sunset.jpg",
)
DEFAULT_MIN_COUNT = 5


class StockSeeder:
    """Populate the stock album from files in `stock_dir`."""

    def __init__(
        self, store: UserStore, stock_dir: str | Path, min_count: int = DEFAULT_MIN_COUNT
    ) -> None:
        self._store = store
        self._stock_dir = Path(stock_dir)
        self._min_count = min_count

    @property
    def stock_dir(self) -> Path:
        return self._stock_dir

    def seed(self) -> int:
        """Seed the stock album and save; return the number of photos added."""
        try:
            self._stock_dir.mkdir(parents=True, exist_ok=True)
        except OSError as ex:
            logger.error("Cannot create stock directory {}: {}", self._stock_dir, ex)
            return 0
        user = self._ensure_user()
        album = self._ensure_album(user)

        files = list_image_files(self._stock_dir)
        if len(files) < self._min_count:
            try:
                self._create_placeholders()
            except OSError as ex:
                logger.error("Failed to create placeholder photos in {}: {}", self._stock_dir, ex)
                return 0
            files = list_image_files(self._stock_dir)

        added = 0
        for file in files:
            file_path = str(file.resolve())
            if album.find_photo(file_path) is not None:
                continue
            photo = user.find_photo(file_path) or Photo(file_path)
            if not photo.caption:
                photo.set_caption(f"Stock photo: {file.name}")
            photo.add_tag(Tag("type", "stock"))
            photo.add_tag(Tag("filename", file.name))
            album.add_photo(photo)
            added += 1

        logger.info("Stock seeding added {} photos ({} in album)", added, album.photo_count)
        self._store.save()
        return added

    def _ensure_user(self) -> User:
        user = self._store.get_user(STOCK_USERNAME)
        if user is None:
            logger.info("Stock user missing, creating it")
            user = self._store.add_user(STOCK_USERNAME)
        return user

    @staticmethod
    def _ensure_album(user: User) -> Album:
        album = user.find_album_by_name(STOCK_ALBUM_NAME)
        if album is None:
            album = Album(STOCK_ALBUM_NAME)
            user.add_album(album)
        return album

    def _create_placeholders(self) -> None:
        for name in PLACEHOLDER_NAMES[: self._min_count]:
            path = self._stock_dir / name
            if not path.exists():
                content = f"This is a placeholder for a stock photo: {name}"
                path.write_text(content, encoding="utf-8")
                logger.info("Created placeholder {}", path)
