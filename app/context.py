"""Per-process application context.

The context is built once at startup and handed to every view-model that
needs persistence, so exactly one `UserStore` exists per run without a global.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from loguru import logger

from app.viewmodels.album_list_vm import AlbumListVM
from app.viewmodels.session_vm import SessionVM
from core.models import User
from core.services.search_service import SearchService
from core.services.user_store import UserStore
from infrastructure.image_service import ImageService
from infrastructure.json_repository import JsonUserRepository
from infrastructure.settings import JsonSettings
from infrastructure.stock_seeder import DEFAULT_MIN_COUNT, StockSeeder


@dataclass
class AppContext:
    """Services shared by the whole UI for one process."""

    settings: JsonSettings
    store: UserStore
    seeder: StockSeeder
    images: ImageService
    searcher: SearchService = field(default_factory=SearchService)

    @classmethod
    def from_settings(cls, settings: JsonSettings) -> AppContext:
        data_dir = settings.get_path("storage.data_dir", "data")
        users_file = str(settings.get("storage.users_file", "users.json"))
        store = UserStore(JsonUserRepository(), data_dir / users_file)
        seeder = StockSeeder(
            store,
            settings.get_path("stock.dir", data_dir / "stock"),
            settings.get_int("stock.min_count", DEFAULT_MIN_COUNT),
        )
        return cls(settings=settings, store=store, seeder=seeder, images=ImageService(settings))

    def start(self) -> None:
        """Load the store and seed stock content."""
        self.store.ensure_loaded()
        added = self.seeder.seed()
        logger.info(
            "Started with {} users ({} stock photos added)",
            len(self.store.get_all_usernames()),
            added,
        )

    def shutdown(self) -> bool:
        return self.store.close()

    def session(self) -> SessionVM:
        return SessionVM(self.store)

    def album_list(self, user: User) -> AlbumListVM:
        return AlbumListVM(self.store, user, self.searcher, self.images)

    @property
    def data_file(self) -> Path:
        return self.store.data_file
