"""User store owning the whole username -> User graph and its persistence.

One store is created per process (see `app.context.AppContext`). It loads the
persisted graph lazily on first access, bootstraps the reserved `admin` and
`stock` accounts when nothing was persisted, and writes the whole graph back
through its repository whenever a mutation is committed.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from loguru import logger

from core.errors import StoreLoadError, StoreSaveError
from core.models import ADMIN_USERNAME, STOCK_ALBUM_NAME, STOCK_USERNAME, Album, User
from core.services.interfaces import IUserRepository


class StoreState(Enum):
    UNINITIALIZED = "uninitialized"
    LOADED = "loaded"


class UserStore:
    """Owns every `User` and is the single entry/exit point for persistence."""

    def __init__(self, repository: IUserRepository, data_file: str | Path) -> None:
        """Create an unloaded store.

        Args:
            repository: Repository with `load(path)` and `save(path, users)` methods.
            data_file: Location of the persisted artifact.
        """
        self._repo = repository
        self._data_file = Path(data_file)
        self._users: dict[str, User] = {}
        self._state = StoreState.UNINITIALIZED

    @property
    def state(self) -> StoreState:
        return self._state

    @property
    def data_file(self) -> Path:
        """Path of the persisted artifact."""
        return self._data_file

    @property
    def users(self) -> Mapping[str, User]:
        """Read-only view of the username -> User mapping."""
        self.ensure_loaded()
        return MappingProxyType(self._users)

    def ensure_loaded(self) -> None:
        """Load persisted users once; bootstrap reserved accounts if none exist."""
        if self._state is StoreState.LOADED:
            return
        try:
            self._users = dict(self._repo.load(self._data_file))
            logger.info("Loaded {} users from {}", len(self._users), self._data_file)
        except StoreLoadError as ex:
            logger.warning("Could not load users from {}, starting empty: {}", self._data_file, ex)
            self._users = {}
        self._state = StoreState.LOADED
        if not self._users:
            self._bootstrap()

    def _bootstrap(self) -> None:
        self._users[ADMIN_USERNAME] = User(ADMIN_USERNAME)
        stock = User(STOCK_USERNAME)
        stock.add_album(Album(STOCK_ALBUM_NAME))
        self._users[STOCK_USERNAME] = stock
        logger.info("Bootstrapped users: {}", list(self._users))

    def get_user(self, username: str) -> User | None:
        self.ensure_loaded()
        return self._users.get(username)

    def user_exists(self, username: str) -> bool:
        self.ensure_loaded()
        return username in self._users

    def add_user(self, username: str) -> User | None:
        """Create and persist a user; None if `username` is already taken."""
        self.ensure_loaded()
        if username in self._users:
            return None
        user = User(username)
        self._users[username] = user
        logger.info("Added user {}", username)
        self.save()
        return user

    def remove_user(self, username: str) -> bool:
        """Detach and persist; refuses `admin` and unknown usernames."""
        self.ensure_loaded()
        if username == ADMIN_USERNAME or username not in self._users:
            return False
        del self._users[username]
        logger.info("Removed user {}", username)
        self.save()
        return True

    def get_all_usernames(self) -> list[str]:
        self.ensure_loaded()
        return list(self._users)

    def commit(self) -> None:
        """Write the whole graph; raises `StoreSaveError` on failure."""
        self.ensure_loaded()
        try:
            self._repo.save(self._data_file, self._users)
        except (OSError, TypeError, ValueError) as ex:
            raise StoreSaveError(f"Failed to save users to {self._data_file}: {ex}") from ex
        logger.debug("Saved {} users to {}", len(self._users), self._data_file)

    def save(self) -> bool:
        """Commit, logging instead of raising; in-memory state stays authoritative."""
        try:
            self.commit()
        except StoreSaveError as ex:
            logger.error("Save users failed: {}", ex)
            return False
        return True

    def close(self) -> bool:
        """Final save at process shutdown."""
        if self._state is StoreState.UNINITIALIZED:
            return True
        logger.info("Closing user store")
        return self.save()
