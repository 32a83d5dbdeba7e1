"""ViewModel for login and the admin user list."""

from __future__ import annotations

from dataclasses import dataclass

from loguru import logger

from core.models import ADMIN_USERNAME, User
from core.services.interfaces import OperationResult
from core.services.user_store import UserStore


@dataclass
class LoginResult:
    """Outcome of a login attempt.

    Attributes:
        user: The logged-in user, or None when rejected.
        message: User-facing reason when rejected.
    """

    user: User | None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.user is not None

    @property
    def is_admin(self) -> bool:
        """True when the admin screen should be shown instead of albums."""
        return self.user is not None and self.user.is_admin


class SessionVM:
    """Login and user administration on top of the `UserStore`."""

    def __init__(self, store: UserStore) -> None:
        self._store = store

    def login(self, username: str) -> LoginResult:
        name = (username or "").strip()
        if not name:
            return LoginResult(None, "Please enter a username")
        user = self._store.get_user(name)
        if user is None:
            logger.info("Login rejected for unknown user {}", name)
            return LoginResult(None, "User does not exist")
        logger.info("User {} logged in", name)
        return LoginResult(user)

    def usernames(self) -> list[str]:
        """All usernames sorted for display."""
        return sorted(self._store.get_all_usernames())

    def add_user(self, username: str) -> OperationResult:
        name = (username or "").strip()
        if not name:
            return OperationResult.rejected("Please enter a username")
        if self._store.add_user(name) is None:
            return OperationResult.rejected("User already exists")
        return OperationResult.success()

    def delete_user(self, username: str | None) -> OperationResult:
        if not username:
            return OperationResult.rejected("Please select a user to delete")
        if username == ADMIN_USERNAME:
            return OperationResult.rejected("Cannot delete admin user")
        if not self._store.remove_user(username):
            return OperationResult.rejected("User does not exist")
        return OperationResult.success()

    def quit(self) -> bool:
        return self._store.save()
