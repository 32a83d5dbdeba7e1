"""Core service interfaces and shared data structures.

This module defines the repository contract used by the user store and the
simple dataclasses that carry results and queries between the view-models and
the core services.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from core.models import User


@dataclass
class OperationResult:
    """Outcome of a user-triggered operation.

    Attributes:
        ok: Whether the operation was applied.
        message: User-facing reason when it was not applied.
    """

    ok: bool
    message: str = ""

    @classmethod
    def success(cls) -> OperationResult:
        return cls(True)

    @classmethod
    def rejected(cls, message: str) -> OperationResult:
        return cls(False, message)


class TagOperator(str, Enum):
    """How two tag criteria are combined in a search."""

    SINGLE = "Single Tag"
    AND = "AND"
    OR = "OR"


@dataclass
class TagQuery:
    """Tag search criteria as entered by the user.

    Attributes:
        name: First tag name.
        value: First tag value.
        operator: Combination mode; the second pair is ignored for SINGLE.
        second_name: Second tag name.
        second_value: Second tag value.
    """

    name: str
    value: str
    operator: TagOperator = TagOperator.SINGLE
    second_name: str = ""
    second_value: str = ""


class IUserRepository:
    """Interface for persisting the username -> User graph."""

    def load(self, path: Path) -> dict[str, User]:
        """Return the persisted users, or an empty mapping if `path` is absent."""
        raise NotImplementedError

    def save(self, path: Path, users: dict[str, User]) -> None:
        """Write every user in `users` to `path`."""
        raise NotImplementedError
