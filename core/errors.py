"""Errors raised by the user store and its persistence layer."""

from __future__ import annotations


class StoreError(Exception):
    """Base class for persistence failures of the user graph."""


class StoreLoadError(StoreError):
    """The persisted user graph exists but cannot be read or decoded."""


class StoreSaveError(StoreError):
    """The user graph could not be written to storage."""
