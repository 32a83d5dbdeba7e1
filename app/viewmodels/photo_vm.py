"""Lightweight view model wrapper around `Photo`."""

from __future__ import annotations

from dataclasses import dataclass

from core.models import Photo
from infrastructure.utils import format_display_date


@dataclass
class PhotoVM:
    """Expose display strings for bindings/templates."""

    photo: Photo

    @property
    def file_name(self) -> str:
        """Base name of the file path."""
        return self.photo.file_name

    @property
    def caption_label(self) -> str:
        return self.photo.caption or "(No caption)"

    @property
    def list_label(self) -> str:
        """Caption, or a placeholder followed by the file name."""
        if self.photo.caption:
            return self.photo.caption
        return f"(No caption) - {self.file_name}"

    @property
    def date_label(self) -> str:
        return f"Date: {format_display_date(self.photo.date_taken)}"

    @property
    def tags_label(self) -> str:
        if not self.photo.tags:
            return "Tags: (None)"
        return "Tags: " + ", ".join(str(t) for t in self.photo.tags)
