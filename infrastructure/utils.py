"""Utilities for date formatting/parsing and image file recognition.

This module centralizes the date formats used by persistence and by the
view-models so the rest of the app can depend on a single behavior. Parsing is
strict for stored data (callers decide how to react) and best-effort for
display formatting, which never raises.
"""

from __future__ import annotations

from datetime import date, datetime
from pathlib import Path

from loguru import logger

STORE_DT_FMT = "%Y-%m-%dT%H:%M:%S"

IMAGE_EXTENSIONS: frozenset[str] = frozenset({".jpg", ".jpeg", ".png", ".gif", ".bmp"})


def format_store_datetime(dt: datetime) -> str:
    """Format a timestamp for the persisted artifact (whole seconds)."""
    return dt.strftime(STORE_DT_FMT)


def parse_store_datetime(value: str) -> datetime:
    """Parse a persisted timestamp; raises ValueError/TypeError on bad input."""
    return datetime.strptime(value, STORE_DT_FMT)


def format_display_date(value: date | datetime | None) -> str:
    """Format as M/D/YYYY without zero padding; empty string when None."""
    if value is None:
        return ""
    try:
        return f"{value.month}/{value.day}/{value.year}"
    except AttributeError as ex:
        logger.debug("Cannot format display date {!r}: {}", value, ex)
        return ""


def start_of_day(day: date) -> datetime:
    return datetime(day.year, day.month, day.day)


def end_of_day(day: date) -> datetime:
    """Last whole second of `day`."""
    return datetime(day.year, day.month, day.day, 23, 59, 59)


def is_image_file(path: str | Path) -> bool:
    """True when the suffix is a recognized image extension (case-insensitive)."""
    return Path(path).suffix.lower() in IMAGE_EXTENSIONS


def list_image_files(directory: str | Path) -> list[Path]:
    """Return image files directly under `directory`, sorted by name."""
    dir_path = Path(directory)
    if not dir_path.is_dir():
        return []
    files = [p for p in dir_path.iterdir() if p.is_file() and is_image_file(p)]
    return sorted(files, key=lambda p: p.name)
