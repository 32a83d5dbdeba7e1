from __future__ import annotations

import argparse
from pathlib import Path

from loguru import logger

from app.context import AppContext
from infrastructure.logging import init_logging
from infrastructure.settings import JsonSettings

BASE_DIR = Path(__file__).parent


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Photo albums data store")
    parser.add_argument(
        "--settings",
        default=str(BASE_DIR / "settings.json"),
        help="Path to settings.json",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    settings = JsonSettings(args.settings)
    init_logging(
        settings.get_path("logging.dir", "logs"),
        str(settings.get("logging.level", "INFO")),
    )

    ctx = AppContext.from_settings(settings)
    try:
        ctx.start()
        session = ctx.session()
        for username in session.usernames():
            user = ctx.store.get_user(username)
            rows = ctx.album_list(user).rows() if user is not None else []
            logger.info("User {}: {} albums", username, len(rows))
            print(f"{username}: " + ", ".join(f"{r.name} ({r.photo_count})" for r in rows))
    finally:
        if not ctx.shutdown():
            logger.error("Final save failed; data written at {} may be stale", ctx.data_file)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
