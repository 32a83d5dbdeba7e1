from __future__ import annotations

import json

from app.context import AppContext
from core.services.user_store import StoreState
from infrastructure.logging import find_latest_log_file, init_logging
from infrastructure.settings import JsonSettings
import main


def _write_settings(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(
        json.dumps(
            {
                "storage": {"data_dir": "data", "users_file": "users.json"},
                "stock": {"dir": "data/stock", "min_count": 5},
                "logging": {"dir": "logs", "level": "DEBUG"},
            }
        ),
        encoding="utf-8",
    )
    return path


def test_context_start_and_shutdown(tmp_path):
    ctx = AppContext.from_settings(JsonSettings(_write_settings(tmp_path)))
    assert ctx.store.state is StoreState.UNINITIALIZED
    ctx.start()
    assert ctx.data_file == tmp_path / "data" / "users.json"
    assert ctx.data_file.exists()
    assert ctx.store.get_user("stock").albums[0].photo_count == 5
    assert ctx.session().login("stock").ok
    assert ctx.shutdown()


def test_main_runs_headless(tmp_path, capsys):
    assert main.main(["--settings", str(_write_settings(tmp_path))]) == 0
    out = capsys.readouterr().out
    assert "stock: stock (5)" in out
    assert "admin: " in out
    assert find_latest_log_file(tmp_path / "logs") is not None


def test_find_latest_log_file_without_logs(tmp_path):
    assert find_latest_log_file(tmp_path / "none") is None
    init_logging(tmp_path / "logs")
    assert (tmp_path / "logs").is_dir()
