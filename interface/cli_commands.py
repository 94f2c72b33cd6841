import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from application.ports import StartupError, StorageError
from config import get_config_path, get_db_path, get_log_path, set_db_path
from core import Item
from infrastructure.sqlite_repository import SqliteProgressRepository

from .tui_app import cmd_tui

logger = logging.getLogger("fitdb.cli")


def _resolve_db(args: argparse.Namespace) -> Path:
    db = getattr(args, "db", None)
    return Path(db).expanduser() if db else get_db_path()


def format_item_line(item: Item) -> str:
    kind = "recurring" if item.is_recurring else "one-shot"
    limit = f", {item.day_limit}d limit" if item.day_limit else ""
    return (
        f"  #{item.id:<4} {item.progress_bar(10)} {item.percentage:>3}% x{item.times_finished:<3} "
        f"{item.status_label():<6} {item.name} ({kind}{limit})"
    )


def cmd_init(args: argparse.Namespace) -> int:
    """Create the database file and schema (idempotent)."""
    db_path = _resolve_db(args)
    try:
        repo = SqliteProgressRepository.initialize(db_path)
    except StartupError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    repo.close()
    if getattr(args, "remember", False) and getattr(args, "db", None):
        set_db_path(str(db_path))
    print(f"Database ready: {db_path}")
    return 0


def cmd_list(args: argparse.Namespace) -> int:
    """Print every topic with its items."""
    db_path = _resolve_db(args)
    try:
        repo = SqliteProgressRepository.open(db_path)
    except StartupError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    try:
        lines: List[str] = []
        topics = repo.list_topics()
        for topic in topics:
            items = repo.list_items(topic.name)
            lines.append(f"{topic.name} ({len(items)})")
            lines.extend(format_item_line(item) for item in items)
        if not topics:
            lines.append("No topics yet. Run \"fitdb tui\" and press Alt+a to add one.")
    except StorageError as exc:
        logger.error("list failed: %s", exc)
        print(f"Cannot read {db_path}: {exc}", file=sys.stderr)
        return 1
    finally:
        repo.close()
    print("\n".join(lines))
    return 0


def cmd_path(args: Optional[argparse.Namespace] = None) -> int:
    print(f"database: {get_db_path()}")
    print(f"config:   {get_config_path()}")
    print(f"log:      {get_log_path()}")
    return 0


__all__ = ["cmd_init", "cmd_list", "cmd_path", "cmd_tui", "format_item_line"]
