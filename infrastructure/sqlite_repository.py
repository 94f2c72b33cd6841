import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional

from core import Item, Topic
from core.errors import StartupError, StorageError
from core.form import FormValues
from application.ports import ProgressRepository

logger = logging.getLogger("fitdb.storage")

SCHEMA = """
CREATE TABLE IF NOT EXISTS topics(
    name VARCHAR(256) NOT NULL,
    created TIMESTAMP DEFAULT CURRENT_TIMESTAMP NOT NULL,
    PRIMARY KEY(name)
);
CREATE TABLE IF NOT EXISTS items(
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name VARCHAR(256) NOT NULL,
    topicname VARCHAR(256) NOT NULL,
    isrecurring INTEGER DEFAULT 0 NOT NULL,
    percentage INTEGER DEFAULT 0 NOT NULL CHECK (percentage BETWEEN 0 AND 100),
    timesfinished INTEGER DEFAULT 0 NOT NULL,
    daylimit INTEGER DEFAULT 0 NOT NULL,
    created TIMESTAMP DEFAULT CURRENT_TIMESTAMP NOT NULL,
    FOREIGN KEY(topicname) REFERENCES topics(name)
        ON DELETE CASCADE
        ON UPDATE CASCADE
);
"""

REQUIRED_TABLES = frozenset({"topics", "items"})

# sqlite3 raises OverflowError for ints outside the 64-bit INTEGER range.
SQLITE_ERRORS = (sqlite3.Error, OverflowError)


def _connect(db_path: Path) -> sqlite3.Connection:
    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON;")
    return conn


def _row_to_item(row: sqlite3.Row) -> Item:
    return Item(
        id=int(row["id"]),
        name=row["name"],
        topic=row["topicname"],
        is_recurring=bool(row["isrecurring"]),
        percentage=int(row["percentage"]),
        times_finished=int(row["timesfinished"]),
        day_limit=int(row["daylimit"]),
        created=str(row["created"]),
    )


class SqliteProgressRepository(ProgressRepository):
    """SQLite-backed persistence gateway (topics + items, cascade on topic delete)."""

    def __init__(self, conn: sqlite3.Connection, db_path: Optional[Path] = None):
        self.conn = conn
        self.db_path = db_path

    @classmethod
    def initialize(cls, db_path: Path) -> "SqliteProgressRepository":
        """Create the database file (and parent dirs) with the schema."""
        db_path = Path(db_path).expanduser()
        try:
            db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = _connect(db_path)
            conn.executescript(SCHEMA)
            conn.commit()
        except (OSError, sqlite3.Error) as exc:
            raise StartupError(f"Cannot initialize database at {db_path}: {exc}") from exc
        logger.info("database initialized at %s", db_path)
        return cls(conn, db_path)

    @classmethod
    def open(cls, db_path: Path) -> "SqliteProgressRepository":
        """Open an existing, initialized database; never creates one."""
        db_path = Path(db_path).expanduser()
        if not db_path.exists():
            raise StartupError(
                f"Problem opening the database at {db_path}\nRun \"fitdb init\" to initialize it."
            )
        try:
            conn = _connect(db_path)
            rows = conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'").fetchall()
        except sqlite3.Error as exc:
            raise StartupError(f"Cannot open database at {db_path}: {exc}") from exc
        missing = REQUIRED_TABLES - {r["name"] for r in rows}
        if missing:
            conn.close()
            raise StartupError(
                f"Database at {db_path} is not initialized (missing: {', '.join(sorted(missing))}).\n"
                "Run \"fitdb init\" to initialize it."
            )
        return cls(conn, db_path)

    @classmethod
    def in_memory(cls) -> "SqliteProgressRepository":
        conn = _connect(Path(":memory:"))
        conn.executescript(SCHEMA)
        return cls(conn)

    def close(self) -> None:
        self.conn.close()

    @contextmanager
    def _guard(self, action: str) -> Iterator[sqlite3.Connection]:
        try:
            yield self.conn
        except SQLITE_ERRORS as exc:
            raise StorageError(f"{action}: {exc}") from exc

    @contextmanager
    def _write(self, action: str) -> Iterator[sqlite3.Connection]:
        with self._guard(action) as conn:
            try:
                yield conn
            except SQLITE_ERRORS:
                conn.rollback()
                raise
            conn.commit()

    def list_topics(self) -> List[Topic]:
        with self._guard("list topics") as conn:
            rows = conn.execute("SELECT name, created FROM topics ORDER BY created, name").fetchall()
        return [Topic(name=r["name"], created=str(r["created"])) for r in rows]

    def count_items(self, topic: str) -> int:
        with self._guard("count items") as conn:
            row = conn.execute("SELECT COUNT(*) AS n FROM items WHERE topicname = ?", (topic,)).fetchone()
        return int(row["n"]) if row else 0

    def list_items(self, topic: str) -> List[Item]:
        with self._guard("list items") as conn:
            rows = conn.execute("SELECT * FROM items WHERE topicname = ? ORDER BY id", (topic,)).fetchall()
        return [_row_to_item(r) for r in rows]

    def create_topic_and_item(self, values: FormValues) -> int:
        with self._write("create item") as conn:
            conn.execute("INSERT OR IGNORE INTO topics (name) VALUES (?)", (values.topic,))
            cur = conn.execute(
                "INSERT INTO items (name, topicname, isrecurring, percentage, timesfinished, daylimit) "
                "VALUES (?, ?, ?, ?, ?, ?)",
                (
                    values.name,
                    values.topic,
                    int(values.is_recurring),
                    values.percentage,
                    values.times_finished,
                    values.day_limit,
                ),
            )
        return int(cur.lastrowid)

    def update_item_progress(self, item_id: int, percentage: int, times_finished: int) -> None:
        with self._write("update item") as conn:
            cur = conn.execute(
                "UPDATE items SET percentage = ?, timesfinished = ? WHERE id = ?",
                (percentage, times_finished, item_id),
            )
        if cur.rowcount == 0:
            raise StorageError(f"update item: no item with id {item_id}")

    def delete_item(self, item_id: int) -> None:
        with self._write("delete item") as conn:
            conn.execute("DELETE FROM items WHERE id = ?", (item_id,))

    def delete_topic(self, name: str) -> None:
        with self._write("delete topic") as conn:
            conn.execute("DELETE FROM topics WHERE name = ?", (name,))


__all__ = ["SqliteProgressRepository", "SCHEMA"]
