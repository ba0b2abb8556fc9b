# src/slack_taskbot/tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
import time
from datetime import date
from pathlib import Path

from .task_models import Task, TaskSummary

logger = logging.getLogger(__name__)

OPEN_TASKS_LIMIT = 50


def sqlite_path_from_url(url: str) -> Path:
    """
    Resolve DATABASE_URL to a SQLite file path.

    Accepted:
    - sqlite:///relative/path.sqlite3
    - sqlite:////absolute/path.sqlite3
    - a bare filesystem path
    """
    raw = (url or "").strip()
    if not raw:
        raise ValueError("database url is empty")

    if "://" not in raw:
        return Path(raw).expanduser()

    scheme, _, rest = raw.partition("://")
    if scheme.lower() != "sqlite":
        raise ValueError(f"unsupported database scheme: {scheme!r} (only sqlite is supported)")

    # sqlite:///x -> rest == "/x" (relative), sqlite:////x -> rest == "//x" (absolute)
    path = rest[1:] if rest.startswith("/") else rest
    if not path or path == ":memory:":
        raise ValueError("an on-disk sqlite database is required")
    return Path(path).expanduser()


def _parse_due(raw: str | date) -> date:
    if isinstance(raw, date):
        return raw
    return date.fromisoformat(str(raw).strip())


class TaskStore:
    """
    SQLite task store.

    The schema is intentionally simple and migration-safe:
    - create table if missing
    - use PRAGMA table_info to detect missing columns
    - add columns with ALTER TABLE only when needed

    Thread-safety:
    - each method opens its own SQLite connection, so calls can run in worker threads
    """

    def __init__(self, db_path: str | Path = "tasks.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        logger.info("TaskStore ready db=%s total=%s", self._db_path, self.count_tasks())

    @classmethod
    def from_url(cls, url: str) -> TaskStore:
        return cls(sqlite_path_from_url(url))

    @property
    def db_path(self) -> Path:
        return self._db_path

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            cur = conn.cursor()

            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    user_id TEXT NOT NULL,
                    task_text TEXT NOT NULL,
                    due_date TEXT NOT NULL,
                    created_by TEXT,
                    channel_id TEXT,
                    created_at REAL NOT NULL,
                    completed INTEGER NOT NULL DEFAULT 0
                )
                """
            )

            cur.execute("PRAGMA table_info(tasks)")
            cols = {row["name"] for row in cur.fetchall()}

            def add_col(name: str, decl: str) -> None:
                if name in cols:
                    return
                cur.execute(f"ALTER TABLE tasks ADD COLUMN {name} {decl}")
                logger.info("TaskStore migration: added column %s", name)

            add_col("created_by", "TEXT")
            add_col("channel_id", "TEXT")
            add_col("created_at", "REAL NOT NULL DEFAULT 0")
            add_col("completed", "INTEGER NOT NULL DEFAULT 0")

            cur.execute(
                "CREATE INDEX IF NOT EXISTS idx_tasks_owner_open "
                "ON tasks(user_id, completed, due_date)"
            )

            conn.commit()
        finally:
            conn.close()

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        return Task(
            id=int(row["id"]),
            owner=str(row["user_id"]),
            text=str(row["task_text"] or ""),
            due_date=_parse_due(row["due_date"]),
            creator=row["created_by"],
            origin_channel=row["channel_id"],
            created_at=float(row["created_at"] or 0.0),
            completed=bool(row["completed"]),
        )

    # ---- public API ----

    def count_tasks(self) -> int:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute("SELECT COUNT(*) FROM tasks")
            (n,) = cur.fetchone()
            return int(n)
        finally:
            conn.close()

    def add_task(
        self,
        *,
        owner: str,
        text: str,
        due_date: str | date,
        creator: str | None = None,
        origin_channel: str | None = None,
    ) -> int:
        """
        Insert one task and return its id.

        Raises ValueError when owner/text are empty or due_date is not a real calendar date.
        """
        if not owner or not owner.strip():
            raise ValueError("owner is required")
        if not text or not text.strip():
            raise ValueError("task text is required")
        try:
            due = _parse_due(due_date)
        except ValueError:
            raise ValueError(f"{due_date} is not a valid calendar date") from None

        now = time.time()

        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute(
                """
                INSERT INTO tasks(user_id, task_text, due_date, created_by, channel_id, created_at)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (owner.strip(), text.strip(), due.isoformat(), creator, origin_channel, now),
            )
            conn.commit()
            rowid = cur.lastrowid
            if rowid is None:
                raise RuntimeError("SQLite did not return lastrowid for tasks insert")
            task_id = int(rowid)
            logger.debug("Task added id=%s owner=%s due=%s", task_id, owner, due.isoformat())
            return task_id
        finally:
            conn.close()

    def get_task(self, task_id: int) -> Task | None:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute("SELECT * FROM tasks WHERE id = ?", (int(task_id),))
            row = cur.fetchone()
            return self._row_to_task(row) if row else None
        finally:
            conn.close()

    def list_open_tasks_for_user(
        self, user_id: str, limit: int = OPEN_TASKS_LIMIT
    ) -> list[TaskSummary]:
        """
        Open (completed = 0) tasks owned by user_id, earliest due date first.

        Equal due dates keep insertion (rowid) order.
        """
        if not user_id:
            return []

        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute(
                """
                SELECT id, task_text, due_date
                FROM tasks
                WHERE user_id = ?
                  AND completed = 0
                ORDER BY due_date ASC, id ASC
                    LIMIT ?
                """,
                (user_id, int(limit)),
            )
            return [
                TaskSummary(
                    id=int(r["id"]),
                    text=str(r["task_text"] or ""),
                    due_date=_parse_due(r["due_date"]),
                )
                for r in cur.fetchall()
            ]
        finally:
            conn.close()
