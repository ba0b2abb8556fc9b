# tests/test_task_store.py

from __future__ import annotations

import sqlite3
from datetime import date
from pathlib import Path

import pytest

from slack_taskbot.tasks.task_store import TaskStore, sqlite_path_from_url


def test_add_and_get_task(task_store: TaskStore) -> None:
    task_id = task_store.add_task(
        owner="U1", text="  Ship report ", due_date="2025-03-01", creator="U0", origin_channel="C1"
    )
    assert task_id > 0

    task = task_store.get_task(task_id)
    assert task is not None
    assert task.owner == "U1"
    assert task.text == "Ship report"
    assert task.due_date == date(2025, 3, 1)
    assert task.creator == "U0"
    assert task.origin_channel == "C1"
    assert task.completed is False
    assert task.created_at > 0

    assert task_store.get_task(task_id + 100) is None
    assert task_store.count_tasks() == 1


def test_add_task_rejects_bad_input(task_store: TaskStore) -> None:
    with pytest.raises(ValueError):
        task_store.add_task(owner="U1", text="   ", due_date="2025-03-01")
    with pytest.raises(ValueError):
        task_store.add_task(owner="", text="x", due_date="2025-03-01")
    with pytest.raises(ValueError, match="not a valid calendar date"):
        task_store.add_task(owner="U1", text="x", due_date="2024-13-40")
    assert task_store.count_tasks() == 0


def test_list_open_tasks_filters_orders_and_caps(task_store: TaskStore) -> None:
    task_store.add_task(owner="U1", text="late", due_date="2025-06-01")
    task_store.add_task(owner="U1", text="early", due_date="2025-01-15")
    task_store.add_task(owner="U2", text="other owner", due_date="2025-01-01")
    done_id = task_store.add_task(owner="U1", text="done", due_date="2024-12-01")

    conn = sqlite3.connect(task_store.db_path)
    conn.execute("UPDATE tasks SET completed = 1 WHERE id = ?", (done_id,))
    conn.commit()
    conn.close()

    rows = task_store.list_open_tasks_for_user("U1")
    assert [r.text for r in rows] == ["early", "late"]
    assert task_store.list_open_tasks_for_user("nobody") == []
    assert task_store.list_open_tasks_for_user("") == []

    for i in range(55):
        task_store.add_task(owner="U3", text=f"t{i}", due_date=date(2026, 1, 1))
    assert len(task_store.list_open_tasks_for_user("U3")) == 50


def test_list_open_tasks_keeps_insertion_order_for_equal_due_dates(task_store) -> None:
    ids = [
        task_store.add_task(owner="U4", text=f"same {i}", due_date="2026-02-02")
        for i in range(5)
    ]
    first = task_store.add_task(owner="U4", text="first", due_date="2026-02-01")

    rows = task_store.list_open_tasks_for_user("U4")
    assert [r.id for r in rows] == [first, *ids]


def test_schema_migration_adds_missing_columns(tmp_path: Path) -> None:
    db = tmp_path / "old.sqlite3"
    conn = sqlite3.connect(db)
    conn.execute(
        "CREATE TABLE tasks (id INTEGER PRIMARY KEY AUTOINCREMENT, user_id TEXT NOT NULL, "
        "task_text TEXT NOT NULL, due_date TEXT NOT NULL)"
    )
    conn.execute("INSERT INTO tasks(user_id, task_text, due_date) VALUES ('U1', 'legacy', '2025-02-02')")
    conn.commit()
    conn.close()

    store = TaskStore(db)
    legacy = store.get_task(1)
    assert legacy is not None
    assert legacy.completed is False
    assert legacy.origin_channel is None
    assert [t.text for t in store.list_open_tasks_for_user("U1")] == ["legacy"]


@pytest.mark.parametrize(
    "url, expected",
    [
        ("sqlite:///data/tasks.sqlite3", Path("data/tasks.sqlite3")),
        ("sqlite:////var/lib/tasks.sqlite3", Path("/var/lib/tasks.sqlite3")),
        ("tasks.sqlite3", Path("tasks.sqlite3")),
    ],
)
def test_sqlite_path_from_url(url, expected) -> None:
    assert sqlite_path_from_url(url) == expected


@pytest.mark.parametrize("url", ["", "postgres://u:p@db/tasks", "sqlite:///:memory:", "sqlite://"])
def test_sqlite_path_from_url_rejects(url) -> None:
    with pytest.raises(ValueError):
        sqlite_path_from_url(url)
