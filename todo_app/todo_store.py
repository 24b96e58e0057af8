"""SQLite-backed to-do storage."""

from __future__ import annotations

import logging
import sqlite3
from contextlib import closing
from typing import Callable, Iterable

from todo_app.todo import ToDo

log = logging.getLogger(__name__)

_COLUMNS = "id, description, priority, done"


def init_db(db_path: str) -> None:
    with sqlite3.connect(db_path) as conn:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS todos (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                description TEXT NOT NULL,
                priority INTEGER NOT NULL,
                done INTEGER NOT NULL DEFAULT 0,
                created_at TEXT NOT NULL DEFAULT (datetime('now'))
            )
            """
        )
        conn.execute("CREATE INDEX IF NOT EXISTS idx_todos_priority ON todos(priority)")
        conn.commit()


def _row_to_todo(row: sqlite3.Row) -> ToDo:
    return ToDo(
        id=row["id"],
        description=row["description"],
        priority=row["priority"],
        done=bool(row["done"]),
    )


def _select_ordered(conn: sqlite3.Connection, where: str = "", params: tuple = ()) -> list[ToDo]:
    conn.row_factory = sqlite3.Row
    rows = conn.execute(
        f"SELECT {_COLUMNS} FROM todos {where} ORDER BY priority ASC, id ASC",
        params,
    ).fetchall()
    return [_row_to_todo(row) for row in rows]


def _update(conn: sqlite3.Connection, todos: Iterable[ToDo]) -> None:
    conn.executemany(
        "UPDATE todos SET description = ?, priority = ?, done = ? WHERE id = ?",
        [(t.description, int(t.priority), int(t.done), t.id) for t in todos],
    )


def count_todos(db_path: str) -> int:
    with sqlite3.connect(db_path) as conn:
        return int(conn.execute("SELECT COUNT(*) FROM todos").fetchone()[0])


def list_all(db_path: str) -> list[ToDo]:
    with sqlite3.connect(db_path) as conn:
        return _select_ordered(conn)


def list_by_done(db_path: str, done: bool) -> list[ToDo]:
    with sqlite3.connect(db_path) as conn:
        return _select_ordered(conn, "WHERE done = ?", (int(done),))


def get_todo(db_path: str, todo_id: int) -> ToDo | None:
    with sqlite3.connect(db_path) as conn:
        found = _select_ordered(conn, "WHERE id = ?", (todo_id,))
    return found[0] if found else None


def _insert(conn: sqlite3.Connection, todo: ToDo) -> None:
    cur = conn.execute(
        "INSERT INTO todos (description, priority, done) VALUES (?, ?, ?)",
        (todo.description, int(todo.priority), int(todo.done)),
    )
    todo.id = int(cur.lastrowid)


def save_todo(db_path: str, todo: ToDo) -> ToDo:
    """Insert `todo` when it has no id yet, otherwise update its row."""
    save_all(db_path, [todo])
    return todo


def save_all(db_path: str, todos: Iterable[ToDo]) -> list[ToDo]:
    """Insert or update every to-do in one transaction; new ones get ids."""
    todos = list(todos)
    existing = [t for t in todos if t.id is not None]
    with sqlite3.connect(db_path) as conn:
        _update(conn, existing)
        for todo in todos:
            if todo.id is None:
                _insert(conn, todo)
        conn.commit()
    return todos


def delete_todo(db_path: str, todo_id: int) -> bool:
    with sqlite3.connect(db_path) as conn:
        cur = conn.execute("DELETE FROM todos WHERE id = ?", (todo_id,))
        conn.commit()
        return cur.rowcount > 0


def reprioritize_stored(
    db_path: str,
    prioritize: Callable[[list[ToDo], int, int], list[ToDo]],
    target_priority: int,
    amount: int,
) -> list[ToDo]:
    """Load, reprioritize and save every to-do under one write lock."""
    with closing(sqlite3.connect(db_path, isolation_level=None)) as conn:
        conn.execute("BEGIN IMMEDIATE")
        try:
            todos = prioritize(_select_ordered(conn), target_priority, amount)
            _update(conn, todos)
        except Exception:
            conn.execute("ROLLBACK")
            raise
        conn.execute("COMMIT")
    log.info("reprioritized %d to-dos (target=%d, amount=%d)", len(todos), target_priority, amount)
    return todos
