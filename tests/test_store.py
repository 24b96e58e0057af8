"""Tests for the SQLite to-do store."""

import pytest

from todo_app import todo_store
from todo_app.prioritizer import prioritize_down, prioritize_up
from todo_app.todo import ToDo


@pytest.fixture
def db_path(tmp_path):
    path = str(tmp_path / "todo.db")
    todo_store.init_db(path)
    return path


def seed(db_path, *descriptions):
    return [
        todo_store.save_todo(db_path, ToDo(description=d, priority=i))
        for i, d in enumerate(descriptions, start=1)
    ]


def test_init_db_is_idempotent(db_path):
    todo_store.init_db(db_path)
    assert todo_store.count_todos(db_path) == 0


def test_save_assigns_id_and_lists_by_priority(db_path):
    todo_store.save_todo(db_path, ToDo(description="later", priority=2))
    first = todo_store.save_todo(db_path, ToDo(description="first", priority=1))
    assert first.id is not None
    assert [t.description for t in todo_store.list_all(db_path)] == ["first", "later"]
    assert todo_store.count_todos(db_path) == 2


def test_update_and_filter_by_done(db_path):
    a, b = seed(db_path, "a", "b")
    a.mark_done()
    todo_store.save_todo(db_path, a)
    assert todo_store.get_todo(db_path, a.id).done is True
    assert [t.id for t in todo_store.list_by_done(db_path, False)] == [b.id]
    assert [t.id for t in todo_store.list_by_done(db_path, True)] == [a.id]


def test_get_missing_returns_none(db_path):
    assert todo_store.get_todo(db_path, 42) is None


def test_delete(db_path):
    (a,) = seed(db_path, "a")
    assert todo_store.delete_todo(db_path, a.id) is True
    assert todo_store.delete_todo(db_path, a.id) is False
    assert todo_store.list_all(db_path) == []


def test_save_all_updates_every_row(db_path):
    todos = seed(db_path, "a", "b")
    todos[0].priority, todos[1].priority = 2, 1
    todo_store.save_all(db_path, todos)
    assert [t.description for t in todo_store.list_all(db_path)] == ["b", "a"]


def test_reprioritize_stored_persists(db_path):
    seed(db_path, "one", "two", "three", "four", "five")
    result = todo_store.reprioritize_stored(db_path, prioritize_up, 4, 2)
    expected = ["one", "four", "two", "three", "five"]
    assert [t.description for t in result] == expected
    stored = todo_store.list_all(db_path)
    assert [t.description for t in stored] == expected
    assert [t.priority for t in stored] == [1, 2, 3, 4, 5]


def test_reprioritize_stored_down(db_path):
    seed(db_path, "one", "two", "three")
    todo_store.reprioritize_stored(db_path, prioritize_down, 1, 2)
    assert [t.description for t in todo_store.list_all(db_path)] == ["two", "three", "one"]


def test_reprioritize_stored_rolls_back_on_error(db_path):
    seed(db_path, "one", "two")

    def broken(todos, target, amount):
        todos[0].priority = 99
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        todo_store.reprioritize_stored(db_path, broken, 1, 1)
    assert [t.priority for t in todo_store.list_all(db_path)] == [1, 2]
    # lock released after rollback
    todo_store.save_todo(db_path, ToDo(description="three", priority=3))


def test_save_all_inserts_new_and_updates_existing(db_path):
    (a,) = seed(db_path, "a")
    a.priority = 3
    fresh = [ToDo(description="b", priority=1), ToDo(description="c", priority=2)]
    saved = todo_store.save_all(db_path, [a, *fresh])
    assert all(t.id is not None for t in saved)
    assert [t.description for t in todo_store.list_all(db_path)] == ["b", "c", "a"]
