"""Exceptions raised by the request layer and mapped to JSON responses in app.py."""

from __future__ import annotations


class ValidationError(Exception):
    """Bad request input; `errors` maps each offending field to a message."""

    def __init__(self, errors: dict[str, str]):
        super().__init__("; ".join(f"{k}: {v}" for k, v in errors.items()))
        self.errors = dict(errors)


class ToDoNotFound(LookupError):
    def __init__(self, todo_id: int):
        super().__init__(f"To-do {todo_id} not found")
        self.todo_id = todo_id
