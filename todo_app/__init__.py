"""
To-do list backend: item model, SQLite store and the priority-shifting rule.
Web API lives in app.py at the project root; CLI: python -m todo_app
"""

from todo_app.todo import ToDo
from todo_app.prioritizer import (
    ToDoPrioritizer,
    prioritize_down,
    prioritize_up,
    reprioritize,
)
from todo_app.errors import ToDoNotFound, ValidationError

__all__ = [
    "ToDo",
    "ToDoPrioritizer",
    "reprioritize",
    "prioritize_up",
    "prioritize_down",
    "ToDoNotFound",
    "ValidationError",
]
