"""To-do item model shared by the store, prioritizer and API."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class ToDo:
    description: str
    priority: int = 0
    done: bool = False
    id: int | None = None

    def mark_done(self) -> None:
        self.done = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "description": self.description,
            "priority": self.priority,
            "done": self.done,
        }
