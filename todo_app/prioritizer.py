"""
Priority shifting for to-do lists.

Moving an item from `target_priority` by `amount` places it at
`target_priority - amount`; every item in the band it passes over shifts one
step the other way so the ordering stays dense. Items are mutated in place and
returned as a new list sorted by priority (stable, so ties keep input order).
"""

from __future__ import annotations

from typing import Sequence

from todo_app.todo import ToDo


def reprioritize(items: Sequence[ToDo], target_priority: int, amount: int) -> list[ToDo]:
    """Shift `target_priority` by `amount` (positive = earlier) and re-sort."""
    for item in items:
        p = item.priority
        if p == target_priority:
            item.priority = p - amount
        elif amount > 0 and target_priority - amount - 1 < p < target_priority:
            item.priority = p + 1
        elif target_priority - 1 < p < target_priority - amount + 1:
            item.priority = p - 1
    return sorted(items, key=lambda t: t.priority)


def prioritize_up(items: Sequence[ToDo], target_priority: int, amount: int) -> list[ToDo]:
    return reprioritize(items, target_priority, amount)


def prioritize_down(items: Sequence[ToDo], target_priority: int, amount: int) -> list[ToDo]:
    return reprioritize(items, target_priority, -amount)


class ToDoPrioritizer:
    """Stateless prioritizer handed to the web layer and CLI."""

    def prioritize_up(self, items: Sequence[ToDo], target_priority: int, amount: int) -> list[ToDo]:
        return prioritize_up(items, target_priority, amount)

    def prioritize_down(self, items: Sequence[ToDo], target_priority: int, amount: int) -> list[ToDo]:
        return prioritize_down(items, target_priority, amount)
