"""Input checks shared by the web API and the CLI."""

from __future__ import annotations

from typing import Any

from todo_app.errors import ValidationError
from todo_app.todo import ToDo

MAX_DESCRIPTION_LENGTH = 255

# SQLite INTEGER is a signed 64-bit value.
MIN_PRIORITY = -(2**63)
MAX_PRIORITY = 2**63 - 1

UP = 1
DOWN = -1


def parse_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _in_range(value: int) -> bool:
    return MIN_PRIORITY <= value <= MAX_PRIORITY


def validate_new_todo(data: dict[str, Any]) -> ToDo:
    """Build an unsaved ToDo from request/file data or raise ValidationError."""
    errors = {}
    description = data.get("description")
    if not isinstance(description, str) or not description.strip():
        errors["description"] = "must not be blank"
    elif len(description.strip()) > MAX_DESCRIPTION_LENGTH:
        errors["description"] = f"must be {MAX_DESCRIPTION_LENGTH} characters or fewer"
    done = data.get("done", False)
    if not isinstance(done, bool):
        errors["done"] = "must be true or false"
    if errors:
        raise ValidationError(errors)
    return ToDo(description=description.strip(), done=done)


def validate_move(data: dict[str, Any], direction: int) -> tuple[int, int]:
    """Return (target_priority, amount) for an UP or DOWN move.

    The moved item lands on target_priority - direction * amount, which must
    still fit in a stored priority.
    """
    errors = {}
    target_priority = parse_int(data.get("target_priority"))
    if target_priority is None:
        errors["target_priority"] = "must be an integer"
    elif not _in_range(target_priority):
        errors["target_priority"] = f"must be between {MIN_PRIORITY} and {MAX_PRIORITY}"
    amount = parse_int(data.get("amount"))
    if amount is None:
        errors["amount"] = "must be an integer"
    elif amount < 0:
        errors["amount"] = "must be zero or greater"
    elif amount > MAX_PRIORITY:
        errors["amount"] = f"must be between 0 and {MAX_PRIORITY}"
    if errors:
        raise ValidationError(errors)
    if not _in_range(target_priority - direction * amount):
        raise ValidationError({"amount": "moves the item outside the allowed priority range"})
    return target_priority, amount
