"""
To-do CLI. Run from project root: python -m todo_app list
Works directly on the same SQLite file the web app uses (TODO_DB_PATH).
"""

import argparse
import logging
import os
import sys
from pathlib import Path

import yaml

from todo_app import todo_store
from todo_app.errors import ValidationError
from todo_app.prioritizer import ToDoPrioritizer
from todo_app.validation import DOWN, UP, validate_move, validate_new_todo

DEFAULT_DB_PATH = str(Path("instance") / "todo.db")

log = logging.getLogger(__name__)


def _print_todos(todos):
    for todo in todos:
        mark = "x" if todo.done else " "
        print(f"{todo.priority}. [{mark}] {todo.description} (#{todo.id})")


def _print_errors(errors):
    for field, message in errors.items():
        print(f"{field}: {message}", file=sys.stderr)


def _not_found(todo_id):
    log.warning("to-do %d not found", todo_id)
    print(f"To-do {todo_id} not found", file=sys.stderr)
    return 1


def _load_yaml_items(path):
    """Read a YAML list of {description, done?} mappings (or bare strings) into unsaved ToDos."""
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return []
    if not isinstance(data, list):
        raise ValidationError({"file": "must contain a list of to-dos"})
    todos = []
    errors = {}
    for i, entry in enumerate(data, start=1):
        if isinstance(entry, str):
            entry = {"description": entry}
        if not isinstance(entry, dict):
            errors[f"entry {i}"] = "must be a mapping or a string"
            continue
        try:
            todos.append(validate_new_todo(entry))
        except ValidationError as exc:
            errors.update({f"entry {i}.{field}": message for field, message in exc.errors.items()})
    if errors:
        raise ValidationError(errors)
    return todos


def build_parser():
    parser = argparse.ArgumentParser(description="To-do list: add, complete and reorder items")
    parser.add_argument("--db", metavar="PATH", help="SQLite file (default: $TODO_DB_PATH or instance/todo.db)")
    sub = parser.add_subparsers(dest="command", required=True)

    p_list = sub.add_parser("list", help="Show to-dos by priority")
    p_list.add_argument("--active", action="store_true", help="Only items not yet done")

    p_add = sub.add_parser("add", help="Append a to-do at the lowest priority")
    p_add.add_argument("description")

    for name, text in (("done", "Mark a to-do as done"), ("delete", "Delete a to-do")):
        p = sub.add_parser(name, help=text)
        p.add_argument("id", type=int)

    for name, text in (("up", "Move a to-do earlier"), ("down", "Move a to-do later")):
        p = sub.add_parser(name, help=text)
        p.add_argument("target", type=int, help="Current priority of the item to move")
        p.add_argument("amount", type=int, help="Number of places to move it")

    p_import = sub.add_parser("import", help="Append to-dos from a YAML list")
    p_import.add_argument("file")
    p_export = sub.add_parser("export", help="Write all to-dos to a YAML file")
    p_export.add_argument("file")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    db_path = args.db or os.environ.get("TODO_DB_PATH", DEFAULT_DB_PATH)
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    todo_store.init_db(db_path)
    prioritizer = ToDoPrioritizer()

    if args.command == "list":
        todos = todo_store.list_by_done(db_path, False) if args.active else todo_store.list_all(db_path)
        _print_todos(todos)
    elif args.command == "add":
        try:
            todo = validate_new_todo({"description": args.description})
        except ValidationError as exc:
            _print_errors(exc.errors)
            return 1
        todo.priority = todo_store.count_todos(db_path) + 1
        todo_store.save_todo(db_path, todo)
        log.info("created to-do %d at priority %d", todo.id, todo.priority)
        print(f"Added #{todo.id} at priority {todo.priority}")
    elif args.command == "done":
        todo = todo_store.get_todo(db_path, args.id)
        if todo is None:
            return _not_found(args.id)
        todo.mark_done()
        todo_store.save_todo(db_path, todo)
        log.info("marked to-do %d done", args.id)
    elif args.command == "delete":
        if not todo_store.delete_todo(db_path, args.id):
            return _not_found(args.id)
        log.info("deleted to-do %d", args.id)
    elif args.command in ("up", "down"):
        direction = UP if args.command == "up" else DOWN
        try:
            target, amount = validate_move({"target_priority": args.target, "amount": args.amount}, direction)
        except ValidationError as exc:
            _print_errors(exc.errors)
            return 1
        prioritize = prioritizer.prioritize_up if direction == UP else prioritizer.prioritize_down
        _print_todos(todo_store.reprioritize_stored(db_path, prioritize, target, amount))
    elif args.command == "import":
        try:
            todos = _load_yaml_items(args.file)
        except (OSError, yaml.YAMLError) as exc:
            log.warning("cannot import %s: %s", args.file, exc)
            print(f"Cannot import {args.file}: {exc}", file=sys.stderr)
            return 1
        except ValidationError as exc:
            log.warning("cannot import %s: %s", args.file, exc)
            print(f"Cannot import {args.file}:", file=sys.stderr)
            _print_errors(exc.errors)
            return 1
        start = todo_store.count_todos(db_path) + 1
        for offset, todo in enumerate(todos):
            todo.priority = start + offset
        todo_store.save_all(db_path, todos)
        log.info("imported %d to-dos from %s", len(todos), args.file)
        print(f"Imported {len(todos)} to-dos")
    elif args.command == "export":
        data = [t.to_dict() for t in todo_store.list_all(db_path)]
        with open(args.file, "w", encoding="utf-8") as f:
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
        print(f"Exported {len(data)} to-dos to {args.file}")

    return 0


if __name__ == "__main__":
    logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO"))
    sys.exit(main() or 0)
