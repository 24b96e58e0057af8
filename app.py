"""To-do list Flask app.

Run from project root:
    python app.py
"""

import logging
import os
from pathlib import Path
from typing import Any

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from todo_app import todo_store
from todo_app.errors import ToDoNotFound, ValidationError
from todo_app.prioritizer import ToDoPrioritizer
from todo_app.todo import ToDo
from todo_app.validation import DOWN, UP, validate_move, validate_new_todo

app = Flask(__name__)

DEFAULT_DB_PATH = str(Path("instance") / "todo.db")

prioritizer = ToDoPrioritizer()


def _db_path() -> str:
    return os.environ.get("TODO_DB_PATH", DEFAULT_DB_PATH)


def _ensure_db() -> str:
    db_path = Path(_db_path())
    db_path.parent.mkdir(parents=True, exist_ok=True)
    todo_store.init_db(str(db_path))
    return str(db_path)


def _json_body() -> dict[str, Any]:
    data = request.get_json() if request.data else None
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError({"body": "must be a JSON object"})
    return data


def _todo_list(todos: list[ToDo]):
    return jsonify({"items": [t.to_dict() for t in todos]})


@app.errorhandler(ValidationError)
def handle_validation_error(exc: ValidationError):
    app.logger.info("rejected %s %s: %s", request.method, request.path, exc)
    return jsonify({"errors": exc.errors}), 400


@app.errorhandler(ToDoNotFound)
def handle_not_found(exc: ToDoNotFound):
    app.logger.warning("%s %s: %s", request.method, request.path, exc)
    return jsonify({"error": str(exc)}), 404


@app.errorhandler(HTTPException)
def handle_http_error(exc: HTTPException):
    if exc.code is None or exc.code < 400 or not request.path.startswith("/api/"):
        return exc
    return jsonify({"error": exc.description}), exc.code


@app.route("/healthz")
def healthz():
    return jsonify({"ok": True})


@app.route("/api/todos")
def api_list_all():
    db_path = _ensure_db()
    return _todo_list(todo_store.list_all(db_path))


@app.route("/api/todos/active")
def api_list_active():
    db_path = _ensure_db()
    return _todo_list(todo_store.list_by_done(db_path, False))


@app.route("/api/todos", methods=["POST"])
def api_add():
    db_path = _ensure_db()
    todo = validate_new_todo(_json_body())
    todo.priority = todo_store.count_todos(db_path) + 1
    todo_store.save_todo(db_path, todo)
    app.logger.info("created to-do %d at priority %d", todo.id, todo.priority)
    return jsonify({"ok": True, "item": todo.to_dict()})


@app.route("/api/todos/<int:todo_id>", methods=["DELETE"])
def api_delete(todo_id: int):
    db_path = _ensure_db()
    if not todo_store.delete_todo(db_path, todo_id):
        raise ToDoNotFound(todo_id)
    app.logger.info("deleted to-do %d", todo_id)
    return jsonify({"ok": True})


@app.route("/api/todos/<int:todo_id>/done", methods=["POST"])
def api_mark_done(todo_id: int):
    db_path = _ensure_db()
    todo = todo_store.get_todo(db_path, todo_id)
    if todo is None:
        raise ToDoNotFound(todo_id)
    todo.mark_done()
    todo_store.save_todo(db_path, todo)
    app.logger.info("marked to-do %d done", todo_id)
    return jsonify({"ok": True, "item": todo.to_dict()})


@app.route("/api/todos/prioritize/up", methods=["POST"])
def api_prioritize_up():
    db_path = _ensure_db()
    target_priority, amount = validate_move(_json_body(), UP)
    todos = todo_store.reprioritize_stored(db_path, prioritizer.prioritize_up, target_priority, amount)
    return _todo_list(todos)


@app.route("/api/todos/prioritize/down", methods=["POST"])
def api_prioritize_down():
    db_path = _ensure_db()
    target_priority, amount = validate_move(_json_body(), DOWN)
    todos = todo_store.reprioritize_stored(db_path, prioritizer.prioritize_down, target_priority, amount)
    return _todo_list(todos)


if __name__ == "__main__":
    logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO"))
    port = int(os.environ.get("PORT", 5000))
    app.run(host="0.0.0.0", port=port, debug=os.environ.get("FLASK_DEBUG", "0") == "1")
