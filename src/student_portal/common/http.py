from __future__ import annotations

from typing import Any, Optional

from flask import jsonify, request


def ok(message: str, data: Any = None, status: int = 200):
    body: dict = {"message": message}
    if data is not None:
        body["data"] = data
    return jsonify(body), status


def error(message: str, status: int, detail: Optional[str] = None):
    body: dict = {"message": message}
    if detail is not None:
        body["error"] = detail
    return jsonify(body), status


def mount(app, blueprint) -> None:
    """Register a feature blueprint under the configured API prefix."""
    app.register_blueprint(blueprint, url_prefix=app.config.get("API_PREFIX") or None)


def json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}
