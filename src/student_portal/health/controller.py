from __future__ import annotations

import time
from datetime import datetime, timezone

from flask import Blueprint, Flask

from ..common.http import mount, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    bp = Blueprint("health", __name__)
    started = time.monotonic()

    @bp.route("/health", methods=["GET"], endpoint="health")
    def health():
        connected = container.conn is not None and container.conn.is_initialized
        return {
            "status": "ok",
            "uptime": round(time.monotonic() - started, 3),
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "database": "connected" if connected else "disconnected",
        }

    @bp.route("/status", methods=["GET"], endpoint="status")
    def status():
        return {"message": "Servidor activo y en funcionamiento"}

    @bp.route("/test-db", methods=["GET"], endpoint="test_db")
    def test_db():
        if container.conn is None:
            raise RuntimeError("Sin conexión a la base de datos configurada")
        result = container.conn.ping()
        return ok("Conexión a la base de datos exitosa", {"result": result})

    mount(app, bp)
