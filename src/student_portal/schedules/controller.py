from __future__ import annotations

from flask import Blueprint, Flask

from ..common.http import mount, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    bp = Blueprint("schedules", __name__)

    @bp.route("/horario/<int:programa_id>", methods=["GET"], endpoint="schedule")
    def schedule(programa_id: int):
        resolved = container.schedule_service.get_schedule(programa_id)
        return ok("Horario encontrado", resolved.to_dict())

    mount(app, bp)
