from __future__ import annotations

from flask import Blueprint, Flask

from ..common.http import mount, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    bp = Blueprint("academics", __name__)

    @bp.route("/estudiante/<dni>/periodos", methods=["GET"], endpoint="periods")
    def periods(dni: str):
        items = container.academic_service.list_periods(dni)
        return ok("Periodos académicos", [p.to_dict() for p in items])

    @bp.route("/estudiante/<dni>/notas", methods=["GET"], endpoint="grades")
    def grades(dni: str):
        items = container.academic_service.list_grades(dni)
        return ok("Notas del estudiante", [g.to_dict() for g in items])

    mount(app, bp)
