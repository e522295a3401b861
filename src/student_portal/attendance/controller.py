from __future__ import annotations

from flask import Blueprint, Flask, request

from ..common.http import mount, ok
from ..common.validators import require_int
from ..container import Container


def register(app: Flask, container: Container) -> None:
    bp = Blueprint("attendance", __name__)

    @bp.route("/estudiante/<dni>/asistencias", methods=["GET"], endpoint="student_attendance")
    def student_attendance(dni: str):
        unidad_s = request.args.get("unidad_id")
        unidad_id = require_int(unidad_s, "unidad_id") if unidad_s else None

        report = container.attendance_service.get_report(dni, unidad_id=unidad_id)
        return ok("Asistencias del estudiante", report.to_dict())

    mount(app, bp)
