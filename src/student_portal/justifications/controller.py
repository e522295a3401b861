from __future__ import annotations

from flask import Blueprint, Flask, request

from ..common.files import collect_uploads
from ..common.http import mount, ok
from ..container import Container
from ..core.constants import JUSTIFICATION_FILE_FIELDS


def register(app: Flask, container: Container) -> None:
    bp = Blueprint("justifications", __name__)

    @bp.route("/justificacion", methods=["POST"], endpoint="submit")
    @bp.route("/justificaciones", methods=["POST"], endpoint="submit")
    def submit():
        form = request.form
        storages = [s for field in JUSTIFICATION_FILE_FIELDS for s in request.files.getlist(field)]

        new = container.justification_service.validate(
            dni=form.get("dni_estudiante"),
            tipo_justificacion=form.get("tipo_justificacion"),
            motivo=form.get("motivo_estudiante"),
            fecha_inicio=form.get("fecha_inicio"),
            fecha_fin=form.get("fecha_fin"),
            files=collect_uploads(storages),
        )
        result = container.justification_service.submit(new)
        return ok("Justificación registrada exitosamente", result.to_dict(), status=201)

    @bp.route("/justificaciones/<dni>", methods=["GET"], endpoint="list_for_student")
    def list_for_student(dni: str):
        items = container.justification_service.list_for_student(dni)
        return ok("Justificaciones del estudiante", [j.to_dict() for j in items])

    @bp.route("/tipos_justificacion", methods=["GET"], endpoint="types")
    def types():
        return ok("Tipos de justificación", [t.to_dict() for t in container.justification_service.list_types()])

    mount(app, bp)
