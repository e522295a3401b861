from __future__ import annotations

from flask import Blueprint, Flask, request, send_file

from ..common.files import UploadedFile
from ..common.http import json_body, mount, ok
from ..container import Container
from ..core.constants import PROFILE_IMAGE_FIELD


def register(app: Flask, container: Container) -> None:
    bp = Blueprint("students", __name__)

    @bp.route("/login", methods=["POST"], endpoint="login")
    def login():
        body = json_body()
        student = container.auth_service.authenticate(body.get("usuario"), body.get("clave"))
        return ok("Inicio de sesión exitoso", student.to_public_dict())

    @bp.route("/estudiante/<dni>", methods=["GET"], endpoint="profile")
    def profile(dni: str):
        data = container.student_service.get_profile(dni)
        return ok("Estudiante encontrado", data.to_dict())

    @bp.route("/estudiante/<dni>/update", methods=["PUT"], endpoint="update_field")
    def update_field(dni: str):
        body = json_body()
        field = body.get("field")
        container.student_service.update_field(dni, field, body.get("value"))
        return ok("Campo actualizado correctamente", {"field": field})

    @bp.route("/estudiante/<dni>/qr_code", methods=["GET"], endpoint="qr_code")
    def qr_code(dni: str):
        # Kept flat (no envelope): mobile clients read qr_code_url directly
        return {"qr_code_url": container.student_service.get_qr_code_url(dni)}

    @bp.route("/estudiante/<dni>/imagen", methods=["POST"], endpoint="upload_profile_image")
    def upload_profile_image(dni: str):
        storage = request.files.get(PROFILE_IMAGE_FIELD)
        file = UploadedFile.from_file_storage(storage) if storage and storage.filename else None
        filename = container.student_service.save_profile_image(dni, file)
        return ok(
            "Imagen de perfil actualizada",
            {"filename": filename, "imagen_url": f"{request.script_root}{request.path}"},
            status=201,
        )

    @bp.route("/estudiante/<dni>/imagen", methods=["GET"], endpoint="profile_image")
    def profile_image(dni: str):
        path = container.student_service.get_profile_image(dni)
        return send_file(path, max_age=0)

    mount(app, bp)
