from __future__ import annotations

from flask import Flask
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge

from .common.http import error
from .common.logging import get_logger
from .core.exceptions import AuthenticationError, NotFoundError, UploadError, ValidationError

logger = get_logger("errors")

_INTERNAL_DETAIL = "Error interno"


def register_error_handlers(app: Flask) -> None:
    def _detail(e: Exception) -> str:
        return str(e) if app.config.get("DEBUG") else _INTERNAL_DETAIL

    @app.errorhandler(ValidationError)
    def _validation(e: ValidationError):
        return error(str(e), 400)

    @app.errorhandler(AuthenticationError)
    def _authentication(e: AuthenticationError):
        return error(str(e), 401)

    @app.errorhandler(NotFoundError)
    def _not_found(e: NotFoundError):
        return error(str(e), 404)

    @app.errorhandler(UploadError)
    def _upload(e: UploadError):
        logger.error("Upload failed: %s", e.__cause__ or e)
        return error("Error al procesar la justificación", 500, _detail(e.__cause__ or e))

    @app.errorhandler(RequestEntityTooLarge)
    def _too_large(e: RequestEntityTooLarge):
        return error("Los archivos enviados superan el tamaño permitido", 413)

    @app.errorhandler(HTTPException)
    def _http(e: HTTPException):
        return error(e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def _unhandled(e: Exception):
        logger.exception("Unhandled error")
        return error("Error interno del servidor", 500, _detail(e))
