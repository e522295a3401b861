from __future__ import annotations

from flask import Blueprint, Flask

from ..common.http import mount, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    bp = Blueprint("payments", __name__)

    @bp.route("/tipos_pago", methods=["GET"], endpoint="payment_types")
    def payment_types():
        return ok("Tipos de pago", [t.to_dict() for t in container.payment_service.list_types()])

    @bp.route("/estudiante/<dni>/pagos", methods=["GET"], endpoint="student_payments")
    def student_payments(dni: str):
        statement = container.payment_service.get_statement(dni)
        return ok("Pagos del estudiante", statement.to_dict())

    mount(app, bp)
