from __future__ import annotations

from decimal import Decimal
from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Payment, PaymentType
from .repository import PaymentRepository


class MySQLPaymentRepository(PaymentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_types(self) -> Sequence[PaymentType]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT tipo_pago_id, nombre, monto FROM tipos_pago ORDER BY nombre")
            return [
                PaymentType(tipo_pago_id=int(r["tipo_pago_id"]), nombre=r["nombre"], monto=Decimal(str(r["monto"])))
                for r in fetchall(cur)
            ]

    def list_for_student(self, *, dni: str) -> Sequence[Payment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT p.pago_id, p.dni_estudiante, p.tipo_pago_id, t.nombre AS tipo_nombre,
                       p.monto, p.fecha_pago, p.estado, p.comprobante
                FROM pagos p
                JOIN tipos_pago t ON t.tipo_pago_id = p.tipo_pago_id
                WHERE p.dni_estudiante=%s
                ORDER BY p.fecha_pago DESC, p.pago_id DESC
                """,
                (dni,),
            )
            return [
                Payment(
                    pago_id=int(r["pago_id"]),
                    dni_estudiante=str(r["dni_estudiante"]),
                    tipo_pago_id=int(r["tipo_pago_id"]),
                    tipo_nombre=r["tipo_nombre"],
                    monto=Decimal(str(r["monto"])),
                    fecha_pago=r["fecha_pago"],
                    estado=r["estado"],
                    comprobante=r.get("comprobante"),
                )
                for r in fetchall(cur)
            ]
