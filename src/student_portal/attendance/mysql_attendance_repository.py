from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import AttendanceRecord
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_student(self, *, dni: str, unidad_id: Optional[int] = None) -> Sequence[AttendanceRecord]:
        clauses = ["a.dni_estudiante=%s"]
        params: list[object] = [dni]
        if unidad_id is not None:
            clauses.append("a.unidad_id=%s")
            params.append(int(unidad_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT a.asistencia_id, a.dni_estudiante, a.unidad_id, u.nombre AS unidad_nombre,
                       a.fecha, a.estado, a.observacion
                FROM asistencias a
                JOIN unidades_didacticas u ON u.unidad_id = a.unidad_id
                WHERE {where}
                ORDER BY a.fecha DESC, a.asistencia_id DESC
                """,
                tuple(params),
            )
            return [
                AttendanceRecord(
                    asistencia_id=int(r["asistencia_id"]),
                    dni_estudiante=str(r["dni_estudiante"]),
                    unidad_id=int(r["unidad_id"]),
                    unidad_nombre=r["unidad_nombre"],
                    fecha=r["fecha"],
                    estado=r["estado"],
                    observacion=r.get("observacion"),
                )
                for r in fetchall(cur)
            ]
