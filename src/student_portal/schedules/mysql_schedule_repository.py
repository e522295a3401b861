from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Schedule
from .repository import ScheduleRepository


class MySQLScheduleRepository(ScheduleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_latest_for_program(self, programa_id: int) -> Optional[Schedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT h.horario_id, h.programa_id, h.nombre, h.archivo, h.fecha_creacion,
                       pe.nombre_programa
                FROM horarios h
                INNER JOIN programas_estudio pe ON h.programa_id = pe.programa_id
                WHERE h.programa_id=%s
                ORDER BY h.fecha_creacion DESC, h.horario_id DESC
                LIMIT 1
                """,
                (int(programa_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Schedule(
                horario_id=int(r["horario_id"]),
                programa_id=int(r["programa_id"]),
                nombre=r["nombre"],
                archivo=r["archivo"],
                fecha_creacion=r.get("fecha_creacion"),
                programa_nombre=r.get("nombre_programa"),
            )
