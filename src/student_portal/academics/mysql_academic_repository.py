from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from ..common.grouping import group_nested
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AcademicPeriod, CourseUnit, Grade, PeriodGrades, Semester
from .repository import AcademicRepository


def _to_period(r: dict) -> AcademicPeriod:
    return AcademicPeriod(
        periodo_id=int(r["periodo_id"]),
        nombre=r["periodo_nombre"],
        fecha_inicio=r["fecha_inicio"],
        fecha_fin=r["fecha_fin"],
    )


def _to_unit(r: dict) -> CourseUnit:
    return CourseUnit(
        unidad_id=int(r["unidad_id"]),
        nombre=r["unidad_nombre"],
        semestre=int(r["semestre"]),
        creditos=int(r.get("creditos") or 0),
        horas=int(r.get("horas") or 0),
    )


class MySQLAcademicRepository(AcademicRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_current_period(self, today: date) -> Optional[AcademicPeriod]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT periodo_id, nombre AS periodo_nombre, fecha_inicio, fecha_fin
                FROM periodos_academicos
                ORDER BY (%s BETWEEN fecha_inicio AND fecha_fin) DESC, fecha_inicio DESC
                LIMIT 1
                """,
                (today,),
            )
            r = fetchone(cur)
            return _to_period(r) if r else None

    def list_course_units(
        self, *, programa_id: int, semestre: int, periodo_id: Optional[int] = None
    ) -> Sequence[CourseUnit]:
        clauses = ["programa_id=%s", "semestre=%s"]
        params: list[object] = [int(programa_id), int(semestre)]
        if periodo_id is not None:
            clauses.append("periodo_id=%s")
            params.append(int(periodo_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT unidad_id, nombre AS unidad_nombre, semestre, creditos, horas
                FROM unidades_didacticas
                WHERE {where}
                ORDER BY nombre
                """,
                tuple(params),
            )
            return [_to_unit(r) for r in fetchall(cur)]

    def list_periods_with_units(self, *, programa_id: int) -> Sequence[AcademicPeriod]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT p.periodo_id, p.nombre AS periodo_nombre, p.fecha_inicio, p.fecha_fin,
                       u.unidad_id, u.nombre AS unidad_nombre, u.semestre, u.creditos, u.horas
                FROM periodos_academicos p
                LEFT JOIN unidades_didacticas u
                       ON u.periodo_id = p.periodo_id AND u.programa_id = %s
                ORDER BY p.fecha_inicio DESC, p.periodo_id DESC, u.semestre ASC, u.nombre ASC
                """,
                (int(programa_id),),
            )
            rows = fetchall(cur)

        periods = group_nested(
            rows,
            key=lambda r: r["periodo_id"],
            make_parent=_to_period,
            make_child=lambda r: r,
            has_child=lambda r: r.get("unidad_id") is not None,
        )

        out: list[AcademicPeriod] = []
        for period, unit_rows in periods:
            semesters = group_nested(
                unit_rows,
                key=lambda r: r["semestre"],
                make_parent=lambda r: int(r["semestre"]),
                make_child=_to_unit,
            )
            out.append(
                AcademicPeriod(
                    periodo_id=period.periodo_id,
                    nombre=period.nombre,
                    fecha_inicio=period.fecha_inicio,
                    fecha_fin=period.fecha_fin,
                    semestres=tuple(Semester(numero=n, unidades=tuple(units)) for n, units in semesters),
                )
            )
        return out

    def list_grades(self, *, dni: str) -> Sequence[PeriodGrades]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT n.nota_id, n.nota, n.fecha_registro,
                       u.unidad_id, u.nombre AS unidad_nombre, u.semestre,
                       p.periodo_id, p.nombre AS periodo_nombre
                FROM notas n
                JOIN unidades_didacticas u ON u.unidad_id = n.unidad_id
                JOIN periodos_academicos p ON p.periodo_id = u.periodo_id
                WHERE n.dni_estudiante=%s
                ORDER BY p.fecha_inicio DESC, u.semestre ASC, u.nombre ASC
                """,
                (dni,),
            )
            rows = fetchall(cur)

        grouped = group_nested(
            rows,
            key=lambda r: r["periodo_id"],
            make_parent=lambda r: (int(r["periodo_id"]), r["periodo_nombre"]),
            make_child=lambda r: Grade(
                nota_id=int(r["nota_id"]),
                unidad_id=int(r["unidad_id"]),
                unidad_nombre=r["unidad_nombre"],
                semestre=int(r["semestre"]),
                nota=Decimal(str(r["nota"])),
                fecha_registro=r.get("fecha_registro"),
            ),
        )
        return [
            PeriodGrades(periodo_id=pid, periodo_nombre=name, notas=tuple(grades))
            for (pid, name), grades in grouped
        ]
