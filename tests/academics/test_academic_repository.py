from __future__ import annotations

from contextlib import contextmanager
from datetime import date
from decimal import Decimal

from student_portal.academics.mysql_academic_repository import MySQLAcademicRepository


class FakeCursor:
    def __init__(self, rows):
        self.rows = rows
        self.executed = []

    def execute(self, sql, params=None):
        self.executed.append((sql, params))

    def fetchone(self):
        return self.rows[0] if self.rows else None

    def fetchall(self):
        return list(self.rows)

    def close(self):
        pass


class FakeConn:
    def __init__(self, cursor):
        self._cursor = cursor

    def cursor(self, dictionary=True):
        return self._cursor

    def commit(self):
        pass

    def rollback(self):
        pass


class FakeConnFactory:
    def __init__(self, rows):
        self.cursor = FakeCursor(rows)

    @contextmanager
    def connection(self):
        yield FakeConn(self.cursor)


def _period(pid, name, start):
    return {"periodo_id": pid, "periodo_nombre": name, "fecha_inicio": start, "fecha_fin": date(start.year, 7, 31)}


def _unit_row(pid, name, start, unidad_id, unidad, semestre):
    return {
        **_period(pid, name, start),
        "unidad_id": unidad_id,
        "unidad_nombre": unidad,
        "semestre": semestre,
        "creditos": 3,
        "horas": 64,
    }


def test_periods_nest_semesters_and_units():
    rows = [
        _unit_row(2, "2024-I", date(2024, 3, 1), 20, "Base de Datos", 1),
        _unit_row(2, "2024-I", date(2024, 3, 1), 21, "Redes", 1),
        _unit_row(2, "2024-I", date(2024, 3, 1), 30, "Programación Web", 3),
        {**_period(1, "2023-II", date(2023, 8, 1)), "unidad_id": None, "unidad_nombre": None, "semestre": None},
    ]
    repo = MySQLAcademicRepository(FakeConnFactory(rows))

    periods = repo.list_periods_with_units(programa_id=1)

    assert [p.nombre for p in periods] == ["2024-I", "2023-II"]
    first = periods[0].to_dict()
    assert [s["semestre"] for s in first["semestres"]] == [1, 3]
    assert [u["nombre"] for u in first["semestres"][0]["unidades"]] == ["Base de Datos", "Redes"]
    assert periods[1].semestres == ()


def test_grades_grouped_by_period_with_average():
    rows = [
        {
            "nota_id": 1, "nota": Decimal("15.00"), "fecha_registro": None,
            "unidad_id": 20, "unidad_nombre": "Base de Datos", "semestre": 1,
            "periodo_id": 2, "periodo_nombre": "2024-I",
        },
        {
            "nota_id": 2, "nota": Decimal("12.50"), "fecha_registro": None,
            "unidad_id": 21, "unidad_nombre": "Redes", "semestre": 1,
            "periodo_id": 2, "periodo_nombre": "2024-I",
        },
    ]
    repo = MySQLAcademicRepository(FakeConnFactory(rows))

    grades = repo.list_grades(dni="12345678")

    assert len(grades) == 1
    assert grades[0].promedio == 13.75
    assert grades[0].to_dict()["notas"][1]["nota"] == 12.5
