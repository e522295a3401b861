from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Tuple

from ..common.datetime_utils import fmt_date, fmt_datetime


@dataclass(frozen=True)
class CourseUnit:
    """Unidad didáctica de un programa en un semestre."""

    unidad_id: int
    nombre: str
    semestre: int
    creditos: int = 0
    horas: int = 0

    def to_dict(self) -> dict:
        return {
            "unidad_id": self.unidad_id,
            "nombre": self.nombre,
            "semestre": self.semestre,
            "creditos": self.creditos,
            "horas": self.horas,
        }


@dataclass(frozen=True)
class Semester:
    numero: int
    unidades: Tuple[CourseUnit, ...] = ()

    def to_dict(self) -> dict:
        return {"semestre": self.numero, "unidades": [u.to_dict() for u in self.unidades]}


@dataclass(frozen=True)
class AcademicPeriod:
    periodo_id: int
    nombre: str
    fecha_inicio: date
    fecha_fin: date
    semestres: Tuple[Semester, ...] = field(default=())

    def contains(self, day: date) -> bool:
        return self.fecha_inicio <= day <= self.fecha_fin

    def to_dict(self, *, include_semesters: bool = True) -> dict:
        out = {
            "periodo_id": self.periodo_id,
            "nombre": self.nombre,
            "fecha_inicio": fmt_date(self.fecha_inicio),
            "fecha_fin": fmt_date(self.fecha_fin),
        }
        if include_semesters:
            out["semestres"] = [s.to_dict() for s in self.semestres]
        return out


@dataclass(frozen=True)
class Grade:
    nota_id: int
    unidad_id: int
    unidad_nombre: str
    semestre: int
    nota: Decimal
    fecha_registro: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "nota_id": self.nota_id,
            "unidad_id": self.unidad_id,
            "unidad": self.unidad_nombre,
            "semestre": self.semestre,
            "nota": float(self.nota),
            "fecha_registro": fmt_datetime(self.fecha_registro),
        }


@dataclass(frozen=True)
class PeriodGrades:
    periodo_id: int
    periodo_nombre: str
    notas: Tuple[Grade, ...]

    @property
    def promedio(self) -> Optional[float]:
        if not self.notas:
            return None
        total = sum((g.nota for g in self.notas), Decimal("0"))
        return round(float(total / len(self.notas)), 2)

    def to_dict(self) -> dict:
        return {
            "periodo_id": self.periodo_id,
            "periodo": self.periodo_nombre,
            "promedio": self.promedio,
            "notas": [g.to_dict() for g in self.notas],
        }
