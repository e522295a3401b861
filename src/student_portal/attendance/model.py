from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Dict, Optional, Sequence

from ..common.datetime_utils import fmt_date


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance mark for a student in a course unit."""

    asistencia_id: int
    dni_estudiante: str
    unidad_id: int
    unidad_nombre: str
    fecha: date
    estado: str
    observacion: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "asistencia_id": self.asistencia_id,
            "unidad_id": self.unidad_id,
            "unidad": self.unidad_nombre,
            "fecha": fmt_date(self.fecha),
            "estado": self.estado,
            "observacion": self.observacion or "",
        }


@dataclass(frozen=True)
class AttendanceSummary:
    total: int
    por_estado: Dict[str, int]
    porcentaje_asistencia: Optional[float]

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "por_estado": dict(self.por_estado),
            "porcentaje_asistencia": self.porcentaje_asistencia,
        }


@dataclass(frozen=True)
class AttendanceReport:
    registros: Sequence[AttendanceRecord]
    resumen: AttendanceSummary

    def to_dict(self) -> dict:
        return {
            "registros": [r.to_dict() for r in self.registros],
            "resumen": self.resumen.to_dict(),
        }
