from __future__ import annotations

from collections import Counter
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFoundError
from ..students.repository import StudentRepository
from .model import AttendanceRecord, AttendanceReport, AttendanceSummary
from .repository import AttendanceRepository

ATTENDED = frozenset({AttendanceStatus.PRESENT.value, AttendanceStatus.LATE.value, AttendanceStatus.JUSTIFIED.value})


def summarize(records: Sequence[AttendanceRecord]) -> AttendanceSummary:
    counts = Counter(r.estado for r in records)
    total = len(records)
    percentage = None
    if total:
        attended = sum(n for estado, n in counts.items() if estado in ATTENDED)
        percentage = round(attended * 100.0 / total, 2)
    return AttendanceSummary(total=total, por_estado=dict(counts), porcentaje_asistencia=percentage)


class AttendanceService:
    def __init__(self, attendance: AttendanceRepository, students: StudentRepository):
        self._attendance = attendance
        self._students = students

    def get_report(self, dni: str, *, unidad_id: Optional[int] = None) -> AttendanceReport:
        if not self._students.get_by_dni(dni):
            raise NotFoundError("Estudiante no encontrado")
        records = self._attendance.list_for_student(dni=dni, unidad_id=unidad_id)
        return AttendanceReport(registros=records, resumen=summarize(records))
