from __future__ import annotations

from typing import Sequence

from ..core.exceptions import NotFoundError
from ..students.repository import StudentRepository
from .model import AcademicPeriod, PeriodGrades
from .repository import AcademicRepository


class AcademicService:
    def __init__(self, academics: AcademicRepository, students: StudentRepository):
        self._academics = academics
        self._students = students

    def list_periods(self, dni: str) -> Sequence[AcademicPeriod]:
        student = self._students.get_by_dni(dni)
        if not student:
            raise NotFoundError("Estudiante no encontrado")
        if student.programa_id is None:
            return []
        return self._academics.list_periods_with_units(programa_id=student.programa_id)

    def list_grades(self, dni: str) -> Sequence[PeriodGrades]:
        if not self._students.get_by_dni(dni):
            raise NotFoundError("Estudiante no encontrado")
        return self._academics.list_grades(dni=dni)
