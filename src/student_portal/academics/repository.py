from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AcademicPeriod, CourseUnit, PeriodGrades


class AcademicRepository(Protocol):
    def get_current_period(self, today: date) -> Optional[AcademicPeriod]:
        """Period containing ``today``, else the most recent one."""

        raise NotImplementedError

    def list_course_units(
        self, *, programa_id: int, semestre: int, periodo_id: Optional[int] = None
    ) -> Sequence[CourseUnit]:
        raise NotImplementedError

    def list_periods_with_units(self, *, programa_id: int) -> Sequence[AcademicPeriod]:
        """Periods newest first, each with its semesters and units for a program."""

        raise NotImplementedError

    def list_grades(self, *, dni: str) -> Sequence[PeriodGrades]:
        raise NotImplementedError
