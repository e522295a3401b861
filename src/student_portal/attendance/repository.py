from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def list_for_student(self, *, dni: str, unidad_id: Optional[int] = None) -> Sequence[AttendanceRecord]:
        """Newest first."""

        raise NotImplementedError
