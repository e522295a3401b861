from __future__ import annotations

from datetime import date, datetime
from typing import ContextManager, Protocol, Sequence

from ..core.enums import JustificationStatus
from .model import Justification, JustificationType


class JustificationWriter(Protocol):
    """Inserts that belong to one open transaction."""

    def insert_justification(
        self,
        *,
        dni: str,
        tipo_id: int,
        motivo: str,
        fecha_inicio: date,
        fecha_fin: date,
        fecha_justificacion: datetime,
        estado: JustificationStatus,
    ) -> int:
        raise NotImplementedError

    def insert_image(
        self,
        *,
        justificacion_id: int,
        nombre_archivo: str,
        ruta_archivo: str,
        fecha_subida: datetime,
        tipo_archivo: str,
    ) -> int:
        raise NotImplementedError


class JustificationRepository(Protocol):
    def transaction(self) -> ContextManager[JustificationWriter]:
        """Open a transaction: committed on normal exit, rolled back on error."""

        raise NotImplementedError

    def list_for_student(self, *, dni: str) -> Sequence[Justification]:
        """Newest first, each with its images (possibly none)."""

        raise NotImplementedError

    def list_types(self) -> Sequence[JustificationType]:
        raise NotImplementedError
