from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import fmt_datetime


@dataclass(frozen=True)
class Schedule:
    """Horario publicado para un programa (PDF en el servidor legado)."""

    horario_id: int
    programa_id: int
    nombre: str
    archivo: str
    fecha_creacion: Optional[datetime]
    programa_nombre: Optional[str] = None

    def to_dict(self, *, url: Optional[str] = None) -> dict:
        out = {
            "horario_id": self.horario_id,
            "programa_id": self.programa_id,
            "nombre": self.nombre,
            "archivo": self.archivo,
            "fecha_creacion": fmt_datetime(self.fecha_creacion),
            "programa_nombre": self.programa_nombre,
        }
        if url is not None:
            out["url"] = url
        return out
