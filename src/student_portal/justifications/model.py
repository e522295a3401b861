from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Tuple

from ..common.datetime_utils import fmt_date, fmt_datetime


@dataclass(frozen=True)
class JustificationType:
    tipo_id: int
    nombre: str

    def to_dict(self) -> dict:
        return {"TipoJustificacionID": self.tipo_id, "Nombre": self.nombre}


@dataclass(frozen=True)
class JustificationImage:
    """Reference to a supporting file stored on the legacy host (jimg)."""

    imagen_id: int
    nombre_archivo: str
    ruta_archivo: str
    fecha_subida: Optional[datetime]
    tipo_archivo: Optional[str]

    def to_dict(self) -> dict:
        return {
            "ImagenID": self.imagen_id,
            "NombreArchivo": self.nombre_archivo,
            "RutaArchivo": self.ruta_archivo,
            "FechaSubida": fmt_datetime(self.fecha_subida),
            "TipoArchivo": self.tipo_archivo,
        }


@dataclass(frozen=True)
class Justification:
    justificacion_id: int
    dni_estudiante: str
    tipo_id: int
    tipo_nombre: Optional[str]
    motivo: str
    fecha_inicio: date
    fecha_fin: date
    fecha_justificacion: datetime
    estado: str
    imagenes: Tuple[JustificationImage, ...] = ()

    def to_dict(self) -> dict:
        return {
            "JustificacionID": self.justificacion_id,
            "dni_estudiante": self.dni_estudiante,
            "TipoJustificacionID": self.tipo_id,
            "TipoJustificacion": self.tipo_nombre,
            "MotivoEstudiante": self.motivo,
            "Fecha_Inicio": fmt_date(self.fecha_inicio),
            "Fecha_Fin": fmt_date(self.fecha_fin),
            "Fecha_Justificacion": fmt_datetime(self.fecha_justificacion),
            "Estado": self.estado,
            "imagenes": [img.to_dict() for img in self.imagenes],
        }


@dataclass(frozen=True)
class SubmissionResult:
    justificacion_id: int
    image_urls: Tuple[str, ...]
    fecha: datetime

    def to_dict(self) -> dict:
        return {
            "justificacionID": self.justificacion_id,
            "imageUrls": list(self.image_urls),
            "fecha": fmt_datetime(self.fecha),
        }
