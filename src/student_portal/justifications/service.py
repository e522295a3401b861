from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Optional, Sequence

from ..common.datetime_utils import now_local, parse_iso_date
from ..common.files import UploadedFile, check_file
from ..common.logging import get_logger
from ..common.validators import is_blank, require_int
from ..core.constants import DEFAULT_JUSTIFICATION_MAX_FILES, DEFAULT_MAX_FILE_SIZE
from ..core.enums import JustificationStatus
from ..core.exceptions import ValidationError
from ..legacy.uploader import RemoteImageUploader, UploadedImage
from .model import Justification, JustificationType, SubmissionResult
from .repository import JustificationRepository

logger = get_logger("justifications")


@dataclass(frozen=True)
class NewJustification:
    dni: str
    tipo_id: int
    motivo: str
    fecha_inicio: date
    fecha_fin: date
    files: Sequence[UploadedFile]


class JustificationService:
    """Use case: submit and list absence justifications.

    A submission is one database transaction around the remote uploads and the
    inserts. The database side is all-or-nothing; files already pushed to the
    legacy host stay there when the transaction rolls back, and are logged so
    they can be reconciled.
    """

    def __init__(
        self,
        justifications: JustificationRepository,
        uploader: RemoteImageUploader,
        *,
        max_files: int = DEFAULT_JUSTIFICATION_MAX_FILES,
        max_file_size: int = DEFAULT_MAX_FILE_SIZE,
    ):
        self._justifications = justifications
        self._uploader = uploader
        self._max_files = int(max_files)
        self._max_file_size = int(max_file_size)

    def validate(
        self,
        *,
        dni: Optional[str],
        tipo_justificacion,
        motivo: Optional[str],
        fecha_inicio: Optional[str],
        fecha_fin: Optional[str],
        files: Sequence[UploadedFile],
    ) -> NewJustification:
        if any(is_blank(v) for v in (dni, tipo_justificacion, motivo, fecha_inicio, fecha_fin)) or not files:
            raise ValidationError("Todos los campos son requeridos (DNI, tipo, motivo, fechas e imágenes)")
        if len(files) > self._max_files:
            raise ValidationError(f"Se permiten como máximo {self._max_files} archivos")
        for f in files:
            check_file(f, max_size=self._max_file_size)

        start = parse_iso_date(fecha_inicio, "Fecha de inicio")
        end = parse_iso_date(fecha_fin, "Fecha de fin")
        if end < start:
            raise ValidationError("La fecha de fin debe ser posterior o igual a la fecha de inicio")

        return NewJustification(
            dni=str(dni).strip(),
            tipo_id=require_int(tipo_justificacion, "Tipo de justificación"),
            motivo=str(motivo).strip(),
            fecha_inicio=start,
            fecha_fin=end,
            files=list(files),
        )

    def submit(self, new: NewJustification, *, now: Optional[datetime] = None) -> SubmissionResult:
        uploaded: List[UploadedImage] = []
        submitted_at = now or now_local()

        try:
            with self._justifications.transaction() as tx:
                for f in new.files:
                    uploaded.append(self._uploader.upload(f))

                justificacion_id = tx.insert_justification(
                    dni=new.dni,
                    tipo_id=new.tipo_id,
                    motivo=new.motivo,
                    fecha_inicio=new.fecha_inicio,
                    fecha_fin=new.fecha_fin,
                    fecha_justificacion=submitted_at,
                    estado=JustificationStatus.PENDING,
                )
                for img in uploaded:
                    tx.insert_image(
                        justificacion_id=justificacion_id,
                        nombre_archivo=img.filename,
                        ruta_archivo=img.url,
                        fecha_subida=img.uploaded_at,
                        tipo_archivo=img.mime_type,
                    )
        except Exception:
            if uploaded:
                logger.warning(
                    "Justification for dni=%s rolled back; orphaned remote files: %s",
                    new.dni,
                    ", ".join(img.url for img in uploaded),
                )
            raise

        logger.info("Justification %s registered for dni=%s (%d files)", justificacion_id, new.dni, len(uploaded))
        return SubmissionResult(
            justificacion_id=justificacion_id,
            image_urls=tuple(img.url for img in uploaded),
            fecha=submitted_at,
        )

    def list_for_student(self, dni: str) -> Sequence[Justification]:
        return self._justifications.list_for_student(dni=dni)

    def list_types(self) -> Sequence[JustificationType]:
        return self._justifications.list_types()
