from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Optional, Sequence

from werkzeug.security import check_password_hash

from ..academics.model import AcademicPeriod, CourseUnit
from ..academics.repository import AcademicRepository
from ..common.files import UploadedFile, check_file
from ..common.validators import require_non_empty
from ..core.enums import ContactField
from ..core.exceptions import AuthenticationError, NotFoundError, ValidationError
from ..legacy.host import LegacyHost
from .model import Student
from .profile_images import ProfileImageStore
from .repository import StudentRepository

EDITABLE_FIELDS = frozenset(f.value for f in ContactField)


class AuthService:
    """Use case: check credentials. Nothing is issued; clients re-send the DNI."""

    def __init__(self, students: StudentRepository):
        self._students = students

    def authenticate(self, usuario: Optional[str], clave: Optional[str]) -> Student:
        if not usuario or not clave:
            raise ValidationError("Usuario y clave son requeridos")

        student = self._students.get_by_username(str(usuario).strip())
        if not student:
            raise AuthenticationError("Credenciales incorrectas")

        try:
            ok = check_password_hash(student.password_hash, str(clave))
        except ValueError:
            # e.g. a legacy plaintext value that was never migrated
            ok = False

        if not ok:
            raise AuthenticationError("Credenciales incorrectas")
        return student


@dataclass(frozen=True)
class StudentProfile:
    student: Student
    period: Optional[AcademicPeriod]
    units: Sequence[CourseUnit]

    def to_dict(self) -> dict:
        return {
            "estudiante": self.student.to_public_dict(),
            "periodo_academico": self.period.to_dict(include_semesters=False) if self.period else None,
            "unidades_didacticas": [u.to_dict() for u in self.units],
        }


class StudentService:
    def __init__(
        self,
        students: StudentRepository,
        academics: AcademicRepository,
        host: LegacyHost,
        images: ProfileImageStore,
        *,
        max_file_size: int,
    ):
        self._students = students
        self._academics = academics
        self._host = host
        self._images = images
        self._max_file_size = int(max_file_size)

    def _require(self, dni: str) -> Student:
        student = self._students.get_by_dni(dni)
        if not student:
            raise NotFoundError("Estudiante no encontrado")
        return student

    def get_profile(self, dni: str, *, today: Optional[date] = None) -> StudentProfile:
        student = self._require(dni)
        period = self._academics.get_current_period(today or date.today())

        units: Sequence[CourseUnit] = []
        if student.programa_id is not None and student.semestre_actual is not None:
            units = self._academics.list_course_units(
                programa_id=student.programa_id,
                semestre=student.semestre_actual,
                periodo_id=period.periodo_id if period else None,
            )
        return StudentProfile(student=student, period=period, units=units)

    def update_field(self, dni: str, field: Optional[str], value: Optional[str]) -> None:
        if not field or field not in EDITABLE_FIELDS:
            raise ValidationError(f"Campo no permitido. Solo se puede actualizar: {', '.join(sorted(EDITABLE_FIELDS))}")
        value = require_non_empty(value, "El valor")

        self._require(dni)
        self._students.update_contact_field(dni=dni, field=ContactField(field), value=value)

    def get_qr_code_url(self, dni: str) -> str:
        path = self._students.get_qr_code_path(dni)
        if not path:
            raise NotFoundError("Código QR no encontrado")
        return self._host.qr_url(path)

    def save_profile_image(self, dni: str, file: Optional[UploadedFile]) -> str:
        if file is None:
            raise ValidationError("No se envió ninguna imagen")
        check_file(file, max_size=self._max_file_size, allow_pdf=False)

        self._require(dni)
        filename = self._images.save(dni, file)
        self._students.set_profile_image(dni=dni, filename=filename)
        return filename

    def get_profile_image(self, dni: str) -> Path:
        student = self._require(dni)
        path = self._images.find(dni, student.imagen_perfil)
        if not path:
            raise NotFoundError("Imagen de perfil no encontrada")
        return path
