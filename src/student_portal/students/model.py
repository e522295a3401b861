from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Student:
    """Domain entity: Student (estudiantes).

    Plain data object, no DB access. ``password_hash`` never leaves the service
    layer; use ``to_public_dict`` for responses.
    """

    dni: str
    usuario: str
    password_hash: str
    nombres: str
    apellidos: str
    programa_id: Optional[int]
    semestre_actual: Optional[int]
    programa_nombre: Optional[str] = None
    email: Optional[str] = None
    celular: Optional[str] = None
    direccion: Optional[str] = None
    imagen_perfil: Optional[str] = None

    @property
    def nombre_completo(self) -> str:
        return f"{self.nombres} {self.apellidos}".strip()

    def to_public_dict(self) -> dict:
        return {
            "dni": self.dni,
            "usuario": self.usuario,
            "nombres": self.nombres,
            "apellidos": self.apellidos,
            "nombre_completo": self.nombre_completo,
            "programa_id": self.programa_id,
            "programa_nombre": self.programa_nombre,
            "semestre_actual": self.semestre_actual,
            "email": self.email,
            "celular": self.celular,
            "direccion": self.direccion,
            "imagen_perfil": self.imagen_perfil,
        }
