from __future__ import annotations

from typing import Optional

from ..core.enums import ContactField
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Student
from .repository import StudentRepository

_SELECT_STUDENT = """
    SELECT e.dni, e.usuario, e.clave, e.nombres, e.apellidos,
           e.programa_id, e.semestre_actual, e.email, e.celular, e.direccion,
           e.imagen_perfil, pe.nombre_programa
    FROM estudiantes e
    LEFT JOIN programas_estudio pe ON pe.programa_id = e.programa_id
"""

# Column names come from this map only, never from request data.
_CONTACT_COLUMNS = {
    ContactField.EMAIL: "email",
    ContactField.PHONE: "celular",
    ContactField.ADDRESS: "direccion",
}


def _to_student(r: dict) -> Student:
    return Student(
        dni=str(r["dni"]),
        usuario=r["usuario"],
        password_hash=r["clave"],
        nombres=r["nombres"],
        apellidos=r["apellidos"],
        programa_id=int(r["programa_id"]) if r.get("programa_id") is not None else None,
        semestre_actual=int(r["semestre_actual"]) if r.get("semestre_actual") is not None else None,
        programa_nombre=r.get("nombre_programa"),
        email=r.get("email"),
        celular=r.get("celular"),
        direccion=r.get("direccion"),
        imagen_perfil=r.get("imagen_perfil"),
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_dni(self, dni: str) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT_STUDENT + " WHERE e.dni=%s", (dni,))
            r = fetchone(cur)
            return _to_student(r) if r else None

    def get_by_username(self, usuario: str) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT_STUDENT + " WHERE e.usuario=%s", (usuario,))
            r = fetchone(cur)
            return _to_student(r) if r else None

    def update_contact_field(self, *, dni: str, field: ContactField, value: str) -> None:
        column = _CONTACT_COLUMNS[field]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE estudiantes SET {column}=%s WHERE dni=%s", (value, dni))

    def set_profile_image(self, *, dni: str, filename: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE estudiantes SET imagen_perfil=%s WHERE dni=%s", (filename, dni))

    def get_qr_code_path(self, dni: str) -> Optional[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT qr_code_path FROM qr_codes WHERE dni_estudiante=%s", (dni,))
            r = fetchone(cur)
            if not r:
                return None
            return r.get("qr_code_path") or None
