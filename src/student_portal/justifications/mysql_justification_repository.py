from __future__ import annotations

from contextlib import contextmanager
from dataclasses import replace
from datetime import date, datetime
from typing import Iterator, Sequence

from ..common.grouping import group_nested
from ..core.enums import JustificationStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Justification, JustificationImage, JustificationType
from .repository import JustificationRepository, JustificationWriter


class _MySQLJustificationWriter(JustificationWriter):
    def __init__(self, cur):
        self._cur = cur

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
        self._cur.execute(
            """
            INSERT INTO justificaciones(
                dni_estudiante, Fecha_Justificacion, TipoJustificacionID,
                MotivoEstudiante, Fecha_Inicio, Fecha_Fin, Estado
            )
            VALUES(%s,%s,%s,%s,%s,%s,%s)
            """,
            (dni, fecha_justificacion, int(tipo_id), motivo, fecha_inicio, fecha_fin, estado.value),
        )
        return int(self._cur.lastrowid)

    def insert_image(
        self,
        *,
        justificacion_id: int,
        nombre_archivo: str,
        ruta_archivo: str,
        fecha_subida: datetime,
        tipo_archivo: str,
    ) -> int:
        self._cur.execute(
            """
            INSERT INTO jimg(JustificacionID, NombreArchivo, FechaSubida, RutaArchivo, TipoArchivo)
            VALUES(%s,%s,%s,%s,%s)
            """,
            (int(justificacion_id), nombre_archivo, fecha_subida, ruta_archivo, tipo_archivo),
        )
        return int(self._cur.lastrowid)


def _to_justification(r: dict) -> Justification:
    return Justification(
        justificacion_id=int(r["JustificacionID"]),
        dni_estudiante=str(r["dni_estudiante"]),
        tipo_id=int(r["TipoJustificacionID"]),
        tipo_nombre=r.get("TipoNombre"),
        motivo=r["MotivoEstudiante"],
        fecha_inicio=r["Fecha_Inicio"],
        fecha_fin=r["Fecha_Fin"],
        fecha_justificacion=r["Fecha_Justificacion"],
        estado=r["Estado"],
    )


def _to_image(r: dict) -> JustificationImage:
    return JustificationImage(
        imagen_id=int(r["ImagenID"]),
        nombre_archivo=r["NombreArchivo"],
        ruta_archivo=r["RutaArchivo"],
        fecha_subida=r.get("FechaSubida"),
        tipo_archivo=r.get("TipoArchivo"),
    )


class MySQLJustificationRepository(JustificationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @contextmanager
    def transaction(self) -> Iterator[JustificationWriter]:
        with db_cursor(self._conn_factory) as (_, cur):
            yield _MySQLJustificationWriter(cur)

    def list_for_student(self, *, dni: str) -> Sequence[Justification]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT j.JustificacionID, j.dni_estudiante, j.TipoJustificacionID,
                       t.Nombre AS TipoNombre, j.MotivoEstudiante,
                       j.Fecha_Inicio, j.Fecha_Fin, j.Fecha_Justificacion, j.Estado,
                       i.ImagenID, i.NombreArchivo, i.RutaArchivo, i.FechaSubida, i.TipoArchivo
                FROM justificaciones j
                JOIN tipos_justificacion t ON t.TipoJustificacionID = j.TipoJustificacionID
                LEFT JOIN jimg i ON i.JustificacionID = j.JustificacionID
                WHERE j.dni_estudiante=%s
                ORDER BY j.Fecha_Justificacion DESC, j.JustificacionID DESC, i.ImagenID ASC
                """,
                (dni,),
            )
            rows = fetchall(cur)

        grouped = group_nested(
            rows,
            key=lambda r: r["JustificacionID"],
            make_parent=_to_justification,
            make_child=_to_image,
            has_child=lambda r: r.get("RutaArchivo") is not None,
        )
        return [replace(j, imagenes=tuple(images)) for j, images in grouped]

    def list_types(self) -> Sequence[JustificationType]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT TipoJustificacionID, Nombre FROM tipos_justificacion ORDER BY TipoJustificacionID")
            return [JustificationType(tipo_id=int(r["TipoJustificacionID"]), nombre=r["Nombre"]) for r in fetchall(cur)]
