from __future__ import annotations

from enum import Enum


class JustificationStatus(str, Enum):
    """Estado de una justificación. El backend solo crea justificaciones pendientes."""

    PENDING = "Pendiente"
    APPROVED = "Aprobada"
    REJECTED = "Rechazada"


class AttendanceStatus(str, Enum):
    """Estados de asistencia registrados por los docentes."""

    PRESENT = "Presente"
    LATE = "Tardanza"
    ABSENT = "Falta"
    JUSTIFIED = "Justificado"


class PaymentStatus(str, Enum):
    PAID = "Pagado"
    PENDING = "Pendiente"
    CANCELLED = "Anulado"


class ContactField(str, Enum):
    """Student columns that can be edited through the API."""

    EMAIL = "email"
    PHONE = "celular"
    ADDRESS = "direccion"
