from __future__ import annotations

from decimal import Decimal
from typing import Sequence

from ..core.enums import PaymentStatus
from ..core.exceptions import NotFoundError
from ..students.repository import StudentRepository
from .model import PaymentStatement, PaymentType
from .repository import PaymentRepository


class PaymentService:
    def __init__(self, payments: PaymentRepository, students: StudentRepository):
        self._payments = payments
        self._students = students

    def list_types(self) -> Sequence[PaymentType]:
        return self._payments.list_types()

    def get_statement(self, dni: str) -> PaymentStatement:
        if not self._students.get_by_dni(dni):
            raise NotFoundError("Estudiante no encontrado")

        pagos = self._payments.list_for_student(dni=dni)
        total = sum((p.monto for p in pagos if p.estado == PaymentStatus.PAID.value), Decimal("0"))
        return PaymentStatement(pagos=pagos, total_pagado=total)
