from __future__ import annotations

from typing import Protocol, Sequence

from .model import Payment, PaymentType


class PaymentRepository(Protocol):
    def list_types(self) -> Sequence[PaymentType]:
        raise NotImplementedError

    def list_for_student(self, *, dni: str) -> Sequence[Payment]:
        """Newest first."""

        raise NotImplementedError
