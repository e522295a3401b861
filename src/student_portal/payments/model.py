from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional, Sequence

from ..common.datetime_utils import fmt_datetime


@dataclass(frozen=True)
class PaymentType:
    tipo_pago_id: int
    nombre: str
    monto: Decimal

    def to_dict(self) -> dict:
        return {"tipo_pago_id": self.tipo_pago_id, "nombre": self.nombre, "monto": float(self.monto)}


@dataclass(frozen=True)
class Payment:
    pago_id: int
    dni_estudiante: str
    tipo_pago_id: int
    tipo_nombre: str
    monto: Decimal
    fecha_pago: datetime
    estado: str
    comprobante: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "pago_id": self.pago_id,
            "tipo_pago_id": self.tipo_pago_id,
            "tipo_pago": self.tipo_nombre,
            "monto": float(self.monto),
            "fecha_pago": fmt_datetime(self.fecha_pago),
            "estado": self.estado,
            "comprobante": self.comprobante,
        }


@dataclass(frozen=True)
class PaymentStatement:
    pagos: Sequence[Payment]
    total_pagado: Decimal

    def to_dict(self) -> dict:
        return {"pagos": [p.to_dict() for p in self.pagos], "total_pagado": float(self.total_pagado)}
