from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from ..core.exceptions import ValidationError


def parse_iso_date(value: str, field_name: str = "Fecha") -> date:
    """Parse YYYY-MM-DD string into date.

    A full ISO datetime (``2024-03-01T00:00:00``) is accepted and truncated;
    anything else after the date is rejected.
    """
    v = (value or "").strip()
    try:
        if len(v) == 10:
            return datetime.strptime(v, "%Y-%m-%d").date()
        return datetime.fromisoformat(v).date()
    except ValueError:
        raise ValidationError(f"{field_name} no es una fecha válida (AAAA-MM-DD)")


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def fmt_date(value: Optional[date]) -> Optional[str]:
    return value.strftime("%Y-%m-%d") if value else None


def fmt_datetime(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, datetime):
        return fmt_date(value)
    return value.strftime("%Y-%m-%dT%H:%M:%S")
