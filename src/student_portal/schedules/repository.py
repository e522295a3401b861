from __future__ import annotations

from typing import Optional, Protocol

from .model import Schedule


class ScheduleRepository(Protocol):
    def get_latest_for_program(self, programa_id: int) -> Optional[Schedule]:
        raise NotImplementedError
