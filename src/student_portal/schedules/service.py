from __future__ import annotations

from dataclasses import dataclass

from ..core.exceptions import NotFoundError
from ..legacy.host import LegacyHost
from .model import Schedule
from .repository import ScheduleRepository


@dataclass(frozen=True)
class ResolvedSchedule:
    schedule: Schedule
    url: str

    def to_dict(self) -> dict:
        return self.schedule.to_dict(url=self.url)


class ScheduleService:
    def __init__(self, schedules: ScheduleRepository, host: LegacyHost):
        self._schedules = schedules
        self._host = host

    def get_schedule(self, programa_id: int) -> ResolvedSchedule:
        """Newest schedule of a program, only if its file is reachable.

        A missing row and an unreachable file are both "not found".
        """
        schedule = self._schedules.get_latest_for_program(int(programa_id))
        if not schedule:
            raise NotFoundError("No se encontró horario para este programa de estudio")

        url = self._host.schedule_url(schedule.archivo)
        if not self._host.exists(url):
            raise NotFoundError("El archivo PDF no se encuentra disponible")
        return ResolvedSchedule(schedule=schedule, url=url)
