from __future__ import annotations

from datetime import datetime

import pytest

from student_portal.core.exceptions import NotFoundError
from student_portal.legacy.host import LegacyHost
from student_portal.schedules.model import Schedule
from student_portal.schedules.service import ScheduleService


class InMemorySchedules:
    def __init__(self, *schedules: Schedule):
        self.by_program = {s.programa_id: s for s in schedules}

    def get_latest_for_program(self, programa_id):
        return self.by_program.get(programa_id)


class FakeResponse:
    def __init__(self, status_code):
        self.status_code = status_code


class FakeSession:
    def __init__(self, status_code=200):
        self.status_code = status_code
        self.heads = []

    def head(self, url, timeout=None, allow_redirects=False):
        self.heads.append(url)
        return FakeResponse(self.status_code)

    def close(self):
        pass


SCHEDULE = Schedule(
    horario_id=4,
    programa_id=1,
    nombre="Horario 2024-I",
    archivo="horario_dsi_2024_1.pdf",
    fecha_creacion=datetime(2024, 3, 1, 8, 0, 0),
    programa_nombre="Desarrollo de Sistemas de Información",
)


def test_schedule_with_reachable_file():
    session = FakeSession(200)
    service = ScheduleService(InMemorySchedules(SCHEDULE), LegacyHost("https://legacy.test", session=session))

    data = service.get_schedule(1).to_dict()

    assert data["url"] == "https://legacy.test/uploads/horario_dsi_2024_1.pdf"
    assert data["nombre"] == "Horario 2024-I"
    assert session.heads == ["https://legacy.test/uploads/horario_dsi_2024_1.pdf"]


def test_unreachable_file_is_not_found():
    service = ScheduleService(InMemorySchedules(SCHEDULE), LegacyHost("https://legacy.test", session=FakeSession(404)))

    with pytest.raises(NotFoundError) as exc:
        service.get_schedule(1)

    assert "PDF" in str(exc.value)


def test_missing_row_is_not_found_without_probing():
    session = FakeSession(200)
    service = ScheduleService(InMemorySchedules(), LegacyHost("https://legacy.test", session=session))

    with pytest.raises(NotFoundError):
        service.get_schedule(9)

    assert session.heads == []
