from __future__ import annotations

from typing import Optional, Protocol

from ..core.enums import ContactField
from .model import Student


class StudentRepository(Protocol):
    """Repository interface for students.

    Services depend on this interface, never on a concrete database.
    """

    def get_by_dni(self, dni: str) -> Optional[Student]:
        raise NotImplementedError

    def get_by_username(self, usuario: str) -> Optional[Student]:
        raise NotImplementedError

    def update_contact_field(self, *, dni: str, field: ContactField, value: str) -> None:
        raise NotImplementedError

    def set_profile_image(self, *, dni: str, filename: str) -> None:
        raise NotImplementedError

    def get_qr_code_path(self, dni: str) -> Optional[str]:
        raise NotImplementedError
