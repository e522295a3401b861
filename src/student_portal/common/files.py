from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional

from ..core.exceptions import ValidationError

PDF_MIME = "application/pdf"


@dataclass(frozen=True)
class UploadedFile:
    """An in-memory file received from a multipart request."""

    filename: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def is_image(self) -> bool:
        return self.content_type.startswith("image/")

    @property
    def is_pdf(self) -> bool:
        return self.content_type == PDF_MIME

    @classmethod
    def from_file_storage(cls, storage) -> "UploadedFile":
        return cls(
            filename=storage.filename or "archivo",
            content_type=(storage.mimetype or "application/octet-stream").lower(),
            data=storage.read(),
        )


def collect_uploads(storages: Iterable) -> List[UploadedFile]:
    """Convert werkzeug ``FileStorage`` objects, skipping empty form slots."""
    out: List[UploadedFile] = []
    for s in storages:
        if s is None or not s.filename:
            continue
        out.append(UploadedFile.from_file_storage(s))
    return out


def check_file(f: UploadedFile, *, max_size: int, allow_pdf: bool = True, label: Optional[str] = None) -> None:
    name = label or f.filename
    if not (f.is_image or (allow_pdf and f.is_pdf)):
        allowed = "imágenes o PDF" if allow_pdf else "imágenes"
        raise ValidationError(f"Solo se permiten {allowed} ({name})")
    if f.size == 0:
        raise ValidationError(f"El archivo está vacío ({name})")
    if f.size > max_size:
        raise ValidationError(f"El archivo supera el límite de {max_size // (1024 * 1024)}MB ({name})")
