from __future__ import annotations

import mimetypes
import os
from pathlib import Path
from typing import Optional

from ..common.files import UploadedFile
from ..common.logging import get_logger

logger = get_logger("profile_images")

_DEFAULT_EXT = ".jpg"


def ensure_dir(path: str | Path) -> None:
    os.makedirs(path, exist_ok=True)


def _extension_for(file: UploadedFile) -> str:
    ext = Path(file.filename).suffix.lower()
    if ext and ext[1:].isalnum():
        return ext
    return mimetypes.guess_extension(file.content_type) or _DEFAULT_EXT


class ProfileImageStore:
    """Local-disk storage for profile pictures, one file per student: ``<dni><ext>``."""

    def __init__(self, base_dir: str | Path):
        self._base_dir = Path(base_dir)

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def _existing(self, dni: str) -> list[Path]:
        if not self._base_dir.is_dir():
            return []
        return [p for p in self._base_dir.iterdir() if p.is_file() and p.stem == dni]

    def save(self, dni: str, file: UploadedFile) -> str:
        ensure_dir(self._base_dir)
        filename = f"{dni}{_extension_for(file)}"

        # A new upload with another extension must not leave the old picture behind
        for old in self._existing(dni):
            if old.name != filename:
                old.unlink()

        (self._base_dir / filename).write_bytes(file.data)
        logger.info("Saved profile image dni=%s file=%s size=%d", dni, filename, file.size)
        return filename

    def find(self, dni: str, filename: Optional[str] = None) -> Optional[Path]:
        if filename:
            path = self._base_dir / os.path.basename(filename)
            if path.is_file():
                return path
        existing = self._existing(dni)
        return existing[0] if existing else None
