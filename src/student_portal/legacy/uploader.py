from __future__ import annotations

import os
import random
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

import requests

from ..common.datetime_utils import now_local
from ..common.files import UploadedFile
from ..common.logging import get_logger
from ..core.exceptions import UploadError
from .host import LegacyHost

logger = get_logger("uploader")

UPLOAD_FIELD = "imagen"


@dataclass(frozen=True)
class UploadedImage:
    filename: str
    url: str
    mime_type: str
    uploaded_at: datetime


def _plain_name(original: str) -> str:
    # Drops directory parts and control characters; the name itself is kept as sent
    name = os.path.basename((original or "").replace("\\", "/"))
    return "".join(ch for ch in name if ch.isprintable()).strip()


def unique_filename(original: str, *, millis: Optional[int] = None, rand: Optional[int] = None) -> str:
    """``<ms-timestamp>-<random>-<original>``, collision resistant across requests."""
    millis = int(time.time() * 1000) if millis is None else millis
    rand = random.randint(0, 10**9) if rand is None else rand
    base = _plain_name(original) or "archivo"
    return f"{millis}-{rand}-{base}"


class RemoteImageUploader:
    """Pushes in-memory files to the legacy host's ``upload.php``.

    Files written there cannot be removed from here; a caller whose later step
    fails is left with orphaned remote files.
    """

    def __init__(
        self,
        host: LegacyHost,
        *,
        timeout: Optional[float] = None,
        filename_factory: Callable[[str], str] = unique_filename,
    ):
        self._host = host
        self._timeout = timeout
        self._filename_factory = filename_factory

    def upload(self, file: UploadedFile) -> UploadedImage:
        filename = self._filename_factory(file.filename)
        try:
            resp = self._host.session.post(
                self._host.upload_endpoint,
                files={UPLOAD_FIELD: (filename, file.data, file.content_type)},
                timeout=self._timeout,
            )
            resp.raise_for_status()
        except requests.RequestException as e:
            logger.error("Upload of %s to %s failed: %s", file.filename, self._host.upload_endpoint, e)
            raise UploadError("Error al subir imagen al servidor PHP") from e

        url = self._host.image_url(filename)
        logger.info("Uploaded %s (%d bytes) -> %s", file.filename, file.size, url)
        return UploadedImage(filename=filename, url=url, mime_type=file.content_type, uploaded_at=now_local())
