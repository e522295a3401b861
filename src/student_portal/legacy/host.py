from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional

import requests

from ..common.logging import get_logger
from ..core.constants import IMAGES_PATH, LEGACY_UPLOAD_SCRIPT, QR_PATH, UPLOADS_PATH

logger = get_logger("legacy")


@dataclass
class LegacyHost:
    """The external PHP server that stores uploaded files and serves them back.

    URLs are built by plain concatenation of ``base_url`` + path prefix +
    filename, matching how the host lays out its public folders.
    """

    base_url: str
    probe_timeout: Optional[float] = 10.0
    session: requests.Session = field(default_factory=requests.Session)

    def __post_init__(self) -> None:
        self.base_url = self.base_url.rstrip("/")

    @property
    def upload_endpoint(self) -> str:
        return f"{self.base_url}{LEGACY_UPLOAD_SCRIPT}"

    def schedule_url(self, archivo: str) -> str:
        return f"{self.base_url}{UPLOADS_PATH}{archivo}"

    def image_url(self, filename: str) -> str:
        return f"{self.base_url}{IMAGES_PATH}{filename}"

    def qr_url(self, qr_code_path: str) -> str:
        # Rows store a server-side path; only the file name is public.
        name = os.path.basename(qr_code_path.replace("\\", "/"))
        return f"{self.base_url}{QR_PATH}{name}"

    def exists(self, url: str) -> bool:
        """HEAD-probe a public file. Any failure counts as missing."""
        try:
            resp = self.session.head(url, timeout=self.probe_timeout, allow_redirects=True)
        except requests.RequestException as e:
            logger.info("Probe failed for %s: %s", url, e)
            return False
        if not 200 <= resp.status_code < 300:
            logger.info("Probe for %s returned HTTP %s", url, resp.status_code)
            return False
        return True
