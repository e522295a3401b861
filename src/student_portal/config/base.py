import os

from ..core.constants import (
    DEFAULT_JUSTIFICATION_MAX_FILES,
    DEFAULT_MAX_FILE_SIZE,
    DEFAULT_POOL_SIZE,
    DEFAULT_PROBE_TIMEOUT_SECONDS,
    LEGACY_BASE_URL,
)


def _optional_float(name: str, default=None):
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return float(raw)


DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "iestp_portal"),
}
DB_POOL_SIZE = int(os.getenv("DB_POOL_SIZE", str(DEFAULT_POOL_SIZE)))

LEGACY_BASE_URL = os.getenv("LEGACY_BASE_URL", LEGACY_BASE_URL).rstrip("/")
# No timeout unless configured: the legacy host can be slow with large scans
LEGACY_UPLOAD_TIMEOUT = _optional_float("LEGACY_UPLOAD_TIMEOUT")
LEGACY_PROBE_TIMEOUT = _optional_float("LEGACY_PROBE_TIMEOUT", float(DEFAULT_PROBE_TIMEOUT_SECONDS))

JUSTIFICATION_MAX_FILES = int(os.getenv("JUSTIFICATION_MAX_FILES", str(DEFAULT_JUSTIFICATION_MAX_FILES)))
MAX_FILE_SIZE = int(os.getenv("MAX_FILE_SIZE", str(DEFAULT_MAX_FILE_SIZE)))
MAX_CONTENT_LENGTH = int(os.getenv("MAX_CONTENT_LENGTH", str(30 * 1024 * 1024)))

PROFILE_IMAGES_DIR = os.getenv("PROFILE_IMAGES_DIR", os.path.join(os.getcwd(), "profile_images"))

API_PREFIX = os.getenv("API_PREFIX", "").rstrip("/")
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8080"))

AUTO_INIT_DB = False
AUTO_SEED_DB = False
