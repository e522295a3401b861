"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_POOL_SIZE = 10
DEFAULT_JUSTIFICATION_MAX_FILES = 5
DEFAULT_MAX_FILE_SIZE = 5 * 1024 * 1024
DEFAULT_PROBE_TIMEOUT_SECONDS = 10

LEGACY_BASE_URL = "https://www.iestpasist.com"
LEGACY_UPLOAD_SCRIPT = "/upload.php"
UPLOADS_PATH = "/uploads/"
IMAGES_PATH = "/imagenesJ/"
QR_PATH = "/qr_codes/"

JUSTIFICATION_FILE_FIELDS = ("imagenes", "documentos")
PROFILE_IMAGE_FIELD = "imagen"
