import os

from .base import *  # noqa: F401,F403

SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")

LEGACY_BASE_URL = "https://legacy.test"
PROFILE_IMAGES_DIR = os.getenv("PROFILE_IMAGES_DIR", os.path.join(os.getcwd(), ".test_profile_images"))

AUTO_INIT_DB = False
AUTO_SEED_DB = False
