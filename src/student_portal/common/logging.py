from __future__ import annotations

import logging

ROOT_LOGGER = "student_portal"

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=logging.INFO, format=_FORMAT, handlers=[logging.StreamHandler()])
    logging.getLogger(ROOT_LOGGER).setLevel(str(level).upper())


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
