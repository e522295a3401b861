"""One-off migration: hash any plaintext passwords left in estudiantes.clave."""

from __future__ import annotations

import importlib

from dotenv import load_dotenv

from student_portal.config import get_settings_module
from student_portal.database.bootstrap import hash_plaintext_passwords
from student_portal.database.connection import DBConfig


def main() -> None:
    load_dotenv()
    settings = importlib.import_module(get_settings_module())
    target = DBConfig.from_dict(dict(settings.DB_CONFIG))

    updated = hash_plaintext_passwords(target)
    print(f"OK: Hashed {updated} password(s) -> {target.describe()}")


if __name__ == "__main__":
    main()
