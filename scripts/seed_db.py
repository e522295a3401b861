from __future__ import annotations

import importlib
from pathlib import Path

from dotenv import load_dotenv

from student_portal.config import get_settings_module
from student_portal.database.bootstrap import apply_seed_sql, ensure_demo_students
from student_portal.database.connection import DBConfig


def main() -> None:
    load_dotenv()
    settings = importlib.import_module(get_settings_module())
    target = DBConfig.from_dict(dict(settings.DB_CONFIG))

    seed_path = Path(__file__).resolve().parents[1] / "database" / "seed.sql"
    apply_seed_sql(target, seed_path=seed_path)
    ensure_demo_students(target)

    print(f"OK: Seeded database -> {target.describe()}")


if __name__ == "__main__":
    main()
