from __future__ import annotations

import importlib
from pathlib import Path

from dotenv import load_dotenv

from student_portal.config import get_settings_module
from student_portal.database.bootstrap import apply_schema, list_tables
from student_portal.database.connection import DBConfig


def main() -> None:
    load_dotenv()
    settings = importlib.import_module(get_settings_module())
    target = DBConfig.from_dict(dict(settings.DB_CONFIG))

    schema_path = Path(__file__).resolve().parents[1] / "database" / "schema.sql"
    apply_schema(target, schema_path=schema_path)
    tables = list_tables(target)
    print(f"OK: Applied schema.sql -> {target.describe()} (tables={len(tables)})")


if __name__ == "__main__":
    main()
