from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, Iterator

import mysql.connector
from werkzeug.security import generate_password_hash

from ..common.logging import get_logger
from .connection import DBConfig

logger = get_logger("bootstrap")

# Prefixes produced by werkzeug.security.generate_password_hash
_HASH_PREFIXES = ("scrypt:", "pbkdf2:")

DEMO_STUDENTS = (
    # dni, usuario, clave, nombres, apellidos, programa, semestre
    ("12345678", "jperez", "demo1234", "Juan", "Pérez Quispe", "Desarrollo de Sistemas de Información", 3),
    ("87654321", "mrosas", "demo1234", "María", "Rosas Huamán", "Contabilidad", 1),
)


def _connect(target: DBConfig, *, with_database: bool = True):
    kwargs = dict(host=target.host, port=target.port, user=target.user, password=target.password, use_pure=True)
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def _strip_create_db_and_use(sql: str) -> str:
    # The target database comes from settings, not from the script.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def split_sql_statements(sql: str) -> Iterator[str]:
    """Split a script on ';' outside quotes. Line comments are dropped."""
    buf: list[str] = []
    quote = ""
    escape = False

    for line in sql.splitlines(keepends=True):
        if not quote and line.lstrip().startswith("--"):
            continue
        for ch in line:
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif quote:
                if ch == quote:
                    quote = ""
            elif ch in ("'", '"'):
                quote = ch
            elif ch == ";":
                stmt = "".join(buf).strip()
                buf.clear()
                if stmt:
                    yield stmt
                continue
            buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _run_script(target: DBConfig, statements: Iterable[str]) -> int:
    conn = _connect(target)
    count = 0
    try:
        cur = conn.cursor()
        for stmt in statements:
            cur.execute(stmt)
            count += 1
        conn.commit()
    finally:
        conn.close()
    return count


def ensure_database_exists(target: DBConfig) -> None:
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(target: DBConfig, *, schema_path: str | Path) -> None:
    ensure_database_exists(target)
    sql = _strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8"))
    count = _run_script(target, split_sql_statements(sql))
    logger.info("Applied %s (%d statements) to %s", Path(schema_path).name, count, target.describe())


def apply_seed_sql(target: DBConfig, *, seed_path: str | Path) -> None:
    sql = _strip_create_db_and_use(Path(seed_path).read_text(encoding="utf-8"))
    count = _run_script(target, split_sql_statements(sql))
    logger.info("Applied %s (%d statements) to %s", Path(seed_path).name, count, target.describe())


def ensure_demo_students(target: DBConfig) -> None:
    conn = _connect(target)
    try:
        cur = conn.cursor(dictionary=True)

        for dni, usuario, clave, nombres, apellidos, programa, semestre in DEMO_STUDENTS:
            cur.execute("SELECT programa_id FROM programas_estudio WHERE nombre_programa=%s", (programa,))
            row = cur.fetchone()
            if not row:
                raise RuntimeError(f"Missing programas_estudio row for nombre_programa={programa}")

            cur.execute(
                """
                INSERT INTO estudiantes (dni, usuario, clave, nombres, apellidos, programa_id, semestre_actual)
                VALUES (%s, %s, %s, %s, %s, %s, %s)
                ON DUPLICATE KEY UPDATE
                    usuario=VALUES(usuario), clave=VALUES(clave), nombres=VALUES(nombres),
                    apellidos=VALUES(apellidos), programa_id=VALUES(programa_id),
                    semestre_actual=VALUES(semestre_actual)
                """,
                (dni, usuario, generate_password_hash(clave), nombres, apellidos, int(row["programa_id"]), semestre),
            )

        conn.commit()
    finally:
        conn.close()


def is_password_hash(value: str) -> bool:
    return bool(value) and value.startswith(_HASH_PREFIXES)


def hash_plaintext_passwords(target: DBConfig) -> int:
    """Replace legacy plaintext ``clave`` values with salted hashes.

    Returns the number of rows rewritten. Safe to run repeatedly.
    """
    conn = _connect(target)
    try:
        cur = conn.cursor(dictionary=True)
        cur.execute("SELECT dni, clave FROM estudiantes")
        pending = [r for r in cur.fetchall() if r["clave"] and not is_password_hash(r["clave"])]

        for r in pending:
            cur.execute(
                "UPDATE estudiantes SET clave=%s WHERE dni=%s",
                (generate_password_hash(r["clave"]), r["dni"]),
            )
        conn.commit()
    finally:
        conn.close()
    return len(pending)


def list_tables(target: DBConfig) -> list[str]:
    conn = _connect(target)
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
