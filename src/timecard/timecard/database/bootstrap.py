"""Schema setup and demo accounts for a fresh MySQL database."""

from __future__ import annotations

import logging
import re
from contextlib import closing
from pathlib import Path
from typing import Iterator

from werkzeug.security import generate_password_hash

from ..core.constants import DEFAULT_CLOSING_DATE
from ..core.enums import EmploymentType, Role
from .connection import DatabaseConnection, DBConfig

logger = logging.getLogger(__name__)

DEMO_USERS = (
    # employee_id, name, email, password, role, employment_type, hourly_wage
    ("ADMIN001", "Admin", "admin@example.com", "admin123", Role.ADMIN, EmploymentType.REGULAR, 2000),
    ("EMP001", "Taro Yamada", "yamada@example.com", "user123", Role.USER, EmploymentType.REGULAR, 1500),
    ("EMP002", "Hanako Sato", "sato@example.com", "user123", Role.USER, EmploymentType.PART_TIME, 1200),
)

# schema.sql may pin a database name; the configured one wins.
_DB_SELECTION_RE = re.compile(r"^\s*(CREATE\s+DATABASE|USE)\b", re.IGNORECASE)


def schema_statements(sql: str) -> Iterator[str]:
    """Split a schema file into statements.

    Statements end with ``;`` at the end of a line; ``--`` comment lines and
    database selection statements are dropped.
    """
    buf: list[str] = []
    for line in sql.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("--"):
            continue
        buf.append(line)
        if stripped.endswith(";"):
            stmt = "\n".join(buf).strip().rstrip(";").strip()
            buf.clear()
            if stmt and not _DB_SELECTION_RE.match(stmt):
                yield stmt

    tail = "\n".join(buf).strip()
    if tail and not _DB_SELECTION_RE.match(tail):
        yield tail


def _factory(db_config: dict) -> DatabaseConnection:
    return DatabaseConnection(DBConfig.from_dict(db_config))


def ensure_database_exists(db_config: dict) -> None:
    factory = _factory(db_config)
    with closing(factory.connect(with_database=False)) as conn:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{factory.config.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)

    sql = Path(schema_path).read_text(encoding="utf-8")
    with closing(_factory(db_config).connect()) as conn:
        cur = conn.cursor()
        count = 0
        for stmt in schema_statements(sql):
            cur.execute(stmt)
            count += 1
        conn.commit()
    logger.info("Applied %d schema statements from %s", count, schema_path)


def ensure_demo_users(db_config: dict) -> None:
    """Insert the demo accounts, or reset them when they already exist."""
    with closing(_factory(db_config).connect()) as conn:
        cur = conn.cursor(dictionary=True)
        for employee_id, name, email, password, role, employment_type, wage in DEMO_USERS:
            values = (name, email, generate_password_hash(password), role.value, employment_type.value, wage)
            cur.execute("SELECT user_id FROM users WHERE employee_id=%s", (employee_id,))
            if cur.fetchone():
                cur.execute(
                    """
                    UPDATE users
                    SET name=%s, email=%s, password_hash=%s, role=%s, employment_type=%s, hourly_wage=%s,
                        is_active=1
                    WHERE employee_id=%s
                    """,
                    values + (employee_id,),
                )
            else:
                cur.execute(
                    """
                    INSERT INTO users
                        (name, email, password_hash, role, employment_type, hourly_wage, employee_id, closing_date)
                    VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
                    """,
                    values + (employee_id, DEFAULT_CLOSING_DATE),
                )
        conn.commit()


def list_tables(db_config: dict) -> list[str]:
    with closing(_factory(db_config).connect()) as conn:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
