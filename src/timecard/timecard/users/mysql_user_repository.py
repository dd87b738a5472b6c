from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.enums import EmploymentType, Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import User
from .repository import UserRepository

_USER_COLUMNS = """
    user_id, employee_id, name, email, password_hash, role,
    employment_type, hourly_wage, closing_date, is_active
"""


def _to_user(row: Dict[str, Any]) -> User:
    return User(
        user_id=int(row["user_id"]),
        employee_id=row["employee_id"],
        name=row["name"],
        email=row["email"],
        password_hash=row["password_hash"],
        role=Role(row["role"]),
        employment_type=EmploymentType(row["employment_type"]),
        hourly_wage=int(row["hourly_wage"]),
        closing_date=int(row["closing_date"]),
        is_active=bool(row.get("is_active", True)),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_one(self, where: str, value: Any) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE {where}=%s", (value,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._get_one("user_id", int(user_id))

    def get_by_email(self, email: str) -> Optional[User]:
        return self._get_one("email", email)

    def get_by_employee_id(self, employee_id: str) -> Optional[User]:
        return self._get_one("employee_id", employee_id)

    def list_all(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users ORDER BY employee_id ASC")
            return [_to_user(r) for r in fetchall(cur)]

    def create_user(
        self,
        *,
        employee_id: str,
        name: str,
        email: str,
        password_hash: str,
        role: Role,
        employment_type: EmploymentType,
        hourly_wage: int,
        closing_date: int,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(employee_id, name, email, password_hash, role, employment_type, hourly_wage, closing_date)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    employee_id,
                    name,
                    email,
                    password_hash,
                    role.value,
                    employment_type.value,
                    int(hourly_wage),
                    int(closing_date),
                ),
            )
            return int(cur.lastrowid)

    def update_user(
        self,
        *,
        user_id: int,
        employee_id: str,
        name: str,
        email: str,
        employment_type: EmploymentType,
        hourly_wage: int,
        closing_date: int,
        password_hash: Optional[str] = None,
    ) -> bool:
        sets = "employee_id=%s, name=%s, email=%s, employment_type=%s, hourly_wage=%s, closing_date=%s"
        params: list[Any] = [employee_id, name, email, employment_type.value, int(hourly_wage), int(closing_date)]
        if password_hash:
            sets += ", password_hash=%s"
            params.append(password_hash)
        params.append(int(user_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE users SET {sets} WHERE user_id=%s", tuple(params))
            # rowcount is 0 when nothing changed, so check the row instead.
            return self._exists(cur, user_id)

    @staticmethod
    def _exists(cur, user_id: int) -> bool:
        cur.execute("SELECT 1 AS found FROM users WHERE user_id=%s", (int(user_id),))
        return fetchone(cur) is not None

    def delete_by_id(self, user_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM users WHERE user_id=%s", (int(user_id),))
            return cur.rowcount > 0
