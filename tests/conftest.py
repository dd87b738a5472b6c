from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from src.timecard.timecard.attendance.model import AttendanceRecord
from src.timecard.timecard.container import build_services
from src.timecard.timecard.core.enums import EmploymentType, RecordStatus, Role
from src.timecard.timecard.users.model import User
from src.timecard.timecard.users.service import SessionUser


class InMemoryUsers:
    def __init__(self, users=()):
        self._next_id = 1
        self._by_id: dict[int, User] = {}
        for u in users:
            self._by_id[u.user_id] = u
            self._next_id = max(self._next_id, u.user_id + 1)

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._by_id.get(int(user_id))

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self._by_id.values() if u.email == email), None)

    def get_by_employee_id(self, employee_id: str) -> Optional[User]:
        return next((u for u in self._by_id.values() if u.employee_id == employee_id), None)

    def list_all(self):
        return sorted(self._by_id.values(), key=lambda u: u.employee_id)

    def create_user(self, *, employee_id, name, email, password_hash, role, employment_type, hourly_wage, closing_date):
        uid = self._next_id
        self._next_id += 1
        self._by_id[uid] = User(
            user_id=uid,
            employee_id=employee_id,
            name=name,
            email=email,
            password_hash=password_hash,
            role=role,
            employment_type=employment_type,
            hourly_wage=hourly_wage,
            closing_date=closing_date,
        )
        return uid

    def update_user(
        self,
        *,
        user_id,
        employee_id,
        name,
        email,
        employment_type,
        hourly_wage,
        closing_date,
        password_hash=None,
    ):
        user = self._by_id.get(int(user_id))
        if not user:
            return False
        self._by_id[user.user_id] = replace(
            user,
            employee_id=employee_id,
            name=name,
            email=email,
            employment_type=employment_type,
            hourly_wage=hourly_wage,
            closing_date=closing_date,
            password_hash=password_hash or user.password_hash,
        )
        return True

    def delete_by_id(self, user_id: int) -> bool:
        return self._by_id.pop(int(user_id), None) is not None


class InMemoryAttendance:
    def __init__(self):
        self._next_id = 1
        self.records: dict[int, AttendanceRecord] = {}

    def get_by_id(self, record_id: int) -> Optional[AttendanceRecord]:
        return self.records.get(int(record_id))

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        return next(
            (r for r in self.records.values() if r.user_id == user_id and r.work_date == work_date),
            None,
        )

    def list_for_user_between(self, user_id: int, *, start_date: date, end_date: date):
        rows = [r for r in self.records.values() if r.user_id == user_id and start_date <= r.work_date <= end_date]
        return sorted(rows, key=lambda r: r.work_date)

    def list_between(self, *, start_date: date, end_date: date, status: Optional[RecordStatus] = None):
        rows = [
            r
            for r in self.records.values()
            if start_date <= r.work_date <= end_date and (status is None or r.status == status)
        ]
        return sorted(rows, key=lambda r: (r.work_date, r.user_id))

    def list_by_status(self, status: RecordStatus, *, limit: int = 500):
        rows = [r for r in self.records.values() if r.status == status]
        return sorted(rows, key=lambda r: (r.work_date, r.user_id))[:limit]

    def create(self, *, user_id, work_date, work_spans, breaks, status, note, work_content, stats):
        rid = self._next_id
        self._next_id += 1
        self.records[rid] = AttendanceRecord(
            record_id=rid,
            user_id=user_id,
            work_date=work_date,
            work_spans=tuple(work_spans),
            breaks=tuple(breaks),
            status=status,
            note=note,
            work_content=work_content,
            computed_work_min=stats.work_minutes,
            computed_overtime_min=stats.overtime_minutes,
            computed_night_min=stats.night_minutes,
        )
        return rid

    def update(self, *, record_id, work_spans, breaks, status, note, work_content, stats):
        rec = self.records.get(int(record_id))
        if not rec or rec.status == RecordStatus.APPROVED:
            return False
        self.records[rec.record_id] = replace(
            rec,
            work_spans=tuple(work_spans),
            breaks=tuple(breaks),
            status=status,
            note=note,
            work_content=work_content,
            computed_work_min=stats.work_minutes,
            computed_overtime_min=stats.overtime_minutes,
            computed_night_min=stats.night_minutes,
        )
        return True

    def update_status(self, *, record_id, status, expected):
        rec = self.records.get(int(record_id))
        if not rec or rec.status != expected:
            return False
        self.records[rec.record_id] = replace(rec, status=status)
        return True

    def delete_by_id(self, record_id: int) -> bool:
        return self.records.pop(int(record_id), None) is not None


ADMIN = User(
    user_id=1,
    employee_id="ADMIN001",
    name="Admin",
    email="admin@example.com",
    password_hash=generate_password_hash("admin123"),
    role=Role.ADMIN,
    hourly_wage=2000,
)
YAMADA = User(
    user_id=2,
    employee_id="EMP001",
    name="Taro Yamada",
    email="yamada@example.com",
    password_hash=generate_password_hash("user123"),
    role=Role.USER,
    hourly_wage=1500,
)
SATO = User(
    user_id=3,
    employee_id="EMP002",
    name="Hanako Sato",
    email="sato@example.com",
    password_hash=generate_password_hash("user123"),
    role=Role.USER,
    employment_type=EmploymentType.PART_TIME,
    hourly_wage=1200,
)


@pytest.fixture
def users_repo():
    return InMemoryUsers([ADMIN, YAMADA, SATO])


@pytest.fixture
def attendance_repo():
    return InMemoryAttendance()


@pytest.fixture
def container(users_repo, attendance_repo):
    return build_services(users_repo=users_repo, attendance_repo=attendance_repo)


@pytest.fixture
def admin():
    return SessionUser.from_user(ADMIN)


@pytest.fixture
def yamada():
    return SessionUser.from_user(YAMADA)


@pytest.fixture
def sato():
    return SessionUser.from_user(SATO)
