from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_email, require_min_length, require_non_empty, require_range
from ..core.constants import DEFAULT_CLOSING_DATE, DEFAULT_HOURLY_WAGE, PASSWORD_MIN_LENGTH
from ..core.enums import EmploymentType, Role
from ..core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """Identity of the caller, built at login and passed explicitly to services."""

    user_id: int
    name: str
    role: Role
    employee_id: str

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @classmethod
    def from_user(cls, user: User) -> "SessionUser":
        return cls(user_id=user.user_id, name=user.name, role=user.role, employee_id=user.employee_id)

    def to_session(self) -> dict:
        return {
            "user_id": self.user_id,
            "name": self.name,
            "role": self.role.value,
            "employee_id": self.employee_id,
        }

    @classmethod
    def from_session(cls, data) -> Optional["SessionUser"]:
        if not data or "user_id" not in data:
            return None
        return cls(
            user_id=int(data["user_id"]),
            name=str(data.get("name", "")),
            role=Role(data.get("role", Role.USER.value)),
            employee_id=str(data.get("employee_id", "")),
        )


def require_admin(current: SessionUser) -> None:
    if not current.is_admin:
        raise AuthorizationError("Administrator permission required")


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, email: str, password: str) -> SessionUser:
        user = self._users.get_by_email((email or "").strip().lower())
        if not user or not user.is_active:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            logger.info("Failed login for user_id=%s", user.user_id)
            raise AuthenticationError("Invalid email or password")

        logger.info("User %s logged in", user.user_id)
        return SessionUser.from_user(user)


@dataclass(frozen=True)
class EmployeeForm:
    employee_id: str
    name: str
    email: str
    password: str = ""
    role: Role = Role.USER
    employment_type: EmploymentType = EmploymentType.REGULAR
    hourly_wage: int = DEFAULT_HOURLY_WAGE
    closing_date: int = DEFAULT_CLOSING_DATE


class UserService:
    """Use case: manage employees (admin)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def _validate(self, form: EmployeeForm, *, user_id: Optional[int] = None) -> EmployeeForm:
        employee_id = require_non_empty(form.employee_id, "Employee ID")
        name = require_non_empty(form.name, "Name")
        email = require_email(form.email)
        hourly_wage = require_range(form.hourly_wage, "Hourly wage", min_value=0)
        closing_date = require_range(form.closing_date, "Closing date", min_value=1, max_value=31)
        try:
            role = Role(form.role)
            employment_type = EmploymentType(form.employment_type)
        except ValueError:
            raise ValidationError("Unknown role or employment type")

        other = self._users.get_by_email(email)
        if other and other.user_id != user_id:
            raise ValidationError("Email is already registered")
        other = self._users.get_by_employee_id(employee_id)
        if other and other.user_id != user_id:
            raise ValidationError("Employee ID already exists")

        return EmployeeForm(
            employee_id=employee_id,
            name=name,
            email=email,
            password=form.password or "",
            role=role,
            employment_type=employment_type,
            hourly_wage=hourly_wage,
            closing_date=closing_date,
        )

    def get(self, current: SessionUser, user_id: int) -> User:
        if not current.is_admin and current.user_id != int(user_id):
            raise AuthorizationError("You can only view your own account")
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("Employee does not exist")
        return user

    def list_employees(self, current: SessionUser) -> list[User]:
        require_admin(current)
        return [u for u in self._users.list_all() if u.role == Role.USER]

    def create_employee(self, current: SessionUser, form: EmployeeForm) -> int:
        require_admin(current)
        form = self._validate(form)
        require_min_length(form.password, "Password", PASSWORD_MIN_LENGTH)

        if form.role == Role.ADMIN:
            raise ValidationError("Administrators cannot be created from this screen")

        user_id = self._users.create_user(
            employee_id=form.employee_id,
            name=form.name,
            email=form.email,
            password_hash=generate_password_hash(form.password),
            role=form.role,
            employment_type=form.employment_type,
            hourly_wage=form.hourly_wage,
            closing_date=form.closing_date,
        )
        logger.info("Admin %s created employee %s (%s)", current.user_id, user_id, form.employee_id)
        return user_id

    def update_employee(self, current: SessionUser, user_id: int, form: EmployeeForm) -> None:
        require_admin(current)
        if not self._users.get_by_id(int(user_id)):
            raise NotFoundError("Employee does not exist")

        form = self._validate(form, user_id=int(user_id))
        password_hash = None
        if form.password:
            require_min_length(form.password, "Password", PASSWORD_MIN_LENGTH)
            password_hash = generate_password_hash(form.password)

        ok = self._users.update_user(
            user_id=int(user_id),
            employee_id=form.employee_id,
            name=form.name,
            email=form.email,
            employment_type=form.employment_type,
            hourly_wage=form.hourly_wage,
            closing_date=form.closing_date,
            password_hash=password_hash,
        )
        if not ok:
            raise ValidationError("Failed to update employee")

    def delete_employee(self, current: SessionUser, user_id: int) -> None:
        require_admin(current)

        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("Employee does not exist")
        if user.role == Role.ADMIN:
            raise ValidationError("Administrator accounts cannot be deleted")

        if not self._users.delete_by_id(int(user_id)):
            raise ValidationError("Failed to delete employee")
        logger.info("Admin %s deleted employee %s", current.user_id, user_id)
