from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import DEFAULT_CLOSING_DATE, DEFAULT_HOURLY_WAGE
from ..core.enums import EmploymentType, Role


@dataclass(frozen=True)
class User:
    """Domain entity: an employee or administrator account.

    Plain data object (no DB access code).
    """

    user_id: int
    employee_id: str
    name: str
    email: str
    password_hash: str
    role: Role
    employment_type: EmploymentType = EmploymentType.REGULAR
    hourly_wage: int = DEFAULT_HOURLY_WAGE
    closing_date: int = DEFAULT_CLOSING_DATE
    is_active: bool = True

    def to_public_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "employee_id": self.employee_id,
            "name": self.name,
            "email": self.email,
            "role": self.role.value,
            "employment_type": self.employment_type.value,
            "hourly_wage": self.hourly_wage,
            "closing_date": self.closing_date,
            "is_active": self.is_active,
        }
