from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import EmploymentType, Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Services depend on this protocol, not on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_employee_id(self, employee_id: str) -> Optional[User]:
        raise NotImplementedError

    def list_all(self) -> Sequence[User]:
        raise NotImplementedError

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
        raise NotImplementedError

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
        raise NotImplementedError

    def delete_by_id(self, user_id: int) -> bool:
        raise NotImplementedError
