from __future__ import annotations

from enum import Enum

from .exceptions import InvalidTransitionError


class Role(str, Enum):
    """User role used for authorization."""

    ADMIN = "admin"
    USER = "user"


class EmploymentType(str, Enum):
    REGULAR = "regular"
    PART_TIME = "part_time"
    CONTRACT = "contract"


class RecordStatus(str, Enum):
    """Approval state of a day record stored in the database.

    draft -> pending -> approved | remanded, and remanded -> pending.
    """

    DRAFT = "draft"
    PENDING = "pending"
    APPROVED = "approved"
    REMANDED = "remanded"

    def can_transition_to(self, target: "RecordStatus") -> bool:
        return target in _TRANSITIONS[self]

    def transition_to(self, target: "RecordStatus") -> "RecordStatus":
        if not self.can_transition_to(target):
            raise InvalidTransitionError(f"Cannot change status from {self.value} to {target.value}")
        return target

    @property
    def is_locked(self) -> bool:
        return self is RecordStatus.APPROVED


_TRANSITIONS: dict[RecordStatus, frozenset[RecordStatus]] = {
    RecordStatus.DRAFT: frozenset({RecordStatus.PENDING}),
    RecordStatus.PENDING: frozenset({RecordStatus.APPROVED, RecordStatus.REMANDED}),
    RecordStatus.APPROVED: frozenset(),
    RecordStatus.REMANDED: frozenset({RecordStatus.PENDING}),
}
