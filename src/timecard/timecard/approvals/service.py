from __future__ import annotations

import logging
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..attendance.service import to_ui
from ..core.enums import RecordStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..users.model import User
from ..users.repository import UserRepository
from ..users.service import SessionUser, require_admin

logger = logging.getLogger(__name__)


class ApprovalService:
    """Admin review of submitted day records.

    Every status change goes through ``RecordStatus.transition_to`` and is
    written with a compare-and-set on the previous status.
    """

    def __init__(self, attendance: AttendanceRepository, users: UserRepository):
        self._attendance = attendance
        self._users = users

    def _decide(self, current: SessionUser, record_id: int, target: RecordStatus) -> None:
        require_admin(current)

        rec = self._attendance.get_by_id(int(record_id))
        if not rec:
            raise NotFoundError("Record does not exist")

        status = rec.status.transition_to(target)
        if not self._attendance.update_status(record_id=rec.record_id, status=status, expected=rec.status):
            raise ValidationError("The record was already processed")
        logger.info("Admin %s set record %s to %s", current.user_id, rec.record_id, status.value)

    def approve(self, current: SessionUser, record_id: int) -> None:
        self._decide(current, record_id, RecordStatus.APPROVED)

    def remand(self, current: SessionUser, record_id: int) -> None:
        self._decide(current, record_id, RecordStatus.REMANDED)

    def list_pending(self, current: SessionUser, *, limit: int = 500) -> list[dict]:
        require_admin(current)

        users: dict[int, Optional[User]] = {}
        out: list[dict] = []
        for rec in self._attendance.list_by_status(RecordStatus.PENDING, limit=limit):
            if rec.user_id not in users:
                users[rec.user_id] = self._users.get_by_id(rec.user_id)
            user = users[rec.user_id]
            row = to_ui(rec)
            row["employee_id"] = user.employee_id if user else "-"
            row["name"] = user.name if user else "-"
            out.append(row)
        return out
