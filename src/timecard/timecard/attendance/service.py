from __future__ import annotations

import logging
from typing import Any, Optional

from ..common.datetime_utils import month_bounds, parse_iso_date, parse_month_key
from ..common.validators import require_date_key, require_employee_id, require_month_key
from ..core.enums import LeaveType
from ..core.exceptions import ValidationError
from ..remote.codec import decode_attendance
from .model import AttendanceRecord, LeaveRecord, MonthlyAttendanceData
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def _require_leave_type(value: Any) -> LeaveType:
    try:
        return LeaveType(int(value))
    except (TypeError, ValueError):
        raise ValidationError(f"leave_type must be one of {[int(t) for t in LeaveType]}")


class AttendanceService:
    """Record store rules for attendance and leave rows."""

    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def get_monthly(self, *, employee_id: Any, month_key: Optional[str]) -> MonthlyAttendanceData:
        employee_id = require_employee_id(employee_id)
        month_key = require_month_key(month_key)
        start, end = month_bounds(*parse_month_key(month_key))

        return MonthlyAttendanceData(
            attendances=tuple(self._attendance.list_attendances(employee_id=employee_id, start=start, end=end)),
            leaves=tuple(self._attendance.list_leaves(employee_id=employee_id, start=start, end=end)),
        )

    def get_daily(self, *, employee_id: Any, date_key: Optional[str]) -> Optional[AttendanceRecord]:
        employee_id = require_employee_id(employee_id)
        date_key = require_date_key(date_key)
        return self._attendance.get_attendance(employee_id=employee_id, work_date=parse_iso_date(date_key))

    def update_attendance(self, payload: Any) -> AttendanceRecord:
        if not isinstance(payload, dict):
            raise ValidationError("Invalid input")

        require_employee_id(payload.get("emplid"))
        require_date_key(payload.get("date"))

        leave_code = payload.get("leave_type")
        has_times = bool(payload.get("start_time") or payload.get("end_time"))
        if leave_code:
            _require_leave_type(leave_code)
            if has_times:
                raise ValidationError("A leave day cannot have start_time/end_time")

        try:
            record = decode_attendance(payload)
        except (KeyError, TypeError, ValueError):
            raise ValidationError("start_time/end_time must be HH:MM")

        if record.start_time and record.end_time and record.end_time < record.start_time:
            raise ValidationError("end_time must not be earlier than start_time")

        self._attendance.upsert_attendance(record)
        logger.info("Attendance saved for employee %s on %s", record.employee_id, record.date)
        return record

    def create_leave(self, payload: Any) -> LeaveRecord:
        if not isinstance(payload, dict):
            raise ValidationError("Invalid input")

        leave = LeaveRecord(
            employee_id=require_employee_id(payload.get("emplid")),
            date=require_date_key(payload.get("date")),
            leave_type=_require_leave_type(payload.get("leave_type")),
        )
        self._attendance.upsert_leave(leave)
        logger.info("Leave %s saved for employee %s on %s", leave.leave_type.name, leave.employee_id, leave.date)
        return leave

    def delete_leave(self, *, employee_id: Any, date_key: Optional[str]) -> bool:
        """Idempotent: deleting a missing leave is not an error."""

        employee_id = require_employee_id(employee_id)
        date_key = require_date_key(date_key)
        deleted = self._attendance.delete_leave(employee_id=employee_id, work_date=parse_iso_date(date_key))
        if not deleted:
            logger.debug("No leave to delete for employee %s on %s", employee_id, date_key)
        return deleted
