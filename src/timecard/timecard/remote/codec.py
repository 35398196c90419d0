"""JSON wire format shared by the API client and the record store.

Attendance: ``{"emplid", "date", "start_time"?, "end_time"?, "leave_type"?}``
with ``HH:MM`` times. A leave day never carries times.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence

from ..attendance.model import AttendanceRecord, LeaveRecord, MonthlyAttendanceData, OnLeaveDay, WorkedDay
from ..common.datetime_utils import format_time_of_day, parse_time_of_day
from ..core.enums import LeaveType
from ..payroll.model import SalaryStatement
from ..reviews.model import PerformanceReview


def encode_attendance(record: AttendanceRecord) -> dict:
    body: dict[str, Any] = {"emplid": record.employee_id, "date": record.date}
    if isinstance(record.entry, OnLeaveDay):
        body["leave_type"] = int(record.entry.leave_type)
    elif isinstance(record.entry, WorkedDay):
        body["start_time"] = format_time_of_day(record.entry.start_time)
        body["end_time"] = format_time_of_day(record.entry.end_time)
    return body


def decode_attendance(payload: Any) -> Optional[AttendanceRecord]:
    """Decode one attendance object; JSON ``null`` or ``{}`` means "no record"."""

    if payload is None or payload == {}:
        return None
    if not isinstance(payload, dict):
        raise TypeError(f"attendance must be an object, got {type(payload).__name__}")

    employee_id = int(payload["emplid"])
    date_key = str(payload["date"])

    leave_code = payload.get("leave_type")
    if leave_code:
        return AttendanceRecord(employee_id, date_key, OnLeaveDay(LeaveType(int(leave_code))))

    start = parse_time_of_day(payload.get("start_time"))
    end = parse_time_of_day(payload.get("end_time"))
    if start is None and end is None:
        return AttendanceRecord.empty(employee_id, date_key)
    return AttendanceRecord(employee_id, date_key, WorkedDay(start_time=start, end_time=end))


def decode_daily(employee_id: int, date_key: str):
    """Decoder for the daily fetch: a missing record becomes an empty one."""

    def _decode(payload: Any) -> AttendanceRecord:
        record = decode_attendance(payload)
        return record or AttendanceRecord.empty(employee_id, date_key)

    return _decode


def encode_leave(leave: LeaveRecord) -> dict:
    return {"emplid": leave.employee_id, "date": leave.date, "leave_type": int(leave.leave_type)}


def decode_leave(payload: Any) -> LeaveRecord:
    return LeaveRecord(
        employee_id=int(payload["emplid"]),
        date=str(payload["date"]),
        leave_type=LeaveType(int(payload["leave_type"])),
    )


def encode_monthly(data: MonthlyAttendanceData) -> dict:
    return {
        "attendances": [encode_attendance(r) for r in data.attendances],
        "leaves": [encode_leave(r) for r in data.leaves],
    }


def decode_monthly(payload: Any) -> MonthlyAttendanceData:
    if not isinstance(payload, dict):
        raise TypeError("monthly payload must be an object")
    attendances = [decode_attendance(p) for p in payload.get("attendances") or []]
    return MonthlyAttendanceData(
        attendances=tuple(r for r in attendances if r is not None),
        leaves=tuple(decode_leave(p) for p in payload.get("leaves") or []),
    )


_SALARY_FIELDS = (
    "basic_salary",
    "overtime_allowance",
    "health_insurance",
    "nursing_care_insurance",
    "pension",
    "employment_insurance",
    "income_tax",
    "resident_tax",
)


def encode_salary(statement: SalaryStatement) -> dict:
    return {
        "emplid": statement.employee_id,
        "month": statement.month,
        "salary": {name: getattr(statement, name) for name in _SALARY_FIELDS},
        "total_deductions": statement.total_deductions,
        "take_home": statement.take_home,
    }


def decode_salary(payload: Any) -> SalaryStatement:
    salary = payload["salary"]
    return SalaryStatement(
        employee_id=int(payload["emplid"]),
        month=str(payload["month"]),
        **{name: int(salary[name]) for name in _SALARY_FIELDS},
    )


REVIEW_SUBORDINATE_FIELDS = ("subordinate_input",)
REVIEW_SUPERVISOR_FIELDS = ("supervisor_ability", "supervisor_behavior", "supervisor_attitude", "supervisor_input")


def encode_review(review: PerformanceReview, *, fields: Optional[Sequence[str]] = None) -> dict:
    """Encode a review; ``fields`` limits the body to one party's half."""

    body: dict[str, Any] = {"emplid": review.employee_id, "month": review.month}
    for name in fields or REVIEW_SUBORDINATE_FIELDS + REVIEW_SUPERVISOR_FIELDS:
        body[name] = getattr(review, name)
    return body


def decode_review(payload: Any) -> Optional[PerformanceReview]:
    if not payload:
        return None

    def _score(name: str) -> Optional[int]:
        value = payload.get(name)
        return int(value) if value is not None else None

    return PerformanceReview(
        employee_id=int(payload["emplid"]),
        month=str(payload["month"]),
        subordinate_input=payload.get("subordinate_input") or "",
        supervisor_ability=_score("supervisor_ability"),
        supervisor_behavior=_score("supervisor_behavior"),
        supervisor_attitude=_score("supervisor_attitude"),
        supervisor_input=payload.get("supervisor_input") or "",
    )
