from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, time
from typing import Optional, Union

from ..core.enums import LeaveType


@dataclass(frozen=True)
class WorkedDay:
    """Worked-day variant: clock-in and (optionally) clock-out times."""

    start_time: Optional[time] = None
    end_time: Optional[time] = None


@dataclass(frozen=True)
class OnLeaveDay:
    """Leave-day variant: no times, just the leave code."""

    leave_type: LeaveType


DayEntry = Union[WorkedDay, OnLeaveDay, None]


@dataclass(frozen=True)
class AttendanceRecord:
    """Attendance of one employee for one date key.

    ``entry`` is ``None`` while nothing has been recorded for the date yet.
    """

    employee_id: int
    date: str
    entry: DayEntry = None

    @property
    def start_time(self) -> Optional[time]:
        return self.entry.start_time if isinstance(self.entry, WorkedDay) else None

    @property
    def end_time(self) -> Optional[time]:
        return self.entry.end_time if isinstance(self.entry, WorkedDay) else None

    @property
    def leave_type(self) -> Optional[LeaveType]:
        return self.entry.leave_type if isinstance(self.entry, OnLeaveDay) else None

    @property
    def is_empty(self) -> bool:
        return self.entry is None

    @classmethod
    def empty(cls, employee_id: int, date_key: str) -> "AttendanceRecord":
        return cls(employee_id=employee_id, date=date_key)


@dataclass(frozen=True)
class LeaveRecord:
    employee_id: int
    date: str
    leave_type: LeaveType


@dataclass(frozen=True)
class MonthlyAttendanceData:
    """Attendances and leaves of one employee for one ``YYYYMM`` period."""

    attendances: tuple[AttendanceRecord, ...] = ()
    leaves: tuple[LeaveRecord, ...] = ()


@dataclass(frozen=True)
class CalendarDay:
    """One cell of the month grid (read-only projection)."""

    date: date
    date_key: str
    is_current_month: bool
    is_today: bool = False
    attendance: Optional[AttendanceRecord] = None
    leave: Optional[LeaveRecord] = None

    @property
    def selectable(self) -> bool:
        return self.is_current_month

    @property
    def annotated(self) -> bool:
        return self.attendance is not None or self.leave is not None


@dataclass(frozen=True)
class EmployeeContext:
    """Who is calling and with which bearer credential.

    Passed explicitly to every remote operation; the token is never inspected.
    """

    employee_id: int
    token: str = field(repr=False)
