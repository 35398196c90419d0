from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord, LeaveRecord


class AttendanceRepository(Protocol):
    def list_attendances(self, *, employee_id: int, start: date, end: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def get_attendance(self, *, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def upsert_attendance(self, record: AttendanceRecord) -> None:
        """Insert or replace the row keyed by (employee, date)."""

        raise NotImplementedError

    def list_leaves(self, *, employee_id: int, start: date, end: date) -> Sequence[LeaveRecord]:
        raise NotImplementedError

    def upsert_leave(self, leave: LeaveRecord) -> None:
        raise NotImplementedError

    def delete_leave(self, *, employee_id: int, work_date: date) -> bool:
        raise NotImplementedError
