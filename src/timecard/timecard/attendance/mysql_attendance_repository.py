from __future__ import annotations

from datetime import date
from typing import Any, Optional, Sequence

from ..common.datetime_utils import parse_iso_date, to_date_key
from ..core.enums import LeaveType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import AttendanceRecord, LeaveRecord, OnLeaveDay, WorkedDay
from .repository import AttendanceRepository


def _row_to_attendance(r: dict[str, Any]) -> AttendanceRecord:
    date_key = to_date_key(r["work_date"])
    if r.get("leave_type"):
        return AttendanceRecord(int(r["emplid"]), date_key, OnLeaveDay(LeaveType(int(r["leave_type"]))))

    start = normalize_mysql_time(r.get("start_time"))
    end = normalize_mysql_time(r.get("end_time"))
    if start is None and end is None:
        return AttendanceRecord.empty(int(r["emplid"]), date_key)
    return AttendanceRecord(int(r["emplid"]), date_key, WorkedDay(start_time=start, end_time=end))


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_attendances(self, *, employee_id: int, start: date, end: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT emplid, work_date, start_time, end_time, leave_type
                FROM attendance_records
                WHERE emplid=%s AND work_date BETWEEN %s AND %s
                ORDER BY work_date ASC
                """,
                (int(employee_id), start, end),
            )
            return [_row_to_attendance(r) for r in fetchall(cur)]

    def get_attendance(self, *, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT emplid, work_date, start_time, end_time, leave_type
                FROM attendance_records
                WHERE emplid=%s AND work_date=%s
                """,
                (int(employee_id), work_date),
            )
            r = fetchone(cur)
            return _row_to_attendance(r) if r else None

    def upsert_attendance(self, record: AttendanceRecord) -> None:
        leave_type = int(record.leave_type) if record.leave_type is not None else None
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(emplid, work_date, start_time, end_time, leave_type)
                VALUES(%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    start_time=VALUES(start_time),
                    end_time=VALUES(end_time),
                    leave_type=VALUES(leave_type)
                """,
                (
                    record.employee_id,
                    parse_iso_date(record.date),
                    record.start_time,
                    record.end_time,
                    leave_type,
                ),
            )

    def list_leaves(self, *, employee_id: int, start: date, end: date) -> Sequence[LeaveRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT emplid, work_date, leave_type
                FROM leave_records
                WHERE emplid=%s AND work_date BETWEEN %s AND %s
                ORDER BY work_date ASC
                """,
                (int(employee_id), start, end),
            )
            return [
                LeaveRecord(
                    employee_id=int(r["emplid"]),
                    date=to_date_key(r["work_date"]),
                    leave_type=LeaveType(int(r["leave_type"])),
                )
                for r in fetchall(cur)
            ]

    def upsert_leave(self, leave: LeaveRecord) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_records(emplid, work_date, leave_type)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE leave_type=VALUES(leave_type)
                """,
                (leave.employee_id, parse_iso_date(leave.date), int(leave.leave_type)),
            )

    def delete_leave(self, *, employee_id: int, work_date: date) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM leave_records WHERE emplid=%s AND work_date=%s",
                (int(employee_id), work_date),
            )
            return cur.rowcount > 0
