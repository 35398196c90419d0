from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, Optional, Sequence, TypeVar

from .model import AttendanceRecord, CalendarDay, LeaveRecord, MonthlyAttendanceData

logger = logging.getLogger(__name__)

_R = TypeVar("_R", AttendanceRecord, LeaveRecord)


def index_by_date(records: Iterable[_R], *, kind: str) -> dict[str, _R]:
    """Map date key -> record, keeping the first record for each date.

    Later duplicates are ignored; they are upstream data-quality problems,
    so they are only reported in the log.
    """

    index: dict[str, _R] = {}
    for record in records:
        if record.date in index:
            logger.warning("Duplicate %s record for %s ignored (employee %s)", kind, record.date, record.employee_id)
            continue
        index[record.date] = record
    return index


def merge_records(days: Sequence[CalendarDay], data: Optional[MonthlyAttendanceData]) -> list[CalendarDay]:
    """Attach attendance/leave records to current-month cells by exact date key.

    Returns new cells; the input cells are left untouched. Padding cells are
    never annotated.
    """

    if data is None:
        return list(days)

    attendances = index_by_date(data.attendances, kind="attendance")
    leaves = index_by_date(data.leaves, kind="leave")

    merged: list[CalendarDay] = []
    for day in days:
        if not day.is_current_month:
            merged.append(day)
            continue
        merged.append(
            replace(
                day,
                attendance=attendances.get(day.date_key),
                leave=leaves.get(day.date_key),
            )
        )
    return merged
