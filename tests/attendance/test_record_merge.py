import logging
from datetime import date, time

from src.timecard.timecard.attendance.grid import build_grid
from src.timecard.timecard.attendance.merge import merge_records
from src.timecard.timecard.attendance.model import (
    AttendanceRecord,
    LeaveRecord,
    MonthlyAttendanceData,
    OnLeaveDay,
    WorkedDay,
)
from src.timecard.timecard.core.enums import LeaveType

TODAY = date(2025, 4, 15)


def _worked(date_key: str, start=time(9, 0), end=time(18, 0)) -> AttendanceRecord:
    return AttendanceRecord(7, date_key, WorkedDay(start_time=start, end_time=end))


def test_cell_is_annotated_iff_a_record_has_its_date_key():
    data = MonthlyAttendanceData(
        attendances=(_worked("2025-04-03"), _worked("2025-04-04")),
        leaves=(LeaveRecord(7, "2025-04-10", LeaveType.SICK),),
    )

    grid = build_grid(2025, 4, data, today=TODAY)

    annotated = {d.date_key for d in grid if d.annotated}
    assert annotated == {"2025-04-03", "2025-04-04", "2025-04-10"}

    by_key = {d.date_key: d for d in grid if d.is_current_month}
    assert by_key["2025-04-03"].attendance.start_time == time(9, 0)
    assert by_key["2025-04-03"].leave is None
    assert by_key["2025-04-10"].leave.leave_type == LeaveType.SICK
    assert by_key["2025-04-10"].attendance is None


def test_cell_can_carry_both_attendance_and_leave():
    data = MonthlyAttendanceData(
        attendances=(AttendanceRecord(7, "2025-04-08", OnLeaveDay(LeaveType.PAID)),),
        leaves=(LeaveRecord(7, "2025-04-08", LeaveType.PAID),),
    )

    day = next(d for d in build_grid(2025, 4, data, today=TODAY) if d.date_key == "2025-04-08")

    assert day.attendance.leave_type == LeaveType.PAID
    assert day.leave.leave_type == LeaveType.PAID


def test_records_for_other_months_are_ignored():
    data = MonthlyAttendanceData(attendances=(_worked("2025-05-03"),))

    grid = build_grid(2025, 4, data, today=TODAY)

    assert not any(d.annotated for d in grid)


def test_first_duplicate_wins_and_is_reported(caplog):
    caplog.set_level(logging.WARNING)
    first = _worked("2025-04-03", start=time(8, 0))
    second = _worked("2025-04-03", start=time(10, 0))
    data = MonthlyAttendanceData(attendances=(first, second))

    day = next(d for d in build_grid(2025, 4, data, today=TODAY) if d.date_key == "2025-04-03")

    assert day.attendance is first
    assert any("Duplicate attendance record for 2025-04-03" in r.getMessage() for r in caplog.records)


def test_merge_is_idempotent():
    data = MonthlyAttendanceData(
        attendances=(_worked("2025-04-01"), _worked("2025-04-30")),
        leaves=(LeaveRecord(7, "2025-04-18", LeaveType.COMPENSATORY),),
    )
    blank = build_grid(2025, 4, today=TODAY)

    once = merge_records(blank, data)
    twice = merge_records(once, data)

    assert once == twice
    assert build_grid(2025, 4, data, today=TODAY) == once


def test_merge_does_not_touch_input_cells():
    blank = build_grid(2025, 4, today=TODAY)
    data = MonthlyAttendanceData(attendances=(_worked("2025-04-01"),))

    merge_records(blank, data)

    assert not any(d.annotated for d in blank)
