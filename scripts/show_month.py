"""Print an employee's attendance calendar for one month.

Usage: python scripts/show_month.py <emplid> <YYYYMM> [token]
"""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import load_settings

from src.timecard.timecard.attendance.grid import weeks
from src.timecard.timecard.attendance.model import CalendarDay, EmployeeContext
from src.timecard.timecard.common.datetime_utils import format_time_of_day, parse_month_key
from src.timecard.timecard.container import client_container_from_settings


def _cell(day: CalendarDay) -> str:
    if not day.is_current_month:
        return "   .   "
    mark = "*" if day.is_today else " "
    if day.leave is not None:
        return f"{day.date.day:2d}{mark}L{int(day.leave.leave_type)}  "
    if day.attendance is not None and day.attendance.start_time is not None:
        return f"{day.date.day:2d}{mark}{format_time_of_day(day.attendance.start_time)}"[:7].ljust(7)
    return f"{day.date.day:2d}{mark}    "


async def _run(employee_id: int, month_key: str, token: str) -> int:
    container = client_container_from_settings(load_settings())
    screen = container.attendance_screen(EmployeeContext(employee_id=employee_id, token=token))
    try:
        await screen.open(*parse_month_key(month_key))
    finally:
        await container.transport.aclose()

    print(" Sun    Mon    Tue    Wed    Thu    Fri    Sat")
    for row in weeks(screen.month_view.days):
        print(" ".join(_cell(day) for day in row))
    for message in screen.messages:
        print(f"! {message}")
    return 1 if screen.messages else 0


def main() -> None:
    if len(sys.argv) < 3:
        print(__doc__)
        raise SystemExit(2)
    load_dotenv(override=False)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s [%(name)s] %(message)s")
    token = sys.argv[3] if len(sys.argv) > 3 else ""
    raise SystemExit(asyncio.run(_run(int(sys.argv[1]), sys.argv[2], token)))


if __name__ == "__main__":
    main()
