from __future__ import annotations

from datetime import date, timedelta
from typing import Optional

from ..common.datetime_utils import days_between, month_bounds, sunday_based_weekday, to_date_key, today_local
from ..core.constants import DAYS_PER_WEEK
from .merge import merge_records
from .model import CalendarDay, MonthlyAttendanceData


def _padding_cell(value: date) -> CalendarDay:
    return CalendarDay(date=value, date_key=to_date_key(value), is_current_month=False)


def build_grid(
    year: int,
    month: int,
    data: Optional[MonthlyAttendanceData] = None,
    *,
    today: Optional[date] = None,
) -> list[CalendarDay]:
    """Build complete Sunday-to-Saturday weeks covering ``year``/``month``.

    Cells outside the month are padding (``is_current_month=False``) and are
    never annotated. Missing ``data`` simply yields an unannotated grid.

    Raises ValueError when the padding weeks would fall outside the range
    ``datetime.date`` can represent (0001-01 and 9999-12).
    """

    today = today or today_local()
    first, last = month_bounds(year, month)

    front = sunday_based_weekday(first)
    back = DAYS_PER_WEEK - 1 - sunday_based_weekday(last)
    try:
        grid_start = first - timedelta(days=front)
        grid_end = last + timedelta(days=back)
    except OverflowError as e:
        raise ValueError(f"{year:04d}-{month:02d} is outside the supported calendar range") from e

    cells: list[CalendarDay] = []
    for offset in range(front):
        cells.append(_padding_cell(grid_start + timedelta(days=offset)))

    for day in days_between(first, last):
        cells.append(
            CalendarDay(
                date=day,
                date_key=to_date_key(day),
                is_current_month=True,
                is_today=day == today,
            )
        )

    for offset in range(back - 1, -1, -1):
        cells.append(_padding_cell(grid_end - timedelta(days=offset)))

    return merge_records(cells, data)


def weeks(cells: list[CalendarDay]) -> list[list[CalendarDay]]:
    """Split a grid into rows of seven cells."""
    return [cells[i : i + DAYS_PER_WEEK] for i in range(0, len(cells), DAYS_PER_WEEK)]
