from __future__ import annotations

from datetime import date
from typing import Callable, Optional

from ..common.datetime_utils import today_local
from ..core.exceptions import ValidationError
from ..remote.client import AttendanceApiClient
from ..remote.retry import ResilientCaller
from .model import EmployeeContext
from .month_view import MonthView
from .session import DaySession


class AttendanceScreen:
    """Calendar on the left, selected-day form on the right."""

    def __init__(
        self,
        client: AttendanceApiClient,
        caller: ResilientCaller,
        ctx: EmployeeContext,
        *,
        today: Optional[Callable[[], date]] = None,
    ):
        self._today = today or today_local
        self.month_view = MonthView(client, caller, ctx, today=today)
        self.day = DaySession(client, caller, ctx, month_view=self.month_view)

    async def open(self, year: Optional[int] = None, month: Optional[int] = None) -> None:
        if year is None or month is None:
            today = self._today()
            year, month = today.year, today.month
        await self.month_view.show(year, month)

    async def previous_month(self) -> None:
        await self.month_view.previous()

    async def next_month(self) -> None:
        await self.month_view.next()

    async def select_date(self, date_key: str) -> None:
        cell = self.month_view.cell_for(date_key)
        if cell is None:
            raise ValidationError(f"{date_key} is not in the displayed month")
        await self.day.select(cell)

    async def submit(self) -> bool:
        return await self.day.submit()

    @property
    def messages(self) -> list[str]:
        return [m for m in (self.month_view.error, self.day.error) if m]

    def dismiss_messages(self) -> None:
        self.month_view.dismiss_error()
        self.day.dismiss_error()

    def close(self) -> None:
        self.day.close()
