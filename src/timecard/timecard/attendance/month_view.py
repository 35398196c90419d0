from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Optional

from ..common.datetime_utils import shift_month, to_month_key, today_local
from ..remote.client import AttendanceApiClient
from ..remote.codec import decode_monthly
from ..remote.retry import ResilientCaller
from .grid import build_grid
from .model import CalendarDay, EmployeeContext, MonthlyAttendanceData

logger = logging.getLogger(__name__)


class MonthView:
    """Grid for the selected month, annotated once month data arrives.

    Every ``show`` bumps a request generation; a response is applied only while
    its generation is still the latest, so a slow response (for a month the
    user already left, or an older fetch of the same month) cannot overwrite
    the current grid.
    """

    def __init__(
        self,
        client: AttendanceApiClient,
        caller: ResilientCaller,
        ctx: EmployeeContext,
        *,
        today: Optional[Callable[[], date]] = None,
    ):
        self._client = client
        self._caller = caller
        self._ctx = ctx
        self._today = today or today_local
        self._generation = 0

        self.year: Optional[int] = None
        self.month: Optional[int] = None
        self.days: list[CalendarDay] = []
        self.data: Optional[MonthlyAttendanceData] = None
        self.error: Optional[str] = None

    @property
    def month_key(self) -> Optional[str]:
        if self.year is None or self.month is None:
            return None
        return to_month_key(date(self.year, self.month, 1))

    async def show(self, year: int, month: int) -> None:
        requested_key = to_month_key(date(year, month, 1))
        data = self.data if requested_key == self.month_key else None
        days = build_grid(year, month, data, today=self._today())

        self._generation += 1
        generation = self._generation
        self.year, self.month = year, month
        self.data, self.days = data, days
        self.error = None

        outcome = await self._caller.call(
            lambda: self._client.fetch_monthly(self._ctx, requested_key),
            decode=decode_monthly,
            label=f"monthly attendance {requested_key}",
        )

        if generation != self._generation:
            logger.debug("Discarding monthly response for %s (generation %d superseded)", requested_key, generation)
            return

        if not outcome.ok:
            self.error = outcome.message
            return

        self.data = outcome.value
        self.days = build_grid(year, month, self.data, today=self._today())

    async def reload(self) -> None:
        if self.year is None or self.month is None:
            return
        await self.show(self.year, self.month)

    async def previous(self) -> None:
        year, month = self._current_or_today()
        await self.show(*shift_month(year, month, -1))

    async def next(self) -> None:
        year, month = self._current_or_today()
        await self.show(*shift_month(year, month, 1))

    def dismiss_error(self) -> None:
        self.error = None

    def cell_for(self, date_key: str) -> Optional[CalendarDay]:
        for day in self.days:
            if day.date_key == date_key and day.is_current_month:
                return day
        return None

    def _current_or_today(self) -> tuple[int, int]:
        if self.year is None or self.month is None:
            today = self._today()
            return today.year, today.month
        return self.year, self.month
