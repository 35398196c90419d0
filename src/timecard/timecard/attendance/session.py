from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import time
from typing import Optional, Union

from ..common.datetime_utils import parse_time_of_day
from ..core.enums import DayState, LeaveType
from ..core.exceptions import ValidationError
from ..remote.client import AttendanceApiClient
from ..remote.codec import decode_daily
from ..remote.retry import CallOutcome, ResilientCaller
from .model import AttendanceRecord, CalendarDay, DayEntry, EmployeeContext, LeaveRecord, OnLeaveDay, WorkedDay
from .month_view import MonthView

logger = logging.getLogger(__name__)

TimeInput = Union[time, str, None]

_EDITABLE_STATES = (DayState.READY, DayState.EDITING, DayState.ERROR)


@dataclass
class DayForm:
    """Editable fields of the selected day.

    Times and leave type are alternatives: a chosen leave type clears the
    times and blocks entering new ones.
    """

    start_time: Optional[time] = None
    end_time: Optional[time] = None
    leave_type: Optional[LeaveType] = None

    @classmethod
    def from_record(cls, record: AttendanceRecord) -> "DayForm":
        return cls(start_time=record.start_time, end_time=record.end_time, leave_type=record.leave_type)

    def to_entry(self) -> DayEntry:
        if self.leave_type:
            return OnLeaveDay(self.leave_type)
        if self.start_time is None and self.end_time is None:
            return None
        return WorkedDay(start_time=self.start_time, end_time=self.end_time)

    def validate(self) -> None:
        if self.leave_type and (self.start_time or self.end_time):
            raise ValidationError("A leave day cannot have clock-in/clock-out times")
        if self.start_time and self.end_time and self.end_time < self.start_time:
            raise ValidationError("End time must not be earlier than start time")


def _coerce_time(value: TimeInput) -> Optional[time]:
    if value is None or isinstance(value, time):
        return value
    try:
        return parse_time_of_day(value)
    except ValueError:
        raise ValidationError("Time must be HH:MM")


def _coerce_leave_type(value: Union[LeaveType, int, None]) -> Optional[LeaveType]:
    if not value:
        return None
    try:
        return LeaveType(int(value))
    except (TypeError, ValueError):
        raise ValidationError(f"leave_type must be one of {[int(t) for t in LeaveType]}")


class DaySession:
    """Selected day editor: fetch on select, edit, submit, then re-sync.

    Every selection bumps a generation counter; a fetch or submit that
    resolves after the user moved to another day is dropped.
    """

    def __init__(
        self,
        client: AttendanceApiClient,
        caller: ResilientCaller,
        ctx: EmployeeContext,
        *,
        month_view: Optional[MonthView] = None,
    ):
        self._client = client
        self._caller = caller
        self._ctx = ctx
        self._month_view = month_view
        self._generation = 0

        self.state = DayState.IDLE
        self.day: Optional[CalendarDay] = None
        self.record: Optional[AttendanceRecord] = None
        self.form = DayForm()
        self.error: Optional[str] = None

    @property
    def selected_date(self) -> Optional[str]:
        return self.day.date_key if self.day else None

    @property
    def generation(self) -> int:
        return self._generation

    async def select(self, day: CalendarDay) -> None:
        if not day.selectable:
            raise ValidationError("Days outside the displayed month cannot be edited")

        self._generation += 1
        generation = self._generation
        self.day = day
        self.record = None
        self.form = DayForm()
        self.error = None
        self.state = DayState.LOADING

        await self._load(generation, day.date_key)

    def close(self) -> None:
        """Forget the selection (leaving the screen); pending responses are dropped."""
        self._generation += 1
        self.state = DayState.IDLE
        self.day = None
        self.record = None
        self.form = DayForm()
        self.error = None

    def set_leave_type(self, value: Union[LeaveType, int, None]) -> None:
        leave_type = _coerce_leave_type(value)
        self._begin_edit()
        if leave_type:
            self.form.start_time = None
            self.form.end_time = None
        self.form.leave_type = leave_type

    def set_start_time(self, value: TimeInput) -> None:
        self._reject_time_on_leave()
        start_time = _coerce_time(value)
        self._begin_edit()
        self.form.start_time = start_time

    def set_end_time(self, value: TimeInput) -> None:
        self._reject_time_on_leave()
        end_time = _coerce_time(value)
        self._begin_edit()
        self.form.end_time = end_time

    def dismiss_error(self) -> None:
        self.error = None

    async def submit(self) -> bool:
        """Send the form; on success re-fetch the month grid and the day record."""

        if self.state not in _EDITABLE_STATES or self.record is None or self.day is None:
            raise ValidationError("No day is ready to be submitted")
        self.form.validate()

        generation = self._generation
        previous = self.record
        date_key = self.day.date_key
        record = AttendanceRecord(employee_id=self._ctx.employee_id, date=date_key, entry=self.form.to_entry())

        self.state = DayState.SUBMITTING
        self.error = None

        outcome = await self._caller.call(
            lambda: self._client.update_attendance(self._ctx, record),
            label=f"update attendance {date_key}",
        )
        if outcome.ok:
            outcome = await self._sync_leave(record, previous)

        if generation != self._generation:
            logger.debug("Submit for %s finished after selection changed; not applied", date_key)
            return outcome.ok

        if not outcome.ok:
            self.state = DayState.ERROR
            self.error = outcome.message
            return False

        await self._refresh(generation, date_key)
        return True

    async def _sync_leave(self, record: AttendanceRecord, previous: AttendanceRecord) -> CallOutcome:
        if isinstance(record.entry, OnLeaveDay):
            leave = LeaveRecord(employee_id=record.employee_id, date=record.date, leave_type=record.entry.leave_type)
            return await self._caller.call(
                lambda: self._client.create_leave(self._ctx, leave),
                label=f"create leave {record.date}",
            )

        had_leave = previous.leave_type is not None or (self.day is not None and self.day.leave is not None)
        if had_leave:
            return await self._caller.call(
                lambda: self._client.delete_leave(self._ctx, record.date),
                label=f"delete leave {record.date}",
            )
        return CallOutcome(attempts=0)

    async def _refresh(self, generation: int, date_key: str) -> None:
        pending = [self._load(generation, date_key)]
        if self._month_view is not None:
            pending.append(self._month_view.reload())
        await asyncio.gather(*pending)

        if self._month_view is not None and generation == self._generation:
            self.day = self._month_view.cell_for(date_key) or self.day

    async def _load(self, generation: int, date_key: str) -> None:
        outcome = await self._caller.call(
            lambda: self._client.fetch_daily(self._ctx, date_key),
            decode=decode_daily(self._ctx.employee_id, date_key),
            label=f"daily attendance {date_key}",
        )

        if generation != self._generation:
            logger.debug("Discarding daily response for %s (generation %d superseded)", date_key, generation)
            return

        if not outcome.ok:
            self.state = DayState.ERROR
            self.error = outcome.message
            return

        self.record = outcome.value
        self.form = DayForm.from_record(self.record)
        self.state = DayState.READY

    def _begin_edit(self) -> None:
        if self.state not in _EDITABLE_STATES or self.record is None:
            raise ValidationError("Select a day before editing")
        self.state = DayState.EDITING

    def _reject_time_on_leave(self) -> None:
        if self.form.leave_type:
            raise ValidationError("Clear the leave type before entering times")
