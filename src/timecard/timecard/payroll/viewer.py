from __future__ import annotations

import logging
from typing import Optional

from ..attendance.model import EmployeeContext
from ..common.validators import require_month_key
from ..remote.client import AttendanceApiClient
from ..remote.codec import decode_salary
from ..remote.retry import ResilientCaller
from .model import SalaryStatement

logger = logging.getLogger(__name__)


class SalaryViewer:
    """Salary statement of the selected month."""

    def __init__(self, client: AttendanceApiClient, caller: ResilientCaller, ctx: EmployeeContext):
        self._client = client
        self._caller = caller
        self._ctx = ctx
        self._generation = 0

        self.month_key: Optional[str] = None
        self.statement: Optional[SalaryStatement] = None
        self.error: Optional[str] = None

    async def show(self, month_key: str) -> Optional[SalaryStatement]:
        month_key = require_month_key(month_key)
        self._generation += 1
        generation = self._generation
        self.month_key = month_key
        self.statement = None
        self.error = None

        outcome = await self._caller.call(
            lambda: self._client.fetch_salary(self._ctx, month_key),
            decode=decode_salary,
            label=f"salary {month_key}",
        )
        if generation != self._generation:
            logger.debug("Discarding salary response for %s", month_key)
            return None

        if not outcome.ok:
            self.error = outcome.message
            return None
        self.statement = outcome.value
        return self.statement

    def dismiss_error(self) -> None:
        self.error = None
