from __future__ import annotations

from typing import Optional

from ..attendance.model import EmployeeContext
from ..common.validators import require_month_key
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..remote.client import AttendanceApiClient
from ..remote.codec import REVIEW_SUBORDINATE_FIELDS, REVIEW_SUPERVISOR_FIELDS, decode_review
from ..remote.retry import CallOutcome, ResilientCaller
from .model import PerformanceReview


class ReviewExchange:
    """Monthly review exchange between an employee and their manager.

    Staff write their own comment; managers score and comment on someone
    else's month. Each side only sends its half of the review.
    """

    def __init__(self, client: AttendanceApiClient, caller: ResilientCaller, ctx: EmployeeContext, *, role: Role):
        self._client = client
        self._caller = caller
        self._ctx = ctx
        self._role = role

    async def load(self, month_key: str, *, employee_id: Optional[int] = None) -> CallOutcome[Optional[PerformanceReview]]:
        month_key = require_month_key(month_key)
        target = self._ctx if employee_id is None else EmployeeContext(employee_id=employee_id, token=self._ctx.token)
        return await self._caller.call(
            lambda: self._client.fetch_performance(target, month_key),
            decode=decode_review,
            label=f"performance review {month_key}",
        )

    async def submit(self, review: PerformanceReview) -> CallOutcome:
        require_month_key(review.month)

        if self._role == Role.STAFF:
            if review.employee_id != self._ctx.employee_id:
                raise AuthorizationError("Staff can only comment on their own review")
            if not review.subordinate_input.strip():
                raise ValidationError("Comment is empty")
            fields = REVIEW_SUBORDINATE_FIELDS
        else:
            if review.employee_id == self._ctx.employee_id:
                raise AuthorizationError("Managers cannot score their own review")
            if not review.scored:
                raise ValidationError("Ability, behavior and attitude scores are required")
            fields = REVIEW_SUPERVISOR_FIELDS

        return await self._caller.call(
            lambda: self._client.submit_performance(self._ctx, review, fields=fields),
            label=f"submit performance review {review.month}",
        )
