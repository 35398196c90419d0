from __future__ import annotations

from typing import Optional, Sequence

from ..attendance.model import AttendanceRecord, EmployeeContext, LeaveRecord
from ..reviews.model import PerformanceReview
from .codec import encode_attendance, encode_leave, encode_review
from .transport import RemoteResponse, Transport


class AttendanceApiClient:
    """Record store endpoints, one coroutine per remote operation.

    Each method performs exactly one request; retrying is the caller's job
    (see ResilientCaller).
    """

    def __init__(self, transport: Transport):
        self._transport = transport

    async def fetch_monthly(self, ctx: EmployeeContext, month_key: str) -> RemoteResponse:
        return await self._transport.request(
            "GET",
            f"/attendance/{ctx.employee_id}/monthly",
            token=ctx.token,
            params={"month": month_key},
        )

    async def fetch_daily(self, ctx: EmployeeContext, date_key: str) -> RemoteResponse:
        return await self._transport.request(
            "GET",
            f"/attendance/{ctx.employee_id}/daily",
            token=ctx.token,
            params={"date": date_key},
        )

    async def update_attendance(self, ctx: EmployeeContext, record: AttendanceRecord) -> RemoteResponse:
        return await self._transport.request("PUT", "/attendance", token=ctx.token, json=encode_attendance(record))

    async def create_leave(self, ctx: EmployeeContext, leave: LeaveRecord) -> RemoteResponse:
        return await self._transport.request("POST", "/leave", token=ctx.token, json=encode_leave(leave))

    async def delete_leave(self, ctx: EmployeeContext, date_key: str) -> RemoteResponse:
        return await self._transport.request(
            "DELETE",
            f"/leave/{ctx.employee_id}",
            token=ctx.token,
            params={"date": date_key},
        )

    async def fetch_salary(self, ctx: EmployeeContext, month_key: str) -> RemoteResponse:
        return await self._transport.request(
            "GET",
            f"/salary/{ctx.employee_id}",
            token=ctx.token,
            params={"month": month_key},
        )

    async def submit_performance(
        self,
        ctx: EmployeeContext,
        review: PerformanceReview,
        *,
        fields: Optional[Sequence[str]] = None,
    ) -> RemoteResponse:
        return await self._transport.request(
            "POST",
            "/performance",
            token=ctx.token,
            json=encode_review(review, fields=fields),
        )

    async def fetch_performance(self, ctx: EmployeeContext, month_key: str) -> RemoteResponse:
        return await self._transport.request(
            "GET",
            f"/performance/{ctx.employee_id}",
            token=ctx.token,
            params={"month": month_key},
        )
