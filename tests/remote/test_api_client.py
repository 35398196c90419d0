from __future__ import annotations

import asyncio
import json
from datetime import time

import httpx
import pytest

from src.timecard.timecard.attendance.model import AttendanceRecord, EmployeeContext, LeaveRecord, OnLeaveDay, WorkedDay
from src.timecard.timecard.core.enums import FailureKind, LeaveType
from src.timecard.timecard.core.exceptions import NetworkUnreachableError, RemoteProtocolError
from src.timecard.timecard.remote.client import AttendanceApiClient
from src.timecard.timecard.remote.codec import REVIEW_SUBORDINATE_FIELDS, decode_daily
from src.timecard.timecard.remote.transport import HttpxTransport, RemoteResponse, classify_failure
from src.timecard.timecard.reviews.model import PerformanceReview

CTX = EmployeeContext(employee_id=42, token="opaque.token-value")


class RecordingHandler:
    def __init__(self, response: httpx.Response | None = None, error: Exception | None = None):
        self.requests: list[httpx.Request] = []
        self._response = response or httpx.Response(200, json={"message": "ok"})
        self._error = error

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self._error is not None:
            raise self._error
        return self._response


def _client(handler: RecordingHandler) -> AttendanceApiClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://store")
    return AttendanceApiClient(HttpxTransport("http://store", client=http))


def test_bearer_token_is_forwarded_unchanged():
    handler = RecordingHandler(httpx.Response(200, json={"attendances": [], "leaves": []}))

    asyncio.run(_client(handler).fetch_monthly(CTX, "202504"))

    request = handler.requests[0]
    assert request.headers["Authorization"] == "Bearer opaque.token-value"
    assert request.method == "GET"
    assert request.url.path == "/attendance/42/monthly"
    assert request.url.params["month"] == "202504"


def test_fetch_daily_uses_date_key():
    handler = RecordingHandler(httpx.Response(200, json={}))

    response = asyncio.run(_client(handler).fetch_daily(CTX, "2025-04-09"))

    assert response.ok
    assert response.payload == {}
    assert handler.requests[0].url.path == "/attendance/42/daily"
    assert handler.requests[0].url.params["date"] == "2025-04-09"


def test_update_attendance_for_leave_day_omits_times():
    handler = RecordingHandler()
    record = AttendanceRecord(42, "2025-04-09", OnLeaveDay(LeaveType.PAID))

    asyncio.run(_client(handler).update_attendance(CTX, record))

    request = handler.requests[0]
    body = json.loads(request.content)
    assert request.method == "PUT"
    assert body == {"emplid": 42, "date": "2025-04-09", "leave_type": 1}


def test_update_attendance_for_worked_day_sends_times():
    handler = RecordingHandler()
    record = AttendanceRecord(42, "2025-04-09", WorkedDay(start_time=time(9, 0), end_time=time(17, 45)))

    asyncio.run(_client(handler).update_attendance(CTX, record))

    body = json.loads(handler.requests[0].content)
    assert body == {"emplid": 42, "date": "2025-04-09", "start_time": "09:00", "end_time": "17:45"}


def test_leave_create_and_delete_routes():
    handler = RecordingHandler()
    client = _client(handler)

    async def scenario():
        await client.create_leave(CTX, LeaveRecord(42, "2025-04-10", LeaveType.SICK))
        await client.delete_leave(CTX, "2025-04-10")

    asyncio.run(scenario())

    create, delete = handler.requests
    assert (create.method, create.url.path) == ("POST", "/leave")
    assert json.loads(create.content) == {"emplid": 42, "date": "2025-04-10", "leave_type": 5}
    assert (delete.method, delete.url.path) == ("DELETE", "/leave/42")
    assert delete.url.params["date"] == "2025-04-10"


def test_salary_and_performance_routes():
    handler = RecordingHandler()
    client = _client(handler)
    review = PerformanceReview(42, "202504", subordinate_input="Shipped the release", supervisor_input="ignored")

    async def scenario():
        await client.fetch_salary(CTX, "202504")
        await client.submit_performance(CTX, review, fields=REVIEW_SUBORDINATE_FIELDS)
        await client.fetch_performance(CTX, "202504")

    asyncio.run(scenario())

    salary, submit, fetch = handler.requests
    assert salary.url.path == "/salary/42"
    assert json.loads(submit.content) == {"emplid": 42, "month": "202504", "subordinate_input": "Shipped the release"}
    assert fetch.url.path == "/performance/42"


def test_connection_failure_becomes_network_unreachable():
    handler = RecordingHandler(error=httpx.ConnectError("Connection refused"))

    with pytest.raises(NetworkUnreachableError, match="Connection refused"):
        asyncio.run(_client(handler).fetch_daily(CTX, "2025-04-09"))


def test_non_json_error_body_is_kept_as_text():
    handler = RecordingHandler(httpx.Response(502, text="Bad Gateway"))

    response = asyncio.run(_client(handler).fetch_daily(CTX, "2025-04-09"))

    assert response.payload is None
    assert response.text == "Bad Gateway"
    assert classify_failure(response) == FailureKind.TERMINAL


def test_unreadable_body_becomes_remote_protocol_error():
    handler = RecordingHandler(httpx.Response(200, content=b"not gzip at all", headers={"Content-Encoding": "gzip"}))

    with pytest.raises(RemoteProtocolError):
        asyncio.run(_client(handler).fetch_daily(CTX, "2025-04-09"))


def test_success_body_that_is_not_json_is_flagged():
    handler = RecordingHandler(httpx.Response(200, text="<html>maintenance</html>"))

    response = asyncio.run(_client(handler).fetch_daily(CTX, "2025-04-09"))

    assert response.ok
    assert response.is_json is False
    assert response.payload is None


def test_json_null_body_is_json():
    handler = RecordingHandler(httpx.Response(200, content=b"null", headers={"Content-Type": "application/json"}))

    response = asyncio.run(_client(handler).fetch_daily(CTX, "2025-04-09"))

    assert response.is_json is True
    assert response.payload is None


def test_daily_decoder_only_treats_null_and_empty_object_as_no_record():
    decode = decode_daily(42, "2025-04-09")

    assert decode(None).is_empty
    assert decode({}).is_empty
    with pytest.raises(TypeError):
        decode([])
    with pytest.raises(TypeError):
        decode("")


@pytest.mark.parametrize(
    "response, expected",
    [
        (RemoteResponse(200, {}), None),
        (RemoteResponse(503, {"error": "down", "code": "STORE_UNAVAILABLE"}), FailureKind.TRANSIENT),
        (RemoteResponse(500, {"error": "record store unavailable: timeout"}), FailureKind.TRANSIENT),
        (RemoteResponse(500, {"error": "duplicate key"}), FailureKind.TERMINAL),
        (RemoteResponse(401, {"error": "unauthorized"}), FailureKind.TERMINAL),
        (RemoteResponse(404, None, ""), FailureKind.TERMINAL),
    ],
)
def test_classify_failure(response, expected):
    assert classify_failure(response) == expected
