from __future__ import annotations

import asyncio
import logging

import pytest

from src.timecard.timecard.core.enums import FailureKind
from src.timecard.timecard.core.exceptions import NetworkUnreachableError
from src.timecard.timecard.remote.retry import ResilientCaller
from src.timecard.timecard.remote.transport import RemoteResponse

UNAVAILABLE = RemoteResponse(503, {"error": "record store unavailable: connection refused", "code": "STORE_UNAVAILABLE"})
OK = RemoteResponse(200, {"message": "ok"})
BAD_REQUEST = RemoteResponse(400, {"error": "date must be YYYY-MM-DD"})


class ScriptedOperation:
    """Returns (or raises) the scripted results in order; the last one repeats."""

    def __init__(self, *results):
        self._results = list(results)
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        result = self._results.pop(0) if len(self._results) > 1 else self._results[0]
        if isinstance(result, Exception):
            raise result
        return result


class RecordingSleep:
    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


def _caller(**kwargs):
    sleep = RecordingSleep()
    return ResilientCaller(sleep=sleep, **kwargs), sleep


def test_transient_on_every_attempt_makes_exactly_max_attempts_calls():
    caller, sleep = _caller()
    op = ScriptedOperation(UNAVAILABLE)

    outcome = asyncio.run(caller.call(op))

    assert op.calls == 3
    assert not outcome.ok
    assert outcome.failure == FailureKind.TRANSIENT
    assert outcome.attempts == 3
    assert "record store unavailable" in outcome.message
    # fixed delay, no wait after the last attempt
    assert sleep.delays == [1.0, 1.0]


@pytest.mark.parametrize("k", [1, 2, 3])
def test_success_on_attempt_k_makes_exactly_k_calls(k):
    caller, sleep = _caller()
    op = ScriptedOperation(*([UNAVAILABLE] * (k - 1) + [OK]))

    outcome = asyncio.run(caller.call(op))

    assert outcome.ok
    assert outcome.value == {"message": "ok"}
    assert op.calls == k
    assert len(sleep.delays) == k - 1


def test_terminal_failure_short_circuits():
    caller, sleep = _caller(max_attempts=3)
    op = ScriptedOperation(BAD_REQUEST, OK)

    outcome = asyncio.run(caller.call(op))

    assert op.calls == 1
    assert outcome.failure == FailureKind.TERMINAL
    assert outcome.message == "date must be YYYY-MM-DD"
    assert sleep.delays == []


def test_terminal_after_transient_stops_immediately():
    caller, sleep = _caller()
    op = ScriptedOperation(UNAVAILABLE, RemoteResponse(401, {"error": "unauthorized"}), OK)

    outcome = asyncio.run(caller.call(op))

    assert op.calls == 2
    assert outcome.failure == FailureKind.TERMINAL
    assert sleep.delays == [1.0]


def test_marker_text_without_code_is_still_transient():
    caller, _ = _caller()
    op = ScriptedOperation(RemoteResponse(500, {"error": "Record store unavailable, try later"}), OK)

    outcome = asyncio.run(caller.call(op))

    assert outcome.ok
    assert op.calls == 2


def test_network_error_is_retried_and_last_message_is_surfaced():
    caller, sleep = _caller(base_delay_ms=250)
    op = ScriptedOperation(
        NetworkUnreachableError("first"),
        NetworkUnreachableError("second"),
        NetworkUnreachableError("Connection refused by store:8080"),
    )

    outcome = asyncio.run(caller.call(op))

    assert op.calls == 3
    assert outcome.failure == FailureKind.NETWORK
    assert outcome.message == "Connection refused by store:8080"
    assert sleep.delays == [0.25, 0.25]


def test_network_error_then_success():
    caller, _ = _caller()
    op = ScriptedOperation(NetworkUnreachableError("timeout"), OK)

    outcome = asyncio.run(caller.call(op))

    assert outcome.ok
    assert op.calls == 2


def test_per_call_overrides():
    caller, sleep = _caller()
    op = ScriptedOperation(UNAVAILABLE)

    outcome = asyncio.run(caller.call(op, max_attempts=5, base_delay_ms=10))

    assert op.calls == 5
    assert outcome.attempts == 5
    assert sleep.delays == [0.01] * 4


def test_single_attempt_never_sleeps():
    caller, sleep = _caller(max_attempts=1)
    op = ScriptedOperation(UNAVAILABLE)

    asyncio.run(caller.call(op))

    assert op.calls == 1
    assert sleep.delays == []


def test_invalid_attempt_budget_is_rejected():
    caller, _ = _caller()

    with pytest.raises(ValueError):
        asyncio.run(caller.call(ScriptedOperation(OK), max_attempts=0))


def test_decode_failure_is_terminal_and_not_retried():
    caller, _ = _caller()
    op = ScriptedOperation(RemoteResponse(200, {"unexpected": True}))

    def decode(payload):
        return payload["attendances"]

    outcome = asyncio.run(caller.call(op, decode=decode))

    assert op.calls == 1
    assert outcome.failure == FailureKind.TERMINAL
    assert outcome.message.startswith("Malformed response")


def test_unexpected_exception_is_terminal_and_not_retried():
    caller, sleep = _caller()
    op = ScriptedOperation(RuntimeError("response could not be read"), OK)

    outcome = asyncio.run(caller.call(op))

    assert op.calls == 1
    assert outcome.failure == FailureKind.TERMINAL
    assert outcome.message == "response could not be read"
    assert outcome.attempts == 1
    assert sleep.delays == []


def test_exception_without_message_reports_its_type():
    caller, _ = _caller()

    outcome = asyncio.run(caller.call(ScriptedOperation(LookupError())))

    assert outcome.failure == FailureKind.TERMINAL
    assert outcome.message == "LookupError"


def test_non_json_success_body_is_terminal_when_decoding():
    caller, _ = _caller()
    op = ScriptedOperation(RemoteResponse(200, None, text="<html>proxy login</html>", is_json=False))

    outcome = asyncio.run(caller.call(op, decode=lambda p: p))

    assert op.calls == 1
    assert outcome.failure == FailureKind.TERMINAL
    assert outcome.message.startswith("Malformed response")


def test_non_json_body_is_accepted_without_decoder():
    caller, _ = _caller()

    outcome = asyncio.run(caller.call(ScriptedOperation(RemoteResponse(200, None, text="OK", is_json=False))))

    assert outcome.ok


def test_decoded_value_is_returned():
    caller, _ = _caller()

    outcome = asyncio.run(caller.call(ScriptedOperation(OK), decode=lambda p: p["message"].upper()))

    assert outcome.value == "OK"


def test_one_trace_line_per_attempt(caplog):
    caplog.set_level(logging.INFO)
    caller, _ = _caller()

    asyncio.run(caller.call(ScriptedOperation(UNAVAILABLE, UNAVAILABLE, OK), label="daily attendance"))

    traces = [r.getMessage() for r in caplog.records if "attempt" in r.getMessage() and r.levelno == logging.INFO]
    assert traces == [
        "daily attendance: attempt 1/3",
        "daily attendance: attempt 2/3",
        "daily attendance: attempt 3/3",
    ]
