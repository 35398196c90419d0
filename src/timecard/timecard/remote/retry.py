from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, Optional, TypeVar

from ..core.constants import DEFAULT_BASE_DELAY_MS, DEFAULT_MAX_ATTEMPTS
from ..core.enums import FailureKind
from ..core.exceptions import NetworkUnreachableError
from .transport import RemoteResponse, classify_failure, error_message

logger = logging.getLogger(__name__)

T = TypeVar("T")

Operation = Callable[[], Awaitable[RemoteResponse]]


@dataclass(frozen=True)
class CallOutcome(Generic[T]):
    """Single pass/fail result of a (possibly retried) remote call."""

    value: Optional[T] = None
    failure: Optional[FailureKind] = None
    message: Optional[str] = None
    attempts: int = 0

    @property
    def ok(self) -> bool:
        return self.failure is None


class ResilientCaller:
    """Bounded retry with a fixed delay between attempts.

    Transient (store unavailable) and network failures are retried until the
    attempt budget is used up; terminal failures return at once.
    """

    def __init__(
        self,
        *,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        base_delay_ms: int = DEFAULT_BASE_DELAY_MS,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self._max_attempts = int(max_attempts)
        self._base_delay_ms = int(base_delay_ms)
        self._sleep = sleep

    async def call(
        self,
        operation: Operation,
        *,
        decode: Optional[Callable[[Any], T]] = None,
        max_attempts: Optional[int] = None,
        base_delay_ms: Optional[int] = None,
        label: str = "remote call",
    ) -> CallOutcome[T]:
        total = int(max_attempts if max_attempts is not None else self._max_attempts)
        if total < 1:
            raise ValueError("max_attempts must be at least 1")
        delay_ms = int(base_delay_ms if base_delay_ms is not None else self._base_delay_ms)

        failure = FailureKind.TERMINAL
        message = ""
        for attempt in range(1, total + 1):
            logger.info("%s: attempt %d/%d", label, attempt, total)
            try:
                response = await operation()
            except NetworkUnreachableError as e:
                failure, message = FailureKind.NETWORK, str(e)
            except Exception as e:
                message = str(e) or e.__class__.__name__
                logger.warning("%s: terminal failure (%s): %s", label, e.__class__.__name__, message)
                return CallOutcome(failure=FailureKind.TERMINAL, message=message, attempts=attempt)
            else:
                kind = classify_failure(response)
                if kind is None:
                    return self._decoded(response, decode, attempt=attempt, label=label)

                failure, message = kind, error_message(response)
                if kind is FailureKind.TERMINAL:
                    logger.warning("%s: terminal failure (HTTP %d): %s", label, response.status_code, message)
                    return CallOutcome(failure=failure, message=message, attempts=attempt)

            if attempt < total:
                logger.warning("%s: %s failure, retrying in %dms", label, failure.value.lower(), delay_ms)
                await self._sleep(delay_ms / 1000)

        logger.error("%s: giving up after %d attempts: %s", label, total, message)
        return CallOutcome(failure=failure, message=message, attempts=total)

    @staticmethod
    def _decoded(response: RemoteResponse, decode, *, attempt: int, label: str) -> CallOutcome:
        if decode is None:
            return CallOutcome(value=response.payload, attempts=attempt)
        if not response.is_json:
            logger.warning("%s: response body is not JSON", label)
            return CallOutcome(failure=FailureKind.TERMINAL, message="Malformed response: body is not JSON", attempts=attempt)
        try:
            value = decode(response.payload)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("%s: malformed response: %s", label, e)
            return CallOutcome(failure=FailureKind.TERMINAL, message=f"Malformed response: {e}", attempts=attempt)
        return CallOutcome(value=value, attempts=attempt)
