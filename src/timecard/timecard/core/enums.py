from __future__ import annotations

from enum import Enum, IntEnum


class Role(str, Enum):
    """Employee role used when exchanging performance reviews."""

    STAFF = "staff"
    MANAGER = "manager"


class LeaveType(IntEnum):
    """Leave codes stored by the record store (fixed set of 8)."""

    PAID = 1
    HALF_DAY_AM = 2
    HALF_DAY_PM = 3
    SPECIAL = 4
    SICK = 5
    BEREAVEMENT = 6
    COMPENSATORY = 7
    ABSENCE = 8


class FailureKind(str, Enum):
    """How a failed remote call is treated by the retry layer."""

    TRANSIENT = "TRANSIENT"
    NETWORK = "NETWORK"
    TERMINAL = "TERMINAL"

    @property
    def retryable(self) -> bool:
        return self is not FailureKind.TERMINAL


class DayState(str, Enum):
    """States of the selected-day editor."""

    IDLE = "IDLE"
    LOADING = "LOADING"
    READY = "READY"
    EDITING = "EDITING"
    SUBMITTING = "SUBMITTING"
    ERROR = "ERROR"
