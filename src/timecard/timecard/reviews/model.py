from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class PerformanceReview:
    """Monthly review: the employee's own comment plus the manager's scores (1-5)."""

    employee_id: int
    month: str
    subordinate_input: str = ""
    supervisor_ability: Optional[int] = None
    supervisor_behavior: Optional[int] = None
    supervisor_attitude: Optional[int] = None
    supervisor_input: str = ""

    @property
    def scored(self) -> bool:
        return None not in (self.supervisor_ability, self.supervisor_behavior, self.supervisor_attitude)
