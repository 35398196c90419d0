from __future__ import annotations

from typing import Optional, Protocol

from .model import SalaryStatement


class SalaryRepository(Protocol):
    def get_statement(self, *, employee_id: int, month: str) -> Optional[SalaryStatement]:
        raise NotImplementedError
