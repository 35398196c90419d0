from __future__ import annotations

from typing import Any, Optional

from ..common.validators import require_employee_id, require_month_key
from ..core.exceptions import NotFoundError
from .model import SalaryStatement
from .repository import SalaryRepository


class SalaryService:
    def __init__(self, salaries: SalaryRepository):
        self._salaries = salaries

    def get_statement(self, *, employee_id: Any, month_key: Optional[str]) -> SalaryStatement:
        employee_id = require_employee_id(employee_id)
        month_key = require_month_key(month_key)

        statement = self._salaries.get_statement(employee_id=employee_id, month=month_key)
        if statement is None:
            raise NotFoundError(f"No salary statement for {month_key}")
        return statement
