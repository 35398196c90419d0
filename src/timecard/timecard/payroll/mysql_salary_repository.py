from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import SalaryStatement
from .repository import SalaryRepository


class MySQLSalaryRepository(SalaryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_statement(self, *, employee_id: int, month: str) -> Optional[SalaryStatement]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT emplid, pay_month, basic_salary, overtime_allowance, health_insurance,
                       nursing_care_insurance, pension, employment_insurance, income_tax, resident_tax
                FROM salary_statements
                WHERE emplid=%s AND pay_month=%s
                """,
                (int(employee_id), month),
            )
            r = fetchone(cur)
            if not r:
                return None
            return SalaryStatement(
                employee_id=int(r["emplid"]),
                month=str(r["pay_month"]),
                basic_salary=int(r["basic_salary"] or 0),
                overtime_allowance=int(r["overtime_allowance"] or 0),
                health_insurance=int(r["health_insurance"] or 0),
                nursing_care_insurance=int(r["nursing_care_insurance"] or 0),
                pension=int(r["pension"] or 0),
                employment_insurance=int(r["employment_insurance"] or 0),
                income_tax=int(r["income_tax"] or 0),
                resident_tax=int(r["resident_tax"] or 0),
            )
