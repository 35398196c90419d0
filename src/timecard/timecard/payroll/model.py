from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SalaryStatement:
    """Monthly pay slip: earnings minus statutory deductions."""

    employee_id: int
    month: str
    basic_salary: int
    overtime_allowance: int
    health_insurance: int
    nursing_care_insurance: int
    pension: int
    employment_insurance: int
    income_tax: int
    resident_tax: int

    @property
    def gross(self) -> int:
        return self.basic_salary + self.overtime_allowance

    @property
    def total_deductions(self) -> int:
        return (
            self.health_insurance
            + self.nursing_care_insurance
            + self.pension
            + self.employment_insurance
            + self.income_tax
            + self.resident_tax
        )

    @property
    def take_home(self) -> int:
        return self.gross - self.total_deductions
