from __future__ import annotations

from typing import Optional

from ..core.constants import MAX_REVIEW_SCORE, MIN_REVIEW_SCORE
from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date, parse_month_key


def require_employee_id(value) -> int:
    try:
        employee_id = int(value)
    except (TypeError, ValueError):
        raise ValidationError("emplid is not a valid number")
    if employee_id <= 0:
        raise ValidationError("emplid must be positive")
    return employee_id


def require_date_key(value: Optional[str], field_name: str = "date") -> str:
    v = (value or "").strip()
    try:
        parse_iso_date(v)
    except ValueError:
        raise ValidationError(f"{field_name} must be YYYY-MM-DD")
    return v


def require_month_key(value: Optional[str], field_name: str = "month") -> str:
    v = (value or "").strip()
    try:
        parse_month_key(v)
    except ValueError:
        raise ValidationError(f"{field_name} must be YYYYMM")
    return v


def optional_score(value, field_name: str) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        score = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if not MIN_REVIEW_SCORE <= score <= MAX_REVIEW_SCORE:
        raise ValidationError(f"{field_name} must be between {MIN_REVIEW_SCORE} and {MAX_REVIEW_SCORE}")
    return score
