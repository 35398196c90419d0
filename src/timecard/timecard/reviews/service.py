from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Optional

from ..common.validators import optional_score, require_employee_id, require_month_key
from ..core.exceptions import ValidationError
from .model import PerformanceReview
from .repository import ReviewRepository

logger = logging.getLogger(__name__)

_SCORE_FIELDS = ("supervisor_ability", "supervisor_behavior", "supervisor_attitude")
_TEXT_FIELDS = ("subordinate_input", "supervisor_input")


class ReviewService:
    """Upsert of monthly reviews.

    The employee and the manager write different halves of the same review,
    so only the fields present in a submission overwrite the stored row.
    """

    def __init__(self, reviews: ReviewRepository):
        self._reviews = reviews

    def get_review(self, *, employee_id: Any, month_key: Optional[str]) -> Optional[PerformanceReview]:
        employee_id = require_employee_id(employee_id)
        month_key = require_month_key(month_key)
        return self._reviews.get_review(employee_id=employee_id, month=month_key)

    def submit(self, payload: Any) -> PerformanceReview:
        if not isinstance(payload, dict):
            raise ValidationError("Invalid input")

        employee_id = require_employee_id(payload.get("emplid"))
        month_key = require_month_key(payload.get("month"))

        changes: dict[str, Any] = {}
        for name in _SCORE_FIELDS:
            if name in payload:
                changes[name] = optional_score(payload.get(name), name)
        for name in _TEXT_FIELDS:
            if name in payload:
                changes[name] = str(payload.get(name) or "").strip()

        if not changes:
            raise ValidationError("Nothing to save")

        current = self._reviews.get_review(employee_id=employee_id, month=month_key)
        review = replace(current or PerformanceReview(employee_id=employee_id, month=month_key), **changes)

        self._reviews.upsert_review(review)
        logger.info("Performance review saved for employee %s (%s): %s", employee_id, month_key, sorted(changes))
        return review
