from __future__ import annotations

from typing import Optional, Protocol

from .model import PerformanceReview


class ReviewRepository(Protocol):
    def get_review(self, *, employee_id: int, month: str) -> Optional[PerformanceReview]:
        raise NotImplementedError

    def upsert_review(self, review: PerformanceReview) -> None:
        raise NotImplementedError
