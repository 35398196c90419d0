from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import PerformanceReview
from .repository import ReviewRepository


class MySQLReviewRepository(ReviewRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_review(self, *, employee_id: int, month: str) -> Optional[PerformanceReview]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT emplid, review_month, subordinate_input, supervisor_ability,
                       supervisor_behavior, supervisor_attitude, supervisor_input
                FROM performance_reviews
                WHERE emplid=%s AND review_month=%s
                """,
                (int(employee_id), month),
            )
            r = fetchone(cur)
            if not r:
                return None
            return PerformanceReview(
                employee_id=int(r["emplid"]),
                month=str(r["review_month"]),
                subordinate_input=r.get("subordinate_input") or "",
                supervisor_ability=r.get("supervisor_ability"),
                supervisor_behavior=r.get("supervisor_behavior"),
                supervisor_attitude=r.get("supervisor_attitude"),
                supervisor_input=r.get("supervisor_input") or "",
            )

    def upsert_review(self, review: PerformanceReview) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO performance_reviews(
                    emplid, review_month, subordinate_input, supervisor_ability,
                    supervisor_behavior, supervisor_attitude, supervisor_input
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    subordinate_input=VALUES(subordinate_input),
                    supervisor_ability=VALUES(supervisor_ability),
                    supervisor_behavior=VALUES(supervisor_behavior),
                    supervisor_attitude=VALUES(supervisor_attitude),
                    supervisor_input=VALUES(supervisor_input)
                """,
                (
                    review.employee_id,
                    review.month,
                    review.subordinate_input,
                    review.supervisor_ability,
                    review.supervisor_behavior,
                    review.supervisor_attitude,
                    review.supervisor_input,
                ),
            )
