from __future__ import annotations

import pytest

from src.timecard.timecard.core.exceptions import ValidationError
from src.timecard.timecard.reviews.service import ReviewService


class InMemoryReviews:
    def __init__(self):
        self.reviews = {}
        self.writes = 0

    def get_review(self, *, employee_id, month):
        return self.reviews.get((employee_id, month))

    def upsert_review(self, review):
        self.writes += 1
        self.reviews[(review.employee_id, review.month)] = review


@pytest.fixture()
def repo():
    return InMemoryReviews()


@pytest.fixture()
def service(repo):
    return ReviewService(repo)


def test_missing_review_is_none(service):
    assert service.get_review(employee_id=3, month_key="202504") is None


def test_supervisor_submission_keeps_employee_comment(service):
    service.submit({"emplid": 3, "month": "202504", "subordinate_input": "  Closed 40 tickets  "})
    review = service.submit(
        {
            "emplid": 3,
            "month": "202504",
            "supervisor_ability": "4",
            "supervisor_behavior": 3,
            "supervisor_attitude": 5,
            "supervisor_input": "Good",
        }
    )

    assert review.subordinate_input == "Closed 40 tickets"
    assert (review.supervisor_ability, review.supervisor_behavior, review.supervisor_attitude) == (4, 3, 5)
    assert review.scored
    assert service.get_review(employee_id=3, month_key="202504") == review


def test_employee_comment_does_not_clear_scores(service):
    service.submit({"emplid": 3, "month": "202504", "supervisor_ability": 2, "supervisor_behavior": 2, "supervisor_attitude": 2})
    review = service.submit({"emplid": 3, "month": "202504", "subordinate_input": "Thanks"})

    assert review.supervisor_ability == 2
    assert review.subordinate_input == "Thanks"


@pytest.mark.parametrize(
    "payload",
    [
        {"emplid": 3, "month": "202504"},
        {"emplid": 3, "month": "202504", "supervisor_ability": 0},
        {"emplid": 3, "month": "202504", "supervisor_attitude": "great"},
        {"emplid": 3, "month": "2025-04", "subordinate_input": "x"},
        ["not", "an", "object"],
    ],
)
def test_invalid_submissions_are_rejected(service, repo, payload):
    with pytest.raises(ValidationError):
        service.submit(payload)
    assert repo.writes == 0
