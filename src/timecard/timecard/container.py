from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional

from .attendance.model import EmployeeContext
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.screen import AttendanceScreen
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_BASE_DELAY_MS, DEFAULT_MAX_ATTEMPTS, DEFAULT_REQUEST_TIMEOUT_SECONDS
from .core.enums import Role
from .database.connection import DBConfig, DatabaseConnection
from .payroll.mysql_salary_repository import MySQLSalaryRepository
from .payroll.repository import SalaryRepository
from .payroll.service import SalaryService
from .payroll.viewer import SalaryViewer
from .remote.client import AttendanceApiClient
from .remote.retry import ResilientCaller
from .remote.transport import HttpxTransport, Transport
from .reviews.exchange import ReviewExchange
from .reviews.mysql_review_repository import MySQLReviewRepository
from .reviews.repository import ReviewRepository
from .reviews.service import ReviewService


@dataclass(frozen=True)
class Container:
    """Record store wiring (server side)."""

    attendance_repo: AttendanceRepository
    salary_repo: SalaryRepository
    review_repo: ReviewRepository

    attendance_service: AttendanceService
    salary_service: SalaryService
    review_service: ReviewService

    conn: Optional[DatabaseConnection] = None


def build_services(
    *,
    attendance_repo: AttendanceRepository,
    salary_repo: SalaryRepository,
    review_repo: ReviewRepository,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    return Container(
        attendance_repo=attendance_repo,
        salary_repo=salary_repo,
        review_repo=review_repo,
        attendance_service=AttendanceService(attendance_repo),
        salary_service=SalaryService(salary_repo),
        review_service=ReviewService(review_repo),
        conn=conn,
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return build_services(
        attendance_repo=MySQLAttendanceRepository(conn),
        salary_repo=MySQLSalaryRepository(conn),
        review_repo=MySQLReviewRepository(conn),
        conn=conn,
    )


@dataclass(frozen=True)
class ClientContainer:
    """Client side wiring: one transport, one retry policy, one API client."""

    transport: Transport
    client: AttendanceApiClient
    caller: ResilientCaller

    def attendance_screen(
        self,
        ctx: EmployeeContext,
        *,
        today: Optional[Callable[[], date]] = None,
    ) -> AttendanceScreen:
        return AttendanceScreen(self.client, self.caller, ctx, today=today)

    def salary_viewer(self, ctx: EmployeeContext) -> SalaryViewer:
        return SalaryViewer(self.client, self.caller, ctx)

    def review_exchange(self, ctx: EmployeeContext, *, role: Role) -> ReviewExchange:
        return ReviewExchange(self.client, self.caller, ctx, role=role)


def build_client_container(
    *,
    api_base_url: str,
    timeout: float = DEFAULT_REQUEST_TIMEOUT_SECONDS,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    base_delay_ms: int = DEFAULT_BASE_DELAY_MS,
    transport: Optional[Transport] = None,
) -> ClientContainer:
    transport = transport or HttpxTransport(api_base_url, timeout=timeout)
    return ClientContainer(
        transport=transport,
        client=AttendanceApiClient(transport),
        caller=ResilientCaller(max_attempts=max_attempts, base_delay_ms=base_delay_ms),
    )


def client_container_from_settings(settings) -> ClientContainer:
    return build_client_container(
        api_base_url=str(getattr(settings, "API_BASE_URL")),
        timeout=float(getattr(settings, "REQUEST_TIMEOUT_SECONDS", DEFAULT_REQUEST_TIMEOUT_SECONDS)),
        max_attempts=int(getattr(settings, "RETRY_MAX_ATTEMPTS", DEFAULT_MAX_ATTEMPTS)),
        base_delay_ms=int(getattr(settings, "RETRY_BASE_DELAY_MS", DEFAULT_BASE_DELAY_MS)),
    )
