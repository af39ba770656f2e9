from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from .automation.service import ClaimAutomationService
from .claims.mysql_claim_repository import MySQLClaimRepository
from .claims.repository import ClaimRepository
from .claims.service import ClaimService
from .claims.state_machine import ClaimStateMachine
from .claims.validation import ClaimValidator
from .database.connection import DBConfig, DatabaseConnection
from .lecturers.mysql_lecturer_repository import MySQLLecturerRepository
from .lecturers.repository import LecturerRepository
from .lecturers.service import LecturerService
from .notifications.sink import LoggingNotificationSink, NotificationSink
from .reporting.service import ClaimReportService


@dataclass(frozen=True)
class Container:
    claims_repo: ClaimRepository
    lecturers_repo: LecturerRepository

    validator: ClaimValidator
    automation_service: ClaimAutomationService
    claim_service: ClaimService
    lecturer_service: LecturerService
    report_service: ClaimReportService


def wire_services(
    *,
    claims_repo: ClaimRepository,
    lecturers_repo: LecturerRepository,
    notifier: Optional[NotificationSink] = None,
    auto_verify_on_submit: bool = True,
    clock: Optional[Callable[[], datetime]] = None,
) -> Container:
    """Build every service on top of the given repositories."""

    state_machine = ClaimStateMachine()
    validator = ClaimValidator(lecturers_repo)
    automation_service = ClaimAutomationService(
        claims_repo,
        validator,
        notifier or LoggingNotificationSink(lecturers_repo),
        state_machine=state_machine,
    )
    claim_service = ClaimService(
        claims_repo,
        lecturers_repo,
        automation_service,
        state_machine=state_machine,
        auto_verify_on_submit=auto_verify_on_submit,
        clock=clock,
    )

    return Container(
        claims_repo=claims_repo,
        lecturers_repo=lecturers_repo,
        validator=validator,
        automation_service=automation_service,
        claim_service=claim_service,
        lecturer_service=LecturerService(lecturers_repo),
        report_service=ClaimReportService(claims_repo, lecturers_repo, clock=clock),
    )


def build_container(*, db_config: dict, auto_verify_on_submit: bool = True) -> Container:
    conn = DatabaseConnection(DBConfig.from_settings(db_config))

    return wire_services(
        claims_repo=MySQLClaimRepository(conn),
        lecturers_repo=MySQLLecturerRepository(conn),
        auto_verify_on_submit=auto_verify_on_submit,
    )
