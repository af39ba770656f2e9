from __future__ import annotations

from datetime import datetime
from typing import Callable, Mapping, Optional, Sequence

from ..claims.model import Claim
from ..claims.repository import ClaimRepository
from ..common.datetime_utils import now_local
from ..common.validators import require_int_between, require_not_blank
from ..core.constants import MAX_REPORT_YEAR, MIN_REPORT_YEAR
from ..core.enums import ClaimStatus, Role
from ..core.exceptions import NotFoundError
from ..core.logging import get_logger
from ..lecturers.repository import LecturerRepository
from .reports import (
    AnnualSummary,
    LecturerPerformanceReport,
    MonthlyFinancialReport,
    build_annual_summary,
    build_lecturer_performance,
    build_monthly_financial,
)
from .statistics import ClaimStatistics, build_statistics

logger = get_logger(__name__)

# Queue each role works from. Roles not listed have nothing to act on.
ATTENTION_STATUSES: Mapping[Role, tuple[ClaimStatus, ...]] = {
    Role.COORDINATOR: (ClaimStatus.SUBMITTED, ClaimStatus.PENDING),
    Role.MANAGER: (ClaimStatus.APPROVED_BY_COORDINATOR,),
    Role.HR: (ClaimStatus.APPROVED_BY_MANAGER,),
}


class ClaimReportService:
    """Read-side queries over the live claim set."""

    def __init__(
        self,
        claims: ClaimRepository,
        lecturers: LecturerRepository,
        *,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._claims = claims
        self._lecturers = lecturers
        self._clock = clock or now_local

    def claims_requiring_attention(self, role: Optional[Role]) -> Sequence[Claim]:
        statuses = ATTENTION_STATUSES.get(role) if role is not None else None
        if not statuses:
            return []
        claims = self._claims.list_by_status(statuses)
        return sorted(claims, key=lambda c: (c.submission_date, c.claim_id))

    def generate_statistics(self) -> ClaimStatistics:
        claims = self._claims.list_all()
        names = {lec.lecturer_id: lec.full_name for lec in self._lecturers.list_all()}

        stats = build_statistics(claims, lecturer_names=names, generated_at=self._clock())
        logger.info(
            "statistics_generated",
            total_claims=stats.total_claims,
            total_amount_approved=str(stats.total_amount_approved),
        )
        return stats

    def lecturer_performance(self, lecturer_id: int) -> LecturerPerformanceReport:
        lecturer = self._lecturers.get_by_id(int(lecturer_id))
        if not lecturer:
            raise NotFoundError(f"Lecturer #{lecturer_id} not found")

        claims = self._claims.list_by_lecturer(lecturer.lecturer_id)
        return build_lecturer_performance(lecturer, claims, generated_at=self._clock())

    def monthly_financial(self, month: str) -> MonthlyFinancialReport:
        month = require_not_blank(month, "Month")
        lecturers = {lec.lecturer_id: lec for lec in self._lecturers.list_all()}

        report = build_monthly_financial(
            month,
            self._claims.list_all(),
            lecturers=lecturers,
            generated_at=self._clock(),
        )
        logger.info("monthly_report_generated", month=month, total_claims=report.total_claims)
        return report

    def annual_summary(self, year: int) -> AnnualSummary:
        year = require_int_between(year, "Year", MIN_REPORT_YEAR, MAX_REPORT_YEAR)

        summary = build_annual_summary(year, self._claims.list_all(), generated_at=self._clock())
        logger.info("annual_report_generated", year=year, total_claims=summary.total_claims)
        return summary
