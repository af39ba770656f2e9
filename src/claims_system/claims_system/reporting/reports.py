"""HR reports: one lecturer's history, one month's money, one year's totals.

Builders are pure; ``ClaimReportService`` loads the claims and lecturers.
Claims that are approved by the manager or already paid count as earned.
"""

from __future__ import annotations

from collections import Counter, defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Mapping, Optional

from ..claims.model import Claim
from ..common.money import sum_money, to_money
from ..core.constants import UNKNOWN_LECTURER_NAME
from ..core.enums import ClaimStatus
from ..lecturers.model import Lecturer
from .statistics import STATUS_BUCKETS, AmountBucket

EARNED_STATUSES = frozenset({ClaimStatus.APPROVED_BY_MANAGER, ClaimStatus.PAYMENT_PROCESSED})


def _is_earned(claim: Claim) -> bool:
    return claim.status in EARNED_STATUSES


def _percent(part: int, whole: int) -> float:
    return part / whole * 100 if whole else 0.0


def _average_amount(claims: list[Claim]) -> Decimal:
    if not claims:
        return Decimal("0")
    return to_money(sum_money(c.total_amount for c in claims) / len(claims))


def _average_hours(claims: list[Claim]) -> float:
    return sum(c.hours_worked for c in claims) / len(claims) if claims else 0.0


@dataclass(frozen=True)
class LecturerPerformanceReport:
    lecturer_id: int
    lecturer_name: str
    email: str
    module_name: str
    hourly_rate: Decimal

    total_claims: int
    approved_claims: int
    rejected_claims: int
    pending_claims: int
    paid_claims: int

    approved_hours: int
    total_earnings: Decimal
    average_hours_per_claim: float
    average_claim_amount: Decimal

    approval_rate: float
    rejection_rate: float

    last_claim_date: Optional[datetime]
    generated_at: datetime
    claims_by_month: dict[str, int] = field(default_factory=dict)
    earnings_by_month: dict[str, Decimal] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "lecturer_id": self.lecturer_id,
            "lecturer_name": self.lecturer_name,
            "email": self.email,
            "module_name": self.module_name,
            "hourly_rate": str(self.hourly_rate),
            "total_claims": self.total_claims,
            "approved_claims": self.approved_claims,
            "rejected_claims": self.rejected_claims,
            "pending_claims": self.pending_claims,
            "paid_claims": self.paid_claims,
            "approved_hours": self.approved_hours,
            "total_earnings": str(self.total_earnings),
            "average_hours_per_claim": round(self.average_hours_per_claim, 2),
            "average_claim_amount": str(self.average_claim_amount),
            "approval_rate": round(self.approval_rate, 2),
            "rejection_rate": round(self.rejection_rate, 2),
            "claims_by_month": dict(self.claims_by_month),
            "earnings_by_month": {k: str(v) for k, v in self.earnings_by_month.items()},
            "last_claim_date": self.last_claim_date.isoformat() if self.last_claim_date else None,
            "generated_at": self.generated_at.isoformat(),
        }


@dataclass(frozen=True)
class LecturerPayment:
    lecturer_id: int
    lecturer_name: str
    email: Optional[str]
    claim_count: int
    total_hours: int
    total_amount: Decimal

    def to_dict(self) -> dict:
        return {
            "lecturer_id": self.lecturer_id,
            "lecturer_name": self.lecturer_name,
            "email": self.email,
            "claim_count": self.claim_count,
            "total_hours": self.total_hours,
            "total_amount": str(self.total_amount),
        }


@dataclass(frozen=True)
class MonthlyFinancialReport:
    month: str

    total_claims: int
    submitted_claims: int
    approved_claims: int
    paid_claims: int
    rejected_claims: int

    total_amount_claimed: Decimal
    approved_amount: Decimal
    pending_amount: Decimal
    rejected_amount: Decimal
    paid_amount: Decimal

    approved_hours: int
    unique_lecturers: int
    average_claim_value: Decimal
    average_hours_per_claim: float

    generated_at: datetime
    payment_by_lecturer: list[LecturerPayment] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "month": self.month,
            "total_claims": self.total_claims,
            "submitted_claims": self.submitted_claims,
            "approved_claims": self.approved_claims,
            "paid_claims": self.paid_claims,
            "rejected_claims": self.rejected_claims,
            "total_amount_claimed": str(self.total_amount_claimed),
            "approved_amount": str(self.approved_amount),
            "pending_amount": str(self.pending_amount),
            "rejected_amount": str(self.rejected_amount),
            "paid_amount": str(self.paid_amount),
            "approved_hours": self.approved_hours,
            "unique_lecturers": self.unique_lecturers,
            "average_claim_value": str(self.average_claim_value),
            "average_hours_per_claim": round(self.average_hours_per_claim, 2),
            "payment_by_lecturer": [p.to_dict() for p in self.payment_by_lecturer],
            "generated_at": self.generated_at.isoformat(),
        }


@dataclass(frozen=True)
class MonthBreakdown:
    month: str
    claims: int
    amount: Decimal

    def to_dict(self) -> dict:
        return {"month": self.month, "claims": self.claims, "amount": str(self.amount)}


@dataclass(frozen=True)
class AnnualSummary:
    year: int
    total_claims: int
    total_amount_claimed: Decimal
    total_amount_approved: Decimal
    total_hours_approved: int
    unique_lecturers: int
    generated_at: datetime
    monthly_breakdown: list[MonthBreakdown] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "year": self.year,
            "total_claims": self.total_claims,
            "total_amount_claimed": str(self.total_amount_claimed),
            "total_amount_approved": str(self.total_amount_approved),
            "total_hours_approved": self.total_hours_approved,
            "unique_lecturers": self.unique_lecturers,
            "monthly_breakdown": [m.to_dict() for m in self.monthly_breakdown],
            "generated_at": self.generated_at.isoformat(),
        }


def build_lecturer_performance(
    lecturer: Lecturer,
    claims: Iterable[Claim],
    *,
    generated_at: datetime,
) -> LecturerPerformanceReport:
    items = [c for c in claims if c.lecturer_id == lecturer.lecturer_id]
    earned = [c for c in items if _is_earned(c)]

    approved = sum(1 for c in items if c.status.is_approved())
    rejected = sum(1 for c in items if c.status.is_rejected())

    earnings_by_month: dict[str, Decimal] = defaultdict(lambda: Decimal("0"))
    for c in earned:
        earnings_by_month[c.month] += c.total_amount

    return LecturerPerformanceReport(
        lecturer_id=lecturer.lecturer_id,
        lecturer_name=lecturer.full_name,
        email=lecturer.email,
        module_name=lecturer.module_name,
        hourly_rate=lecturer.hourly_rate,
        total_claims=len(items),
        approved_claims=approved,
        rejected_claims=rejected,
        pending_claims=sum(1 for c in items if c.status.is_submitted()),
        paid_claims=sum(1 for c in items if c.status is ClaimStatus.PAYMENT_PROCESSED),
        approved_hours=sum(c.hours_worked for c in earned),
        total_earnings=sum_money(c.total_amount for c in earned),
        average_hours_per_claim=_average_hours(items),
        average_claim_amount=_average_amount(items),
        approval_rate=_percent(approved, len(items)),
        rejection_rate=_percent(rejected, len(items)),
        last_claim_date=max((c.submission_date for c in items), default=None),
        generated_at=generated_at,
        claims_by_month=dict(Counter(c.month for c in items)),
        earnings_by_month=dict(earnings_by_month),
    )


def build_monthly_financial(
    month: str,
    claims: Iterable[Claim],
    *,
    lecturers: Mapping[int, Lecturer],
    generated_at: datetime,
) -> MonthlyFinancialReport:
    """Summary of one month label, compared verbatim."""

    items = [c for c in claims if c.month == month]
    earned = [c for c in items if _is_earned(c)]

    buckets = {bucket: Decimal("0") for bucket in AmountBucket}
    for c in items:
        buckets[STATUS_BUCKETS[c.status]] += c.total_amount

    per_lecturer: dict[int, list[Claim]] = defaultdict(list)
    for c in earned:
        per_lecturer[c.lecturer_id].append(c)

    payments = []
    for lecturer_id, group in per_lecturer.items():
        lecturer = lecturers.get(lecturer_id)
        payments.append(
            LecturerPayment(
                lecturer_id=lecturer_id,
                lecturer_name=lecturer.full_name if lecturer else UNKNOWN_LECTURER_NAME,
                email=lecturer.email if lecturer else None,
                claim_count=len(group),
                total_hours=sum(c.hours_worked for c in group),
                total_amount=sum_money(c.total_amount for c in group),
            )
        )
    payments.sort(key=lambda p: (-p.total_amount, p.lecturer_name))

    return MonthlyFinancialReport(
        month=month,
        total_claims=len(items),
        submitted_claims=sum(1 for c in items if c.status.is_submitted()),
        approved_claims=sum(1 for c in items if c.status is ClaimStatus.APPROVED_BY_MANAGER),
        paid_claims=sum(1 for c in items if c.status is ClaimStatus.PAYMENT_PROCESSED),
        rejected_claims=sum(1 for c in items if c.status.is_rejected()),
        total_amount_claimed=sum_money(c.total_amount for c in items),
        approved_amount=buckets[AmountBucket.APPROVED],
        pending_amount=buckets[AmountBucket.PENDING],
        rejected_amount=buckets[AmountBucket.REJECTED],
        paid_amount=buckets[AmountBucket.PAID],
        approved_hours=sum(c.hours_worked for c in earned),
        unique_lecturers=len({c.lecturer_id for c in items}),
        average_claim_value=_average_amount(items),
        average_hours_per_claim=_average_hours(items),
        generated_at=generated_at,
        payment_by_lecturer=payments,
    )


def build_annual_summary(year: int, claims: Iterable[Claim], *, generated_at: datetime) -> AnnualSummary:
    """Claims submitted during ``year``, broken down by month label."""

    items = [c for c in claims if c.submission_date.year == year]
    earned = [c for c in items if _is_earned(c)]

    by_month: dict[str, list[Claim]] = defaultdict(list)
    for c in items:
        by_month[c.month].append(c)

    return AnnualSummary(
        year=year,
        total_claims=len(items),
        total_amount_claimed=sum_money(c.total_amount for c in items),
        total_amount_approved=sum_money(c.total_amount for c in earned),
        total_hours_approved=sum(c.hours_worked for c in earned),
        unique_lecturers=len({c.lecturer_id for c in items}),
        generated_at=generated_at,
        monthly_breakdown=[
            MonthBreakdown(month=month, claims=len(group), amount=sum_money(c.total_amount for c in group))
            for month, group in sorted(by_month.items())
        ],
    )
