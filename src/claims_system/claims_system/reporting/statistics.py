from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Iterable, Mapping

from ..claims.model import Claim
from ..common.money import sum_money, to_money
from ..core.constants import UNKNOWN_LECTURER_NAME
from ..core.enums import ClaimStatus


class AmountBucket(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    PAID = "paid"


# Every status lands in exactly one bucket, so the bucket sums partition the
# total claimed amount. A new status must be added here or build_statistics fails.
STATUS_BUCKETS: Mapping[ClaimStatus, AmountBucket] = {
    ClaimStatus.SUBMITTED: AmountBucket.PENDING,
    ClaimStatus.PENDING: AmountBucket.PENDING,
    ClaimStatus.APPROVED_BY_COORDINATOR: AmountBucket.PENDING,
    ClaimStatus.APPROVED_BY_MANAGER: AmountBucket.APPROVED,
    ClaimStatus.REJECTED_BY_COORDINATOR: AmountBucket.REJECTED,
    ClaimStatus.REJECTED_BY_MANAGER: AmountBucket.REJECTED,
    ClaimStatus.PAYMENT_PROCESSED: AmountBucket.PAID,
}


@dataclass(frozen=True)
class ClaimStatistics:
    total_claims: int
    submitted_claims: int
    approved_by_coordinator: int
    approved_by_manager: int
    rejected_claims: int
    payment_processed: int

    total_amount_claimed: Decimal
    total_amount_approved: Decimal
    total_amount_pending: Decimal
    total_amount_rejected: Decimal
    total_amount_paid: Decimal

    average_claim_amount: Decimal
    average_hours_per_claim: float

    approval_rate: float
    rejection_rate: float

    generated_at: datetime
    claims_by_month: dict[str, int] = field(default_factory=dict)
    claims_by_lecturer: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "total_claims": self.total_claims,
            "submitted_claims": self.submitted_claims,
            "approved_by_coordinator": self.approved_by_coordinator,
            "approved_by_manager": self.approved_by_manager,
            "rejected_claims": self.rejected_claims,
            "payment_processed": self.payment_processed,
            "total_amount_claimed": str(self.total_amount_claimed),
            "total_amount_approved": str(self.total_amount_approved),
            "total_amount_pending": str(self.total_amount_pending),
            "total_amount_rejected": str(self.total_amount_rejected),
            "total_amount_paid": str(self.total_amount_paid),
            "average_claim_amount": str(self.average_claim_amount),
            "average_hours_per_claim": round(self.average_hours_per_claim, 2),
            "approval_rate": round(self.approval_rate, 2),
            "rejection_rate": round(self.rejection_rate, 2),
            "claims_by_month": dict(self.claims_by_month),
            "claims_by_lecturer": dict(self.claims_by_lecturer),
            "generated_at": self.generated_at.isoformat(),
        }


def _percent(part: int, whole: int) -> float:
    return part / whole * 100 if whole else 0.0


def build_statistics(
    claims: Iterable[Claim],
    *,
    lecturer_names: Mapping[int, str],
    generated_at: datetime,
) -> ClaimStatistics:
    """Summarise a claim set. Pure: no I/O, safe on an empty set."""

    items = list(claims)
    total = len(items)

    statuses = Counter(c.status for c in items)
    bucket_sums = {bucket: Decimal("0") for bucket in AmountBucket}
    for c in items:
        bucket_sums[STATUS_BUCKETS[c.status]] += c.total_amount

    claimed = sum_money(c.total_amount for c in items)
    approved_count = sum(1 for c in items if c.status.is_approved())
    rejected_count = sum(1 for c in items if c.status.is_rejected())

    by_month = Counter(c.month for c in items)
    by_lecturer = Counter(lecturer_names.get(c.lecturer_id, UNKNOWN_LECTURER_NAME) for c in items)

    return ClaimStatistics(
        total_claims=total,
        submitted_claims=statuses[ClaimStatus.SUBMITTED] + statuses[ClaimStatus.PENDING],
        approved_by_coordinator=statuses[ClaimStatus.APPROVED_BY_COORDINATOR],
        approved_by_manager=statuses[ClaimStatus.APPROVED_BY_MANAGER],
        rejected_claims=rejected_count,
        payment_processed=statuses[ClaimStatus.PAYMENT_PROCESSED],
        total_amount_claimed=claimed,
        total_amount_approved=bucket_sums[AmountBucket.APPROVED],
        total_amount_pending=bucket_sums[AmountBucket.PENDING],
        total_amount_rejected=bucket_sums[AmountBucket.REJECTED],
        total_amount_paid=bucket_sums[AmountBucket.PAID],
        average_claim_amount=to_money(claimed / total) if total else Decimal("0"),
        average_hours_per_claim=sum(c.hours_worked for c in items) / total if total else 0.0,
        approval_rate=_percent(approved_count, total),
        rejection_rate=_percent(rejected_count, total),
        generated_at=generated_at,
        claims_by_month=dict(by_month),
        claims_by_lecturer=dict(by_lecturer),
    )
