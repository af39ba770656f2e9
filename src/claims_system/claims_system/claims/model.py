from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import ClaimStatus


@dataclass(frozen=True)
class Claim:
    """A lecturer's monthly hours claim.

    Instances are immutable: status changes go through the state machine,
    which returns a new ``Claim``.
    """

    claim_id: int
    lecturer_id: int
    module_name: Optional[str]
    month: str
    hours_worked: int
    hourly_rate: Decimal
    total_amount: Decimal
    status: ClaimStatus
    submission_date: datetime
    supporting_document: Optional[str] = None
    rejection_reason: Optional[str] = None

    @property
    def expected_total(self) -> Decimal:
        return Decimal(self.hours_worked) * self.hourly_rate

    def to_dict(self) -> dict:
        return {
            "claim_id": self.claim_id,
            "lecturer_id": self.lecturer_id,
            "module_name": self.module_name,
            "month": self.month,
            "hours_worked": self.hours_worked,
            "hourly_rate": str(self.hourly_rate),
            "total_amount": str(self.total_amount),
            "status": self.status.value,
            "submission_date": self.submission_date.isoformat(),
            "supporting_document": self.supporting_document,
            "rejection_reason": self.rejection_reason,
        }


@dataclass(frozen=True)
class NewClaim:
    """Claim data before the repository assigns an id."""

    lecturer_id: int
    module_name: Optional[str]
    month: str
    hours_worked: int
    hourly_rate: Decimal
    total_amount: Decimal
    submission_date: datetime
    supporting_document: Optional[str] = None
    status: ClaimStatus = ClaimStatus.SUBMITTED


@dataclass
class ValidationResult:
    claim_id: Optional[int]
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)
    can_auto_approve: bool = False
    action_taken: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict:
        return {
            "claim_id": self.claim_id,
            "is_valid": self.is_valid,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
            "recommendations": list(self.recommendations),
            "can_auto_approve": self.can_auto_approve,
            "action_taken": self.action_taken,
        }


@dataclass(frozen=True)
class SubmissionResult:
    claim_id: int
    validation: Optional[ValidationResult] = None


@dataclass(frozen=True)
class BatchPaymentResult:
    month: str
    claim_ids: list[int]
    total_amount: Decimal
    processed_at: datetime

    def to_dict(self) -> dict:
        return {
            "month": self.month,
            "claim_ids": list(self.claim_ids),
            "claim_count": len(self.claim_ids),
            "total_amount": str(self.total_amount),
            "processed_at": self.processed_at.isoformat(),
        }
