from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Roles taking part in the claim workflow."""

    LECTURER = "lecturer"
    COORDINATOR = "coordinator"
    MANAGER = "manager"
    HR = "hr"
    SYSTEM = "system"


class ClaimStatus(str, Enum):
    """Claim status as stored in the database."""

    SUBMITTED = "Submitted"
    PENDING = "Pending"
    APPROVED_BY_COORDINATOR = "Approved by Coordinator"
    APPROVED_BY_MANAGER = "Approved by Manager"
    REJECTED_BY_COORDINATOR = "Rejected by Coordinator"
    REJECTED_BY_MANAGER = "Rejected by Manager"
    PAYMENT_PROCESSED = "Payment Processed"

    def canonical(self) -> "ClaimStatus":
        # Pending is a legacy alias of Submitted.
        if self is ClaimStatus.PENDING:
            return ClaimStatus.SUBMITTED
        return self

    def is_submitted(self) -> bool:
        return self in (ClaimStatus.SUBMITTED, ClaimStatus.PENDING)

    def is_approved(self) -> bool:
        return self in (ClaimStatus.APPROVED_BY_COORDINATOR, ClaimStatus.APPROVED_BY_MANAGER)

    def is_rejected(self) -> bool:
        return self in (ClaimStatus.REJECTED_BY_COORDINATOR, ClaimStatus.REJECTED_BY_MANAGER)

    def is_terminal(self) -> bool:
        return self is ClaimStatus.PAYMENT_PROCESSED


class ClaimAction(str, Enum):
    """Actions that move a claim through the workflow."""

    APPROVE = "approve"
    VERIFY = "verify"
    REJECT = "reject"
    PAY = "pay"


class NotificationAction(str, Enum):
    AUTO_APPROVED = "auto-approved"
    AUTO_REJECTED = "auto-rejected"
    APPROVED = "approved"
    VERIFIED = "verified"
    REJECTED = "rejected"
    PAID = "paid"
