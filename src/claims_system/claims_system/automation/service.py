from __future__ import annotations

from typing import Optional

from ..claims.model import Claim, ValidationResult
from ..claims.repository import ClaimRepository
from ..claims.state_machine import ClaimStateMachine
from ..claims.validation import ClaimValidator
from ..core.enums import ClaimAction, ClaimStatus, NotificationAction, Role
from ..core.exceptions import NotFoundError
from ..core.logging import get_logger
from ..notifications.sink import NotificationSink

logger = get_logger(__name__)

AUTO_APPROVED = "Auto-approved by system"
AUTO_REJECTED = "Auto-rejected due to validation errors"
FLAGGED_FOR_REVIEW = "Flagged for manual review due to warnings"
ERRORS_AFTER_REVIEW = "Validation errors found; claim is no longer awaiting review"
AUTO_REJECTION_PREFIX = "Automatic rejection: "


class ClaimAutomationService:
    """Validates claims and takes the automatic decision for new submissions."""

    def __init__(
        self,
        claims: ClaimRepository,
        validator: ClaimValidator,
        notifier: NotificationSink,
        *,
        state_machine: Optional[ClaimStateMachine] = None,
    ):
        self._claims = claims
        self._validator = validator
        self._notifier = notifier
        self._machine = state_machine or ClaimStateMachine()

    def validate(self, claim: Claim) -> ValidationResult:
        existing = self._claims.find_by_lecturer_and_month(
            claim.lecturer_id,
            claim.month,
            exclude_id=claim.claim_id,
        )
        return self._validator.validate(claim, existing)

    def auto_verify(self, claim_id: int) -> ValidationResult:
        """Validate a claim and apply at most one automatic decision.

        Eligible and still Submitted: approve. Errors: reject with the errors
        as reason. Warnings only: flag for manual review. Otherwise leave it
        for a human. Persistence errors propagate; notification errors don't.
        """

        claim = self._claims.get_by_id(int(claim_id))
        if not claim:
            raise NotFoundError(f"Claim #{claim_id} not found")

        result = self.validate(claim)

        if result.can_auto_approve and claim.status == ClaimStatus.SUBMITTED:
            updated = self._machine.apply(claim, ClaimAction.APPROVE, Role.SYSTEM)
            self._claims.save(updated)
            result.action_taken = AUTO_APPROVED
            logger.info("claim_auto_approved", claim_id=updated.claim_id, amount=str(updated.total_amount))
            self.notify_stakeholders(updated, NotificationAction.AUTO_APPROVED.value)

        elif result.errors:
            if not self._machine.can_apply(claim, ClaimAction.REJECT, Role.SYSTEM):
                result.action_taken = ERRORS_AFTER_REVIEW
                logger.warning(
                    "claim_errors_after_review",
                    claim_id=claim.claim_id,
                    status=claim.status.value,
                    errors=list(result.errors),
                )
                return result

            reason = AUTO_REJECTION_PREFIX + "; ".join(result.errors)
            updated = self._machine.apply(claim, ClaimAction.REJECT, Role.SYSTEM, reason=reason)
            self._claims.save(updated)
            result.action_taken = AUTO_REJECTED
            logger.warning("claim_auto_rejected", claim_id=updated.claim_id, reason=reason)
            self.notify_stakeholders(updated, NotificationAction.AUTO_REJECTED.value)

        elif result.warnings:
            result.action_taken = FLAGGED_FOR_REVIEW
            logger.info("claim_flagged_for_review", claim_id=claim.claim_id, warnings=list(result.warnings))

        return result

    def notify_stakeholders(self, claim: Claim, action: str) -> None:
        """Best-effort: a failing sink is logged and never fails the caller."""

        try:
            self._notifier.notify(claim, action)
        except Exception:
            logger.exception("notification_failed", claim_id=claim.claim_id, action=action)
