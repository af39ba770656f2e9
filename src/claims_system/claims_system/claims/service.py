from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any, Callable, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.money import sum_money, to_money
from ..common.validators import require_int_between, require_non_empty, require_not_blank
from ..core.constants import MAX_HOURS_PER_MONTH, MIN_HOURS_PER_MONTH
from ..core.enums import ClaimAction, ClaimStatus, NotificationAction, Role
from ..core.exceptions import AuthorizationError, NotFoundError
from ..core.logging import get_logger
from ..lecturers.repository import LecturerLookup
from .model import BatchPaymentResult, Claim, NewClaim, SubmissionResult
from .repository import ClaimRepository
from .state_machine import ClaimStateMachine

if TYPE_CHECKING:
    from ..automation.service import ClaimAutomationService

logger = get_logger(__name__)


class ClaimService:
    """Use cases driven by people: submit, review, delete and pay claims."""

    def __init__(
        self,
        claims: ClaimRepository,
        lecturers: LecturerLookup,
        automation: "ClaimAutomationService",
        *,
        state_machine: Optional[ClaimStateMachine] = None,
        auto_verify_on_submit: bool = True,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._claims = claims
        self._lecturers = lecturers
        self._automation = automation
        self._machine = state_machine or ClaimStateMachine()
        self._auto_verify_on_submit = bool(auto_verify_on_submit)
        self._clock = clock or now_local

    def _require_claim(self, claim_id: int) -> Claim:
        claim = self._claims.get_by_id(int(claim_id))
        if not claim:
            raise NotFoundError(f"Claim #{claim_id} not found")
        return claim

    def get_claim(self, claim_id: int) -> Claim:
        return self._require_claim(claim_id)

    def list_for_lecturer(self, lecturer_id: int) -> Sequence[Claim]:
        return self._claims.list_by_lecturer(int(lecturer_id))

    def submit_claim(
        self,
        *,
        current_role: Role,
        lecturer_id: int,
        module_name: str,
        month: str,
        hours_worked: Any,
        supporting_document: Optional[str] = None,
    ) -> SubmissionResult:
        if current_role != Role.LECTURER:
            raise AuthorizationError("Only lecturers can submit claims")

        module = require_non_empty(module_name, "Module name")
        # Month is a free-text label; it is compared verbatim for duplicates and reports.
        month = require_not_blank(month, "Month")
        hours = require_int_between(hours_worked, "Hours worked", MIN_HOURS_PER_MONTH, MAX_HOURS_PER_MONTH)

        lecturer = self._lecturers.get_by_id(int(lecturer_id))
        if not lecturer:
            raise NotFoundError(f"Lecturer #{lecturer_id} not found")

        rate = lecturer.hourly_rate
        claim_id = self._claims.create(
            NewClaim(
                lecturer_id=lecturer.lecturer_id,
                module_name=module,
                month=month,
                hours_worked=hours,
                hourly_rate=rate,
                total_amount=to_money(hours * rate),
                submission_date=self._clock(),
                supporting_document=(supporting_document or "").strip() or None,
            )
        )
        logger.info("claim_submitted", claim_id=claim_id, lecturer_id=lecturer.lecturer_id, month=month)

        if not self._auto_verify_on_submit:
            return SubmissionResult(claim_id=claim_id)
        return SubmissionResult(claim_id=claim_id, validation=self._automation.auto_verify(claim_id))

    def _transition(
        self,
        *,
        current_role: Role,
        claim_id: int,
        action: ClaimAction,
        notification: NotificationAction,
        reason: Optional[str] = None,
    ) -> Claim:
        claim = self._require_claim(claim_id)
        updated = self._machine.apply(claim, action, current_role, reason=reason)
        self._claims.save(updated)
        logger.info(
            "claim_status_changed",
            claim_id=updated.claim_id,
            role=current_role.value,
            old_status=claim.status.value,
            new_status=updated.status.value,
        )
        self._automation.notify_stakeholders(updated, notification.value)
        return updated

    def approve(self, *, current_role: Role, claim_id: int) -> Claim:
        """Coordinator approval: Submitted -> Approved by Coordinator."""
        return self._transition(
            current_role=current_role,
            claim_id=claim_id,
            action=ClaimAction.APPROVE,
            notification=NotificationAction.APPROVED,
        )

    def verify(self, *, current_role: Role, claim_id: int) -> Claim:
        """Manager approval: Approved by Coordinator -> Approved by Manager."""
        return self._transition(
            current_role=current_role,
            claim_id=claim_id,
            action=ClaimAction.VERIFY,
            notification=NotificationAction.VERIFIED,
        )

    def reject(self, *, current_role: Role, claim_id: int, reason: str) -> Claim:
        # Reason is checked before the lookup so a blank form never hits the database.
        reason = require_non_empty(reason, "Rejection reason")
        return self._transition(
            current_role=current_role,
            claim_id=claim_id,
            action=ClaimAction.REJECT,
            notification=NotificationAction.REJECTED,
            reason=reason,
        )

    def delete(self, *, current_role: Role, claim_id: int, lecturer_id: Optional[int] = None) -> None:
        claim = self._require_claim(claim_id)

        if current_role == Role.LECTURER and (lecturer_id is None or int(lecturer_id) != claim.lecturer_id):
            raise AuthorizationError("Lecturers can only delete their own claims")
        self._machine.ensure_can_delete(claim, current_role)

        if not self._claims.delete(claim.claim_id):
            raise NotFoundError(f"Claim #{claim_id} not found")
        logger.info("claim_deleted", claim_id=claim.claim_id, role=current_role.value, status=claim.status.value)

    def process_batch_payment(self, *, current_role: Role, month: str) -> BatchPaymentResult:
        """Mark every manager-approved claim of ``month`` as paid, all or nothing."""

        if current_role != Role.HR:
            raise AuthorizationError("Only HR can process payments")
        month = require_not_blank(month, "Month")

        due = [c for c in self._claims.list_by_status([ClaimStatus.APPROVED_BY_MANAGER]) if c.month == month]
        if not due:
            raise NotFoundError(f"No approved claims found for {month}")

        paid = [self._machine.apply(c, ClaimAction.PAY, current_role) for c in due]
        self._claims.save_many(paid)

        total = sum_money(c.total_amount for c in paid)
        logger.info("batch_payment_processed", month=month, claims=len(paid), total_amount=str(total))
        for claim in paid:
            self._automation.notify_stakeholders(claim, NotificationAction.PAID.value)

        return BatchPaymentResult(
            month=month,
            claim_ids=[c.claim_id for c in paid],
            total_amount=total,
            processed_at=self._clock(),
        )
