from __future__ import annotations

from ..claims.model import Claim
from ..common.money import format_money
from ..core.enums import NotificationAction


def build_message(claim: Claim, action: str) -> str:
    """Lecturer-facing text for a status change; unknown actions get a generic update."""

    try:
        kind = NotificationAction(action.lower())
    except ValueError:
        return f"Status update for claim #{claim.claim_id}: {claim.status.value}"

    amount = format_money(claim.total_amount)
    if kind is NotificationAction.AUTO_APPROVED:
        return f"Your claim #{claim.claim_id} for {claim.month} ({amount}) has been automatically approved."
    if kind is NotificationAction.AUTO_REJECTED:
        return f"Your claim #{claim.claim_id} for {claim.month} has been rejected. Reason: {claim.rejection_reason}"
    if kind is NotificationAction.APPROVED:
        return f"Your claim #{claim.claim_id} for {claim.month} ({amount}) has been approved by your coordinator."
    if kind is NotificationAction.VERIFIED:
        return f"Your claim #{claim.claim_id} for {claim.month} ({amount}) has been approved for payment."
    if kind is NotificationAction.REJECTED:
        return (
            f"Your claim #{claim.claim_id} for {claim.month} has been rejected. "
            f"Reason: {claim.rejection_reason}. Please review and resubmit if necessary."
        )
    return f"Payment of {amount} for claim #{claim.claim_id} ({claim.month}) has been processed."
