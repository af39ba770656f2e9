from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Mapping, Optional

from ..core.enums import ClaimAction, ClaimStatus, Role
from ..core.exceptions import AuthorizationError, InvalidTransitionError, ValidationError
from .model import Claim


@dataclass(frozen=True)
class Transition:
    target: ClaimStatus
    roles: frozenset[Role]


# Keyed on canonical status, so Pending behaves exactly like Submitted.
TRANSITIONS: Mapping[tuple[ClaimStatus, ClaimAction], Transition] = {
    (ClaimStatus.SUBMITTED, ClaimAction.APPROVE): Transition(
        ClaimStatus.APPROVED_BY_COORDINATOR, frozenset({Role.COORDINATOR, Role.SYSTEM})
    ),
    (ClaimStatus.SUBMITTED, ClaimAction.REJECT): Transition(
        ClaimStatus.REJECTED_BY_COORDINATOR, frozenset({Role.COORDINATOR, Role.SYSTEM})
    ),
    (ClaimStatus.APPROVED_BY_COORDINATOR, ClaimAction.VERIFY): Transition(
        ClaimStatus.APPROVED_BY_MANAGER, frozenset({Role.MANAGER})
    ),
    (ClaimStatus.APPROVED_BY_COORDINATOR, ClaimAction.REJECT): Transition(
        ClaimStatus.REJECTED_BY_MANAGER, frozenset({Role.MANAGER})
    ),
    (ClaimStatus.APPROVED_BY_MANAGER, ClaimAction.PAY): Transition(
        ClaimStatus.PAYMENT_PROCESSED, frozenset({Role.HR})
    ),
}

DELETABLE_STATUSES: Mapping[Role, frozenset[ClaimStatus]] = {
    Role.LECTURER: frozenset({ClaimStatus.SUBMITTED}),
    Role.COORDINATOR: frozenset({ClaimStatus.SUBMITTED, ClaimStatus.PENDING}),
    Role.MANAGER: frozenset({ClaimStatus.APPROVED_BY_COORDINATOR, ClaimStatus.REJECTED_BY_MANAGER}),
}


class ClaimStateMachine:
    """Legal status changes per role.

    ``apply`` never mutates its input: it returns a new ``Claim`` or raises,
    leaving the original untouched.
    """

    def __init__(self, transitions: Optional[Mapping[tuple[ClaimStatus, ClaimAction], Transition]] = None):
        self._transitions = dict(transitions or TRANSITIONS)

    def find(self, status: ClaimStatus, action: ClaimAction) -> Optional[Transition]:
        return self._transitions.get((status.canonical(), action))

    def can_apply(self, claim: Claim, action: ClaimAction, role: Role) -> bool:
        transition = self.find(claim.status, action)
        return transition is not None and role in transition.roles

    def allowed_actions(self, claim: Claim, role: Role) -> list[ClaimAction]:
        return [a for a in ClaimAction if self.can_apply(claim, a, role)]

    def apply(
        self,
        claim: Claim,
        action: ClaimAction,
        role: Role,
        *,
        reason: Optional[str] = None,
    ) -> Claim:
        transition = self.find(claim.status, action)
        if transition is None:
            raise InvalidTransitionError(
                f"Cannot {action.value} claim #{claim.claim_id} while it is '{claim.status.value}'"
            )
        if role not in transition.roles:
            raise AuthorizationError(f"Role '{role.value}' cannot {action.value} claims")

        if transition.target.is_rejected():
            text = (reason or "").strip()
            if not text:
                raise ValidationError("Please provide a reason for rejection")
            return replace(claim, status=transition.target, rejection_reason=text)

        return replace(claim, status=transition.target, rejection_reason=None)

    @staticmethod
    def can_delete(claim: Claim, role: Role) -> bool:
        return claim.status in DELETABLE_STATUSES.get(role, frozenset())

    def ensure_can_delete(self, claim: Claim, role: Role) -> None:
        if not self.can_delete(claim, role):
            raise AuthorizationError(
                f"Role '{role.value}' cannot delete claim #{claim.claim_id} while it is '{claim.status.value}'"
            )
