from __future__ import annotations

from typing import Optional, Sequence

from ..core.exceptions import PersistenceError
from ..core.logging import get_logger
from ..lecturers.model import Lecturer
from ..lecturers.repository import LecturerLookup
from .model import Claim, ValidationResult
from .rules.advisory import AutoApprovalRule, SupportingDocumentRule
from .rules.base import ClaimRule, ClaimRules, RuleContext
from .rules.bounds import HourlyRateRule, HoursRule
from .rules.consistency import DuplicateClaimRule, TotalAmountRule
from .rules.lecturer import LecturerExistsRule, RateConsistencyRule

logger = get_logger(__name__)

SYSTEM_ERROR_MESSAGE = "System error during validation. Please contact support."


def default_rule_chain() -> list[ClaimRule]:
    # Order matters: findings are reported in this order and the
    # auto-approval rule reads everything before it.
    return [
        HoursRule(),
        HourlyRateRule(),
        LecturerExistsRule(),
        RateConsistencyRule(),
        DuplicateClaimRule(),
        TotalAmountRule(),
        SupportingDocumentRule(),
        AutoApprovalRule(),
    ]


class ClaimValidator:
    """Checks a claim against the business rules.

    Every rule runs (no short-circuit) and findings are returned as data:
    errors block validity and auto-approval, warnings block only
    auto-approval, recommendations are informational. Nothing is persisted.
    """

    def __init__(
        self,
        lecturers: LecturerLookup,
        *,
        rules: Optional[ClaimRules] = None,
        chain: Optional[Sequence[ClaimRule]] = None,
    ):
        self._lecturers = lecturers
        self._rules = rules or ClaimRules()
        self._chain = list(chain) if chain is not None else default_rule_chain()

    @property
    def rules(self) -> ClaimRules:
        return self._rules

    def validate(self, claim: Claim, existing_claims: Sequence[Claim] = ()) -> ValidationResult:
        """``existing_claims`` are the other claims of the same lecturer and month."""

        result = ValidationResult(claim_id=claim.claim_id)

        lecturer: Optional[Lecturer] = None
        lecturer_checked = True
        try:
            lecturer = self._lecturers.get_by_id(claim.lecturer_id)
        except PersistenceError:
            logger.exception("lecturer_lookup_failed", claim_id=claim.claim_id, lecturer_id=claim.lecturer_id)
            result.errors.append(SYSTEM_ERROR_MESSAGE)
            lecturer_checked = False

        ctx = RuleContext(
            claim=claim,
            lecturer=lecturer,
            existing_claims=tuple(existing_claims),
            rules=self._rules,
            lecturer_checked=lecturer_checked,
        )
        for rule in self._chain:
            rule.check(ctx, result)

        logger.debug(
            "claim_validated",
            claim_id=claim.claim_id,
            valid=result.is_valid,
            errors=len(result.errors),
            warnings=len(result.warnings),
            can_auto_approve=result.can_auto_approve,
        )
        return result
