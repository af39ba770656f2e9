from __future__ import annotations

from ...common.money import format_money
from ..model import ValidationResult
from .base import ClaimRule, RuleContext


class DuplicateClaimRule(ClaimRule):
    """At most one non-rejected claim per lecturer and month label."""

    def check(self, ctx: RuleContext, result: ValidationResult) -> None:
        claim = ctx.claim
        for other in ctx.existing_claims:
            if other.claim_id == claim.claim_id:
                continue
            if other.lecturer_id != claim.lecturer_id or other.month != claim.month:
                continue
            if other.status.is_rejected():
                continue
            result.errors.append(
                f"Duplicate claim found for {claim.month}. Claim #{other.claim_id} already exists."
            )
            return


class TotalAmountRule(ClaimRule):
    def check(self, ctx: RuleContext, result: ValidationResult) -> None:
        expected = ctx.claim.expected_total
        actual = ctx.claim.total_amount
        if abs(actual - expected) > ctx.rules.tolerance:
            result.errors.append(
                f"Total amount mismatch. Expected: {format_money(expected)}, Got: {format_money(actual)}"
            )
