from __future__ import annotations

from ...common.money import format_money
from ..model import ValidationResult
from .base import ClaimRule, RuleContext


class SupportingDocumentRule(ClaimRule):
    def check(self, ctx: RuleContext, result: ValidationResult) -> None:
        claim = ctx.claim
        threshold = ctx.rules.document_recommended_above
        if not claim.supporting_document and claim.total_amount > threshold:
            result.recommendations.append(
                f"Supporting document recommended for claims over {format_money(threshold)}"
            )


class AutoApprovalRule(ClaimRule):
    """Must run last: eligibility depends on every earlier finding."""

    def check(self, ctx: RuleContext, result: ValidationResult) -> None:
        claim = ctx.claim
        rules = ctx.rules
        if (
            claim.total_amount <= rules.auto_approve_threshold
            and claim.hours_worked <= rules.standard_hours
            and not result.errors
            and not result.warnings
        ):
            result.can_auto_approve = True
            result.recommendations.append(
                f"Claim eligible for automatic approval (under {format_money(rules.auto_approve_threshold)} threshold)"
            )
