from __future__ import annotations

from ...common.money import format_money
from ..model import ValidationResult
from .base import ClaimRule, RuleContext


class LecturerExistsRule(ClaimRule):
    def check(self, ctx: RuleContext, result: ValidationResult) -> None:
        if ctx.lecturer_checked and ctx.lecturer is None:
            result.errors.append("Lecturer not found in system")


class RateConsistencyRule(ClaimRule):
    """The claim keeps its submitted rate; a drift from the register is only a warning."""

    def check(self, ctx: RuleContext, result: ValidationResult) -> None:
        lecturer = ctx.lecturer
        if lecturer is None:
            return

        claim_rate = ctx.claim.hourly_rate
        if abs(lecturer.hourly_rate - claim_rate) > ctx.rules.tolerance:
            result.warnings.append(
                f"Claim hourly rate ({format_money(claim_rate)}) differs from lecturer's "
                f"registered rate ({format_money(lecturer.hourly_rate)})"
            )
