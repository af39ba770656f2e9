from __future__ import annotations

from ...common.money import format_money
from ..model import ValidationResult
from .base import ClaimRule, RuleContext


class HoursRule(ClaimRule):
    """Hours must be within the monthly bound; above standard hours needs justification."""

    def check(self, ctx: RuleContext, result: ValidationResult) -> None:
        hours = ctx.claim.hours_worked
        rules = ctx.rules
        if hours < rules.min_hours or hours > rules.max_hours:
            result.errors.append(
                f"Hours worked ({hours}) must be between {rules.min_hours} and {rules.max_hours}"
            )
        elif hours > rules.standard_hours:
            result.warnings.append(
                f"Hours worked ({hours}) exceeds standard monthly hours ({rules.standard_hours}). "
                "Requires justification."
            )


class HourlyRateRule(ClaimRule):
    def check(self, ctx: RuleContext, result: ValidationResult) -> None:
        rate = ctx.claim.hourly_rate
        rules = ctx.rules
        if rate < rules.min_hourly_rate or rate > rules.max_hourly_rate:
            result.errors.append(
                f"Hourly rate ({format_money(rate)}) must be between "
                f"{format_money(rules.min_hourly_rate)} and {format_money(rules.max_hourly_rate)}"
            )
