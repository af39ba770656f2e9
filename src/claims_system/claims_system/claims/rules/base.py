from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Sequence

from ...core import constants
from ...lecturers.model import Lecturer
from ..model import Claim, ValidationResult


@dataclass(frozen=True)
class ClaimRules:
    """Thresholds the validation rules are evaluated against."""

    min_hours: int = constants.MIN_HOURS_PER_MONTH
    max_hours: int = constants.MAX_HOURS_PER_MONTH
    standard_hours: int = constants.STANDARD_WORKING_HOURS
    min_hourly_rate: Decimal = constants.MIN_HOURLY_RATE
    max_hourly_rate: Decimal = constants.MAX_HOURLY_RATE
    tolerance: Decimal = constants.AMOUNT_TOLERANCE
    document_recommended_above: Decimal = constants.DOCUMENT_RECOMMENDED_ABOVE
    auto_approve_threshold: Decimal = constants.AUTO_APPROVE_THRESHOLD


@dataclass(frozen=True)
class RuleContext:
    claim: Claim
    lecturer: Optional[Lecturer]
    existing_claims: Sequence[Claim]
    rules: ClaimRules
    # False when the lecturer lookup itself failed; lecturer rules then stay silent.
    lecturer_checked: bool = True


class ClaimRule(ABC):
    """Strategy Pattern: one business rule that appends findings to a result."""

    @abstractmethod
    def check(self, ctx: RuleContext, result: ValidationResult) -> None:
        raise NotImplementedError
