from __future__ import annotations

from decimal import Decimal

import pytest

from src.claims_system.claims_system.common.validators import (
    require_decimal_between,
    require_int_between,
    require_non_empty,
    require_not_blank,
)
from src.claims_system.claims_system.core.exceptions import ValidationError


@pytest.mark.parametrize("value", [12, "12", " 12 ", 12.0, Decimal("12")])
def test_whole_numbers_are_accepted(value):
    assert require_int_between(value, "Hours worked", 1, 200) == 12


@pytest.mark.parametrize(
    "value",
    [12.9, Decimal("12.5"), "12.9", True, False, None, float("nan"), float("inf"), [12]],
)
def test_non_whole_numbers_are_rejected(value):
    with pytest.raises(ValidationError, match="Hours worked must be a whole number"):
        require_int_between(value, "Hours worked", 1, 200)


def test_out_of_range_integer():
    with pytest.raises(ValidationError, match="between 1 and 200"):
        require_int_between(201, "Hours worked", 1, 200)


@pytest.mark.parametrize("value", [202601, None, ["May"], {"m": 1}, "", "   "])
def test_text_fields_require_a_non_blank_string(value):
    with pytest.raises(ValidationError, match="Month is required"):
        require_not_blank(value, "Month")
    with pytest.raises(ValidationError, match="Month is required"):
        require_non_empty(value, "Month")


def test_not_blank_keeps_surrounding_spaces():
    assert require_not_blank(" May 2026 ", "Month") == " May 2026 "
    assert require_non_empty(" May 2026 ", "Month") == "May 2026"


def test_decimal_rejects_booleans():
    with pytest.raises(ValidationError):
        require_decimal_between(True, "Hourly rate", Decimal("0.01"), Decimal("1000"))
