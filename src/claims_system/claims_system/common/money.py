from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from ..core.constants import CURRENCY_SYMBOL

CENTS = Decimal("0.01")


def to_money(value: Decimal) -> Decimal:
    """Round to cents (decimal(10,2) in the database)."""
    return Decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)


def sum_money(values: Iterable[Decimal]) -> Decimal:
    return sum(values, Decimal("0"))


def format_money(value: Decimal) -> str:
    return f"{CURRENCY_SYMBOL}{to_money(value):,.2f}"
