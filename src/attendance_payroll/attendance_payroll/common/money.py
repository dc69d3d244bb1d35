from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

from ..core.constants import MONEY_QUANTUM
from ..core.exceptions import ValidationError

Number = Union[int, float, str, Decimal]

ZERO = Decimal("0")


def to_decimal(value: Number, field_name: str = "amount") -> Decimal:
    """Exact Decimal for money/rate arithmetic (floats go through ``str``)."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool) or value is None:
        raise ValidationError(f"{field_name} must be numeric", code="invalid_number")
    try:
        return Decimal(str(value))
    except InvalidOperation:
        raise ValidationError(f"{field_name} must be numeric, got {value!r}", code="invalid_number") from None


def non_negative(value: Decimal) -> Decimal:
    return value if value > ZERO else ZERO


def quantize_money(value: Decimal) -> Decimal:
    """Display rounding only; never feed the result back into a calculation."""
    return value.quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)
