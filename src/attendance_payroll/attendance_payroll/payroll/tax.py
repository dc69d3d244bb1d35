"""Deduction formulas: progressive income tax and capped social security."""

from __future__ import annotations

from decimal import Decimal
from typing import Sequence

from ..common.money import ZERO, non_negative
from .model import PayrollRates, TaxBracket


def progressive_tax(gross: Decimal, brackets: Sequence[TaxBracket]) -> Decimal:
    """Each bracket taxes only the slice between its threshold and the next one.

    Income below the first threshold is untaxed. Brackets are configuration.
    """
    gross = non_negative(gross)
    tax = ZERO
    for i, bracket in enumerate(brackets):
        if gross <= bracket.threshold:
            break
        upper = brackets[i + 1].threshold if i + 1 < len(brackets) else None
        top = gross if upper is None else min(gross, upper)
        tax += (top - bracket.threshold) * bracket.rate
    return tax


def social_security(gross: Decimal, rates: PayrollRates) -> Decimal:
    """Rate applied to gross clamped into [min_base, max_base], then capped."""
    base = min(max(non_negative(gross), rates.social_security_min_base), rates.social_security_max_base)
    return min(base * rates.social_security_rate, rates.social_security_cap)
