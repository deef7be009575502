from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .amortization import monthly_interest
from .utils import money


@dataclass(frozen=True)
class PaymentValidation:
    is_valid: bool
    message: Optional[str] = None


def validate_minimum_payment(
    balance: float,
    annual_rate_pct: float,
    payment: float,
    currency_symbol: Optional[str] = None,
) -> PaymentValidation:
    """Check that ``payment`` eventually clears ``balance``.

    The payment must be positive and, when interest accrues, strictly greater
    than one month of interest. ``message`` is meant for end users.
    """
    if balance <= 0:
        return PaymentValidation(is_valid=True)

    if payment <= 0:
        return PaymentValidation(is_valid=False, message="Minimum payment must be greater than 0")

    if annual_rate_pct > 0:
        interest = monthly_interest(balance, annual_rate_pct)
        if payment <= interest:
            return PaymentValidation(
                is_valid=False,
                message=f"Minimum payment must be greater than monthly interest ({money(interest, currency_symbol)})",
            )

    return PaymentValidation(is_valid=True)
