from __future__ import annotations

import logging
import math
import sys
from datetime import date
from typing import Final, Optional

from .amortization import MONTHS_IN_YEAR, monthly_interest
from .utils import add_months, latest_date, resolve_start

logger = logging.getLogger(__name__)

# Float noise tolerated before rounding a month count up
MONTH_EPSILON: Final[float] = 1e-9


def payoff_months(balance: float, annual_rate_pct: float, payment: float) -> Optional[int]:
    """Number of monthly payments needed to clear ``balance``.

    Closed form, no simulation: ``ceil(balance / payment)`` at zero rate,
    otherwise n = ceil(log(P / (P - I)) / log(1 + r)) with I the first
    month's interest and r the monthly rate, evaluated with ``log1p`` so
    tiny rates converge to ``balance / payment``.

    Returns 0 for a paid-off balance and None when the payment is not
    positive or does not exceed the monthly interest.
    """
    if balance <= 0:
        return 0
    if payment <= 0:
        return None
    if annual_rate_pct <= 0:
        return math.ceil(balance / payment)

    interest = monthly_interest(balance, annual_rate_pct)
    if payment <= interest:
        return None

    monthly_rate = annual_rate_pct / 100 / MONTHS_IN_YEAR
    if interest <= 0 or monthly_rate < sys.float_info.epsilon:
        # growth per month is below float resolution
        return math.ceil(balance / payment)
    n = math.log1p(interest / (payment - interest)) / math.log1p(monthly_rate)
    return math.ceil(n - MONTH_EPSILON)


def payoff_date(
    balance: float,
    annual_rate_pct: float,
    payment: float,
    start_date: Optional[date] = None,
) -> Optional[date]:
    """Calendar date at which ``balance`` reaches zero under ``payment``.

    ``start_date`` is returned unchanged for a paid-off balance; None means
    the plan never pays the balance off. A payoff beyond the last
    representable date is reported as that date (``date.max`` or
    ``datetime.max``).
    """
    start = resolve_start(start_date)
    months = payoff_months(balance, annual_rate_pct, payment)
    if months is None:
        return None
    if months == 0:
        return start
    try:
        return add_months(start, months)
    except (ValueError, OverflowError):
        logger.debug("Payoff in %d months is past the calendar range, clamping", months)
        return latest_date(start)
