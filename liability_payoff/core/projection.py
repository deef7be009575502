from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional

import pandas as pd

from .. import config
from .amortization import (
    MonthlyEntry,
    aggregate_yearly,
    amortization_schedule,
    schedule_frame,
)
from .payoff import payoff_date, payoff_months
from .utils import iso_date, resolve_start, round2
from .validation import validate_minimum_payment

# Average month length used for term countdowns
DAYS_PER_MONTH: float = 30.4375


@dataclass(frozen=True)
class AmortizationSummary:
    payment_monthly: float
    payoff_date: Optional[date]
    months_to_payoff: Optional[int]
    total_interest: float
    total_paid: float
    schedule_monthly: List[MonthlyEntry]
    schedule_yearly: pd.DataFrame

    @property
    def reached_payoff(self) -> bool:
        if not self.schedule_monthly:
            return self.months_to_payoff == 0
        return self.schedule_monthly[-1].balance == 0

    def frame(self) -> pd.DataFrame:
        return schedule_frame(self.schedule_monthly)


def summarize(
    balance: float,
    annual_rate_pct: float,
    payment: float,
    start_date: Optional[date] = None,
) -> AmortizationSummary:
    """Convenience wrapper returning the payoff figures and schedules."""
    start = resolve_start(start_date)
    schedule = amortization_schedule(balance, annual_rate_pct, payment, start)
    return AmortizationSummary(
        payment_monthly=round2(payment) if payment > 0 else 0.0,
        payoff_date=payoff_date(balance, annual_rate_pct, payment, start),
        months_to_payoff=payoff_months(balance, annual_rate_pct, payment),
        total_interest=round2(sum(e.interest for e in schedule)),
        total_paid=round2(sum(e.payment for e in schedule)),
        schedule_monthly=schedule,
        schedule_yearly=aggregate_yearly(schedule),
    )


def monthly_equivalent(amount: float, frequency: Optional[str] = None) -> float:
    """Convert a payment made at ``frequency`` into its monthly amount."""
    key = (frequency or config.DEFAULT_PAYMENT_FREQUENCY).lower()
    multipliers = config.FREQUENCY_MULTIPLIERS
    if key not in multipliers:
        raise ValueError(f"Unknown payment frequency: {frequency!r} (expected one of {sorted(multipliers)})")
    return amount * multipliers[key]


def _as_datetime(value: date) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, datetime.min.time())


def months_remaining(term_end: date, as_of: Optional[date] = None) -> int:
    """Whole months (rounded up) between ``as_of`` and ``term_end``, never negative."""
    start = resolve_start(as_of)
    if not isinstance(term_end, datetime) and not isinstance(start, datetime):
        days = (term_end - start).days
    else:
        # Naive values are read in the other side's timezone
        end_dt = _as_datetime(term_end)
        start_dt = _as_datetime(start)
        if end_dt.tzinfo is None:
            end_dt = end_dt.replace(tzinfo=start_dt.tzinfo)
        elif start_dt.tzinfo is None:
            start_dt = start_dt.replace(tzinfo=end_dt.tzinfo)
        days = (end_dt - start_dt).total_seconds() / 86400
    return max(0, math.ceil(days / DAYS_PER_MONTH))


def build_projection(
    current_balance: float,
    interest_rate: float,
    monthly_payment: Optional[float] = None,
    minimum_payment: Optional[float] = None,
    payment_frequency: Optional[str] = None,
    start_date: Optional[date] = None,
) -> Dict[str, Any]:
    """JSON-ready payoff projection for a stored liability.

    A custom ``monthly_payment`` wins; otherwise the stored ``minimum_payment``
    is normalised to a monthly amount using ``payment_frequency``.
    """
    if monthly_payment is None:
        monthly_payment = monthly_equivalent(minimum_payment or 0.0, payment_frequency)

    summary = summarize(current_balance, interest_rate, monthly_payment, start_date)
    validation = validate_minimum_payment(current_balance, interest_rate, monthly_payment)
    projected = summary.payoff_date

    return {
        "currentBalance": round2(current_balance),
        "interestRate": float(interest_rate),
        "monthlyPayment": round2(monthly_payment),
        "projectedPayoffDate": iso_date(projected) if projected is not None else None,
        "monthsToPayoff": summary.months_to_payoff,
        "totalInterestToPay": summary.total_interest,
        "isPaymentValid": validation.is_valid,
        "validationMessage": validation.message,
        "schedule": [entry.to_dict() for entry in summary.schedule_monthly],
    }


def liability_summary(liabilities: Iterable[Mapping[str, Any]]) -> Dict[str, Any]:
    """Total debt, per-type breakdown and balance-weighted interest rate."""
    total_debt = 0.0
    weighted_interest_sum = 0.0
    by_type: Dict[str, Dict[str, Any]] = {}

    for liability in liabilities:
        balance = float(liability["currentBalance"])
        rate = float(liability["interestRate"])
        total_debt += balance
        weighted_interest_sum += balance * rate

        bucket = by_type.setdefault(liability["type"], {"balance": 0.0, "count": 0})
        bucket["balance"] += balance
        bucket["count"] += 1

    if not by_type:
        return {"totalDebt": 0, "byType": [], "totalInterestRate": 0}

    return {
        "totalDebt": total_debt,
        "byType": [{"type": t, "balance": d["balance"], "count": d["count"]} for t, d in by_type.items()],
        "totalInterestRate": weighted_interest_sum / total_debt if total_debt > 0 else 0,
    }
