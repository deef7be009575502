from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from datetime import date
from typing import Dict, Final, List, Optional

import pandas as pd

from .utils import add_months, iso_date, resolve_start, round2

logger = logging.getLogger(__name__)

MONTHS_IN_YEAR: Final[int] = 12
# 30-year ceiling on the number of schedule rows
MAX_SCHEDULE_MONTHS: Final[int] = 360
# Residual balance treated as paid off
BALANCE_TOLERANCE: Final[float] = 0.01

SCHEDULE_COLUMNS: Final[List[str]] = ["month", "date", "payment", "interest", "principal", "balance"]
YEARLY_COLUMNS: Final[List[str]] = ["year", "payment", "interest", "principal", "end_balance"]


@dataclass(frozen=True)
class MonthlyEntry:
    """One row of an amortization ledger.

    ``date`` is an ISO ``YYYY-MM-DD`` string; money fields are rounded to 2 dp.
    """

    month: int
    date: str
    payment: float
    interest: float
    principal: float
    balance: float

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


def monthly_interest(balance: float, annual_rate_pct: float) -> float:
    """Simple interest accrued on ``balance`` over one month.

    ``annual_rate_pct`` is a percentage (5 for 5%). Non-positive balances or
    rates accrue nothing. The result is not rounded.
    """
    if balance <= 0 or annual_rate_pct <= 0:
        return 0.0
    return balance * (annual_rate_pct / 100) / MONTHS_IN_YEAR


def fixed_monthly_payment(principal: float, annual_rate_pct: float, term_months: int) -> float:
    """Compute the fixed monthly payment for a fully amortizing loan.

    Parameters
    ----------
    principal : float
        Initial loan amount.
    annual_rate_pct : float
        Nominal annual interest rate as a percentage (e.g., 4 for 4%).
    term_months : int
        Loan term in months.

    Returns
    -------
    float
        The constant monthly payment (unrounded).
    """
    if principal <= 0 or term_months <= 0:
        return 0.0
    monthly_rate = annual_rate_pct / 100 / MONTHS_IN_YEAR
    if monthly_rate <= 0:
        return principal / term_months
    factor = (1 + monthly_rate) ** term_months
    return principal * (monthly_rate * factor) / (factor - 1)


def amortization_schedule(
    balance: float,
    annual_rate_pct: float,
    payment: float,
    start_date: Optional[date] = None,
) -> List[MonthlyEntry]:
    """Generate the monthly ledger until payoff, a debt trap, or the 360-row cap.

    Notes
    -----
    - Returns ``[]`` when there is nothing to pay or no payment.
    - A month whose payment does not exceed its interest ends the schedule
      without emitting a row.
    - The last row pays only interest plus the remaining balance and reports
      a balance of exactly 0.
    """
    if balance <= 0 or payment <= 0:
        return []

    start = resolve_start(start_date)
    rows: List[MonthlyEntry] = []
    remaining = float(balance)
    for m in range(1, MAX_SCHEDULE_MONTHS + 1):
        interest = monthly_interest(remaining, annual_rate_pct)
        principal_component = payment - interest

        if principal_component <= 0:
            logger.debug(
                "Payment %.2f does not exceed interest %.2f at month %d, stopping schedule",
                payment,
                interest,
                m,
            )
            break

        new_balance = remaining - principal_component
        is_final = principal_component >= remaining or new_balance < BALANCE_TOLERANCE

        interest_value = round2(interest)
        if is_final:
            principal_value = round2(remaining)
            payment_value = round2(interest_value + principal_value)
            new_balance = 0.0
        else:
            payment_value = round2(payment)
            principal_value = round2(payment_value - interest_value)

        rows.append(
            MonthlyEntry(
                month=m,
                date=iso_date(add_months(start, m)),
                payment=payment_value,
                interest=interest_value,
                principal=principal_value,
                balance=round2(new_balance),
            )
        )
        if is_final:
            break
        remaining = new_balance
    else:
        logger.debug(
            "Schedule reached the %d-month cap with %.2f outstanding",
            MAX_SCHEDULE_MONTHS,
            remaining,
        )

    return rows


def total_interest(balance: float, annual_rate_pct: float, payment: float) -> float:
    """Total interest paid over the schedule, summed from the rounded rows."""
    schedule = amortization_schedule(balance, annual_rate_pct, payment)
    return round2(sum(entry.interest for entry in schedule))


def monthly_breakdown(
    balance: float, annual_rate_pct: float, payment: float, months: int
) -> List[MonthlyEntry]:
    schedule = amortization_schedule(balance, annual_rate_pct, payment)
    return schedule[: max(0, int(months))]


def schedule_frame(schedule: List[MonthlyEntry]) -> pd.DataFrame:
    """Tabular view of a schedule.

    Columns: month, date, payment, interest, principal, balance
    """
    if not schedule:
        return pd.DataFrame(columns=SCHEDULE_COLUMNS, data=[])
    return pd.DataFrame([entry.to_dict() for entry in schedule], columns=SCHEDULE_COLUMNS)


def aggregate_yearly(schedule: List[MonthlyEntry]) -> pd.DataFrame:
    """Aggregate a monthly schedule by loan year.

    Returns a DataFrame with columns: year, payment, interest, principal, end_balance
    """
    if not schedule:
        return pd.DataFrame(columns=YEARLY_COLUMNS, data=[])

    df = schedule_frame(schedule)
    df["year"] = (df["month"] - 1) // MONTHS_IN_YEAR + 1
    agg = (
        df.groupby("year", as_index=False)[["payment", "interest", "principal"]]
        .sum()
        .sort_values("year")
    )
    agg[["payment", "interest", "principal"]] = agg[["payment", "interest", "principal"]].round(2)
    # Balance left at the end of each loan year
    end_balances = (
        df.groupby("year", as_index=False)["balance"].last().rename(columns={"balance": "end_balance"})
    )
    return agg.merge(end_balances, on="year", how="left")[YEARLY_COLUMNS]
