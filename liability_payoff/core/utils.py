from __future__ import annotations

from datetime import date, datetime
from typing import Optional, TypeVar

from dateutil.relativedelta import relativedelta

from .. import config

D = TypeVar("D", bound=date)


def round2(value: float) -> float:
    return round(float(value), 2)


def money(value: float, symbol: Optional[str] = None) -> str:
    if symbol is None:
        symbol = config.CURRENCY_SYMBOL
    return f"{symbol}{value:.2f}"


def add_months(start: D, months: int) -> D:
    """Advance a date by whole calendar months.

    Days past the end of the target month are clamped to its last day,
    e.g. 2025-01-31 + 1 month -> 2025-02-28. A ``datetime`` keeps its time.
    Raises ValueError/OverflowError past the last representable year.
    """
    return start + relativedelta(months=months)


def latest_date(like: date) -> date:
    """Last representable calendar moment of the same type as ``like``."""
    if isinstance(like, datetime):
        return datetime.max.replace(tzinfo=like.tzinfo)
    return date.max


def iso_date(value: date) -> str:
    return value.strftime("%Y-%m-%d")


def resolve_start(start_date: Optional[date]) -> date:
    if start_date is None:
        return date.today()
    return start_date
