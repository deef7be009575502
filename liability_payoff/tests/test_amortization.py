import math
from datetime import date

import pytest

from liability_payoff.core.amortization import (
    MAX_SCHEDULE_MONTHS,
    aggregate_yearly,
    amortization_schedule,
    fixed_monthly_payment,
    monthly_breakdown,
    monthly_interest,
    schedule_frame,
    total_interest,
)

START = date(2025, 1, 1)


def test_monthly_interest_standard_case():
    assert math.isclose(monthly_interest(10_000, 5), 41.67, abs_tol=0.01)


def test_monthly_interest_credit_card_case():
    assert monthly_interest(5_000, 24) == pytest.approx(100.0)


@pytest.mark.parametrize("balance,rate", [(0, 5), (-5_000, 5), (10_000, 0), (10_000, -3)])
def test_monthly_interest_is_zero_for_non_positive_inputs(balance, rate):
    assert monthly_interest(balance, rate) == 0


def test_monthly_interest_is_not_rounded():
    assert math.isclose(monthly_interest(0.01, 5), 0.0000417, rel_tol=1e-2)


@pytest.mark.parametrize("balance,payment", [(0, 500), (-100, 500), (10_000, 0), (10_000, -100)])
def test_schedule_empty_for_nothing_to_pay_or_no_payment(balance, payment):
    assert amortization_schedule(balance, 5, payment, START) == []


def test_schedule_zero_interest():
    schedule = amortization_schedule(1_000, 0, 300, START)
    assert len(schedule) == 4
    for entry in schedule[:3]:
        assert entry.payment == 300
        assert entry.interest == 0
        assert entry.principal == 300
    assert schedule[0].balance == 700
    assert schedule[-1].payment == 100
    assert schedule[-1].balance == 0


def test_schedule_first_row_of_standard_loan():
    first = amortization_schedule(1_000, 12, 200, START)[0]
    assert first.month == 1
    assert first.date == "2025-02-01"
    assert first.interest == 10
    assert first.principal == 190
    assert first.balance == 810


def test_schedule_final_row_pays_only_what_is_left():
    schedule = amortization_schedule(1_000, 12, 200, START)
    assert len(schedule) == 6
    last = schedule[-1]
    assert last.principal == 30.81
    assert last.interest == 0.31
    assert last.payment == 31.12
    assert last.balance == 0


def test_schedule_stops_at_debt_trap_without_emitting_a_row():
    # interest on 10k @12% is exactly 100 per month
    assert amortization_schedule(10_000, 12, 100, START) == []
    assert amortization_schedule(10_000, 12, 50, START) == []


def test_schedule_capped_at_360_months():
    schedule = amortization_schedule(1_000_000, 5, 4_200, START)
    assert len(schedule) == MAX_SCHEDULE_MONTHS
    assert schedule[-1].balance > 0
    assert schedule[-1].date == "2055-01-01"


def test_schedule_months_and_dates():
    schedule = amortization_schedule(1_000, 0, 250, date(2025, 1, 31))
    assert [e.month for e in schedule] == [1, 2, 3, 4]
    assert [e.date for e in schedule] == ["2025-02-28", "2025-03-31", "2025-04-30", "2025-05-31"]


@pytest.mark.parametrize(
    "balance,rate,payment",
    [(10_000, 6, 500), (10_000, 7.5, 300), (5_000, 24, 200), (200_000, 3.5, 898), (1_234.56, 19.9, 77.77)],
)
def test_schedule_row_invariants(balance, rate, payment):
    schedule = amortization_schedule(balance, rate, payment, START)
    assert 0 < len(schedule) <= MAX_SCHEDULE_MONTHS
    for prev, entry in zip(schedule, schedule[1:]):
        assert entry.balance <= prev.balance
        assert entry.month == prev.month + 1
    for entry in schedule:
        assert round(entry.interest + entry.principal, 2) == entry.payment
        for value in (entry.payment, entry.interest, entry.principal, entry.balance):
            assert value == round(value, 2)


@pytest.mark.parametrize("balance,rate,payment", [(10_000, 6, 500), (5_000, 24, 200), (1_000, 0, 300)])
def test_schedule_principal_sums_to_balance(balance, rate, payment):
    schedule = amortization_schedule(balance, rate, payment, START)
    assert schedule[-1].balance == 0
    assert math.isclose(sum(e.principal for e in schedule), balance, abs_tol=0.5)


def test_schedule_is_deterministic():
    a = amortization_schedule(25_000, 7.5, 450, START)
    b = amortization_schedule(25_000, 7.5, 450, START)
    assert a == b


def test_total_interest():
    assert math.isclose(total_interest(1_000, 12, 200), 31.12, abs_tol=1e-9)


def test_total_interest_zero_cases():
    assert total_interest(1_000, 0, 300) == 0
    assert total_interest(0, 12, 300) == 0
    assert total_interest(10_000, 12, 100) == 0


def test_monthly_breakdown_truncates():
    full = amortization_schedule(1_000, 12, 200)
    assert monthly_breakdown(1_000, 12, 200, 3) == full[:3]
    assert len(monthly_breakdown(1_000, 12, 200, 100)) == len(full)
    assert monthly_breakdown(1_000, 12, 200, 0) == []


def test_fixed_payment_known_case():
    # Known approximate monthly payment for 100k @5% over 20y ~ 659.96
    payment = fixed_monthly_payment(100_000, 5, 240)
    assert math.isclose(payment, 659.96, rel_tol=1e-3, abs_tol=1e-1)
    schedule = amortization_schedule(100_000, 5, payment, START)
    assert abs(len(schedule) - 240) <= 1
    assert schedule[-1].balance == 0


def test_fixed_payment_edge_cases():
    assert fixed_monthly_payment(12_000, 0, 12) == 1_000
    assert fixed_monthly_payment(0, 5, 12) == 0
    assert fixed_monthly_payment(12_000, 5, 0) == 0


def test_schedule_frame_columns():
    df = schedule_frame(amortization_schedule(1_000, 12, 200, START))
    assert list(df.columns) == ["month", "date", "payment", "interest", "principal", "balance"]
    assert len(df) == 6
    assert df.iloc[-1]["balance"] == 0.0

    empty = schedule_frame([])
    assert empty.empty
    assert list(empty.columns) == ["month", "date", "payment", "interest", "principal", "balance"]


def test_aggregate_yearly_matches_totals():
    schedule = amortization_schedule(10_000, 6, 500, START)
    yearly = aggregate_yearly(schedule)
    assert list(yearly["year"]) == [1, 2]
    assert list(yearly.columns) == ["year", "payment", "interest", "principal", "end_balance"]
    assert math.isclose(yearly["interest"].sum(), total_interest(10_000, 6, 500), abs_tol=0.01)
    assert yearly.iloc[-1]["end_balance"] == 0.0
    assert aggregate_yearly([]).empty
