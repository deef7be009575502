from .amortization import (
	MonthlyEntry,
	monthly_interest,
	fixed_monthly_payment,
	amortization_schedule,
	total_interest,
	monthly_breakdown,
	schedule_frame,
	aggregate_yearly,
)
from .payoff import payoff_date, payoff_months
from .validation import PaymentValidation, validate_minimum_payment
from .projection import (
	AmortizationSummary,
	summarize,
	monthly_equivalent,
	months_remaining,
	build_projection,
	liability_summary,
)
from .utils import round2, money, add_months, latest_date, iso_date

__all__ = [
	"MonthlyEntry",
	"monthly_interest",
	"fixed_monthly_payment",
	"amortization_schedule",
	"total_interest",
	"monthly_breakdown",
	"schedule_frame",
	"aggregate_yearly",
	"payoff_date",
	"payoff_months",
	"PaymentValidation",
	"validate_minimum_payment",
	"AmortizationSummary",
	"summarize",
	"monthly_equivalent",
	"months_remaining",
	"build_projection",
	"liability_summary",
	"round2",
	"money",
	"add_months",
	"latest_date",
	"iso_date",
]
