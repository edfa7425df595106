"""Fixed-payment amortization for the traditional payoff track.

Pure functions: Decimal in, MonthlyResult out. No I/O.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterator

from heloc_accelerator.engine.errors import NonAmortizingError
from heloc_accelerator.engine.pmi import apply_pmi, pmi_active_at_start
from heloc_accelerator.engine.validation import validate_loan_terms
from heloc_accelerator.models.results import MonthlyResult
from heloc_accelerator.models.scenario import PmiTerms

TWO_PLACES = Decimal("0.01")
ZERO = Decimal("0")

BALANCE_EPSILON = Decimal("0.01")  # Floating residue below a cent counts as paid
MAX_PROJECTION_MONTHS = 600  # 50 years
PAYMENT_TOLERANCE = Decimal("0.01")  # Payments rounded to the cent still amortize


@dataclass(frozen=True)
class SimulationLimits:
    epsilon: Decimal = BALANCE_EPSILON
    max_months: int = MAX_PROJECTION_MONTHS


DEFAULT_LIMITS = SimulationLimits()


def monthly_interest(balance: Decimal, annual_rate: Decimal) -> Decimal:
    return (balance * annual_rate / 12).quantize(TWO_PLACES, ROUND_HALF_UP)


def _annuity_payment(principal: Decimal, annual_rate: Decimal, term_months: int) -> Decimal:
    if annual_rate <= 0:
        return principal / term_months
    r = annual_rate / 12
    # M = P * [r(1+r)^n] / [(1+r)^n - 1]
    factor = (1 + r) ** term_months
    return principal * (r * factor) / (factor - 1)


def monthly_payment(principal: Decimal, annual_rate: Decimal, term_months: int) -> Decimal:
    """Calculate the fixed monthly payment that retires principal over term_months."""
    if principal <= 0:
        return Decimal("0")
    return _annuity_payment(principal, annual_rate, term_months).quantize(
        TWO_PLACES, ROUND_HALF_UP
    )


def remaining_balance(
    principal: Decimal,
    annual_rate: Decimal,
    term_months: int,
    months_paid: int,
) -> Decimal:
    """Closed-form balance after months_paid scheduled payments."""
    if months_paid >= term_months:
        return Decimal("0")
    if months_paid <= 0:
        return principal

    pmt = _annuity_payment(principal, annual_rate, term_months)
    remaining = term_months - months_paid
    if annual_rate <= 0:
        return (pmt * remaining).quantize(TWO_PLACES, ROUND_HALF_UP)

    r = annual_rate / 12
    factor = (1 + r) ** remaining
    # Present value of the payments still owed
    return (pmt * (factor - 1) / (r * factor)).quantize(TWO_PLACES, ROUND_HALF_UP)


def check_amortizes(
    principal: Decimal,
    annual_rate: Decimal,
    term_months: int,
    payment: Decimal,
) -> None:
    """Raise NonAmortizingError when payment cannot retire principal within the term."""
    required = _annuity_payment(principal, annual_rate, term_months)
    required_display = required.quantize(TWO_PLACES, ROUND_HALF_UP)

    first_interest = monthly_interest(principal, annual_rate)
    if payment <= first_interest:
        raise NonAmortizingError(
            payment, required_display, "Payment does not cover the first month's interest"
        )
    if payment + PAYMENT_TOLERANCE < required:
        raise NonAmortizingError(
            payment,
            required_display,
            f"Payment cannot retire the principal within {term_months} months",
        )


def scheduled_principal(
    balance: Decimal,
    interest: Decimal,
    payment: Decimal,
    period: int,
    term_months: int,
) -> Decimal:
    """Principal portion of the contractual payment.

    Never overshoots the balance; at maturity the whole remaining balance is due.
    """
    principal = payment - interest
    if principal > balance or period >= term_months:
        return balance
    return principal


def amortize(
    principal: Decimal,
    annual_rate: Decimal,
    term_months: int,
    payment: Decimal | None = None,
    *,
    pmi: PmiTerms | None = None,
    limits: SimulationLimits = DEFAULT_LIMITS,
) -> Iterator[MonthlyResult]:
    """Traditional payoff track, one MonthlyResult per month.

    Inputs are checked eagerly; the schedule itself is produced lazily and
    each call starts a fresh, independent iterator.

    Args:
        principal: Starting loan balance
        annual_rate: Annual interest rate (e.g. 0.065 for 6.5%)
        term_months: Contractual term
        payment: Fixed monthly payment; derived from the term when omitted
        pmi: Optional PMI/LTV tracking terms
        limits: Balance epsilon used for the payoff test
    """
    validate_loan_terms(principal, annual_rate, term_months, payment)
    if payment is None:
        payment = monthly_payment(principal, annual_rate, term_months)
    check_amortizes(principal, annual_rate, term_months, payment)
    return _schedule(principal, annual_rate, term_months, payment, pmi, limits.epsilon)


def _schedule(
    principal: Decimal,
    annual_rate: Decimal,
    term_months: int,
    payment: Decimal,
    pmi: PmiTerms | None,
    epsilon: Decimal,
) -> Iterator[MonthlyResult]:
    balance = principal
    pmi_active = pmi_active_at_start(pmi, principal)
    cumulative_interest = ZERO
    cumulative_principal = ZERO

    for period in range(1, term_months + 1):
        if balance <= epsilon:
            return

        interest = monthly_interest(balance, annual_rate)
        principal_paid = scheduled_principal(balance, interest, payment, period, term_months)
        ending = balance - principal_paid

        pmi_month = apply_pmi(pmi, pmi_active, ending, epsilon)
        pmi_active = pmi_month.active

        cumulative_interest += interest
        cumulative_principal += principal_paid

        yield MonthlyResult(
            month=period,
            beginning_balance=balance,
            ending_balance=ending,
            payment=interest + principal_paid,
            interest=interest,
            principal=principal_paid,
            pmi_payment=pmi_month.payment,
            ltv=pmi_month.ltv,
            pmi_eliminated=pmi_month.eliminated,
            total_outflow=interest + principal_paid + pmi_month.payment,
            cumulative_interest=cumulative_interest,
            cumulative_principal=cumulative_principal,
        )
        balance = ending


def yearly_summary(track: list[MonthlyResult] | tuple[MonthlyResult, ...]) -> list[dict]:
    """Aggregate a monthly track by year.

    Returns list of dicts with keys: year, principal, interest, heloc_interest,
    pmi, ending_balance, ending_heloc_balance
    """
    yearly: list[dict] = []
    year_principal = ZERO
    year_interest = ZERO
    year_heloc_interest = ZERO
    year_pmi = ZERO

    for i, m in enumerate(track, start=1):
        year_principal += m.principal
        year_interest += m.interest
        year_heloc_interest += m.heloc_interest
        year_pmi += m.pmi_payment

        if m.month % 12 == 0 or i == len(track):
            yearly.append({
                "year": (m.month - 1) // 12 + 1,
                "principal": year_principal,
                "interest": year_interest,
                "heloc_interest": year_heloc_interest,
                "pmi": year_pmi,
                "ending_balance": m.ending_balance,
                "ending_heloc_balance": m.ending_heloc_balance,
            })
            year_principal = ZERO
            year_interest = ZERO
            year_heloc_interest = ZERO
            year_pmi = ZERO

    return yearly
