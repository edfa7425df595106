"""Month-by-month acceleration simulator.

Advances the strategy track (mortgage + optional HELOC) one month at a time
against a precomputed traditional baseline. Each month:

    1. Reduce active income/expense scenarios to discretionary income.
    2. Accrue mortgage and HELOC interest on beginning balances.
    3. Pay the contractual mortgage payment (scheduled principal).
    4. Service HELOC interest from the discretionary pool; shortfall capitalizes.
    5. Apply the remaining pool as extra mortgage principal.
    6. Ask the utilization policy whether to draw on the HELOC for more principal.
    7. Apply any leftover pool to the HELOC balance.
    8. Update PMI/LTV and running totals.

Once the mortgage is settled, the freed contractual payment joins the pool
and retires the HELOC. The loop stops when both balances are within epsilon
or months_to_project is reached.

Pure computation. No I/O beyond logging.
"""

import logging
from bisect import bisect_left
from dataclasses import dataclass, replace
from decimal import Decimal
from itertools import islice
from typing import Sequence

from heloc_accelerator.engine.amortization import (
    DEFAULT_LIMITS,
    MAX_PROJECTION_MONTHS,
    SimulationLimits,
    amortize,
    check_amortizes,
    monthly_interest,
    monthly_payment,
    scheduled_principal,
)
from heloc_accelerator.engine.cashflow import MonthlyCashFlow, monthly_cash_flow
from heloc_accelerator.engine.pmi import apply_pmi, pmi_active_at_start
from heloc_accelerator.engine.policy import (
    DEFAULT_POLICY,
    HelocUtilizationPolicy,
    UtilizationContext,
)
from heloc_accelerator.engine.validation import (
    validate_heloc,
    validate_mortgage,
    validate_projection,
    validate_scenarios,
)
from heloc_accelerator.models.results import MonthlyResult
from heloc_accelerator.models.scenario import (
    ExpenseScenario,
    HelocInput,
    IncomeScenario,
    MortgageInput,
    PmiTerms,
)

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


@dataclass(frozen=True)
class LoanTerms:
    """Validated inputs with the contractual payment resolved."""
    mortgage: MortgageInput
    payment: Decimal
    heloc: HelocInput | None
    pmi: PmiTerms | None


@dataclass(frozen=True)
class StrategyState:
    month: int  # Last completed month, 0 before the first
    mortgage_balance: Decimal
    heloc_balance: Decimal
    pmi_active: bool
    cumulative_interest: Decimal = ZERO
    cumulative_principal: Decimal = ZERO

    def settled(self, epsilon: Decimal) -> bool:
        return self.mortgage_balance <= epsilon and self.heloc_balance <= epsilon


def prepare_loan(
    mortgage: MortgageInput,
    heloc: HelocInput | None,
    income_scenarios: Sequence[IncomeScenario],
    expense_scenarios: Sequence[ExpenseScenario],
    months_to_project: int,
    limits: SimulationLimits = DEFAULT_LIMITS,
) -> LoanTerms:
    """Validate every input and resolve the contractual payment.

    Raises InvalidInputError or NonAmortizingError; nothing is simulated on failure.
    """
    validate_mortgage(mortgage)
    validate_heloc(heloc)
    validate_scenarios(income_scenarios, expense_scenarios)
    validate_projection(months_to_project, limits.max_months)

    payment = mortgage.monthly_payment
    if payment is None:
        payment = monthly_payment(
            mortgage.principal, mortgage.annual_interest_rate, mortgage.term_in_months
        )
    check_amortizes(
        mortgage.principal, mortgage.annual_interest_rate, mortgage.term_in_months, payment
    )
    return LoanTerms(mortgage=mortgage, payment=payment, heloc=heloc, pmi=mortgage.pmi_terms)


def initial_state(loan: LoanTerms) -> StrategyState:
    return StrategyState(
        month=0,
        mortgage_balance=loan.mortgage.principal,
        heloc_balance=ZERO,
        pmi_active=pmi_active_at_start(loan.pmi, loan.mortgage.principal),
    )


def advance_strategy(
    state: StrategyState,
    loan: LoanTerms,
    flow: MonthlyCashFlow,
    policy: HelocUtilizationPolicy,
    epsilon: Decimal,
) -> tuple[MonthlyResult, StrategyState]:
    """Simulate one month of the strategy track.

    Returns the month's result (without baseline comparisons) and the next state.
    """
    month = state.month + 1
    mortgage = loan.mortgage
    heloc = loan.heloc

    discretionary = flow.discretionary_income
    cash = max(discretionary, ZERO)  # Negative discretionary income is not a credit

    m_begin = state.mortgage_balance
    h_begin = state.heloc_balance

    # Contractual payment
    if m_begin > epsilon:
        m_interest = monthly_interest(m_begin, mortgage.annual_interest_rate)
        base = scheduled_principal(
            m_begin, m_interest, loan.payment, month, mortgage.term_in_months
        )
        freed = max(loan.payment - m_interest - base, ZERO)
    else:
        m_interest = ZERO
        base = ZERO
        freed = loan.payment

    pool = cash + freed

    # HELOC interest comes first; what the pool cannot cover capitalizes
    h_interest = ZERO
    if heloc is not None and h_begin > 0:
        h_interest = monthly_interest(h_begin, heloc.heloc_rate)
    h_interest_paid = min(pool, h_interest)
    pool -= h_interest_paid
    h_balance = h_begin + h_interest - h_interest_paid

    # Extra principal from discretionary income
    m_remaining = m_begin - base
    extra = ZERO
    if m_remaining > epsilon:
        extra = min(pool, m_remaining)
        pool -= extra
        m_remaining -= extra

    # HELOC draw against remaining principal
    draw = ZERO
    if heloc is not None and m_remaining > epsilon and cash > 0:
        context = UtilizationContext(
            month=month,
            mortgage_rate=mortgage.annual_interest_rate,
            heloc_rate=heloc.heloc_rate,
            mortgage_balance=m_begin,
            heloc_balance=h_balance,
            heloc_limit=heloc.heloc_limit,
        )
        if policy.should_draw(context):
            available = max(heloc.credit_line - h_balance, ZERO)
            draw = min(available, m_remaining, cash)
            m_remaining -= draw
            h_balance += draw

    # Leftover pool pays down the HELOC
    paydown = min(pool, h_balance) if h_balance > 0 else ZERO
    h_balance -= paydown

    pmi_month = apply_pmi(loan.pmi, state.pmi_active, m_remaining, epsilon)

    principal_total = base + extra + draw
    cumulative_interest = state.cumulative_interest + m_interest + h_interest
    cumulative_principal = state.cumulative_principal + principal_total

    result = MonthlyResult(
        month=month,
        beginning_balance=m_begin,
        ending_balance=m_remaining,
        payment=m_interest + base,
        interest=m_interest,
        principal=principal_total,
        extra_principal=extra,
        beginning_heloc_balance=h_begin,
        ending_heloc_balance=h_balance,
        heloc_draw=draw,
        heloc_interest=h_interest,
        heloc_principal=paydown,
        pmi_payment=pmi_month.payment,
        ltv=pmi_month.ltv,
        pmi_eliminated=pmi_month.eliminated,
        gross_income=flow.gross_income,
        net_income=flow.net_income,
        expenses=flow.expenses,
        discretionary_income=discretionary,
        total_outflow=m_interest + base + extra + h_interest_paid + paydown + pmi_month.payment,
        cumulative_interest=cumulative_interest,
        cumulative_principal=cumulative_principal,
    )
    next_state = StrategyState(
        month=month,
        mortgage_balance=m_remaining,
        heloc_balance=h_balance,
        pmi_active=pmi_month.active,
        cumulative_interest=cumulative_interest,
        cumulative_principal=cumulative_principal,
    )
    return result, next_state


def baseline_track(
    loan: LoanTerms,
    months_to_project: int,
    limits: SimulationLimits = DEFAULT_LIMITS,
) -> tuple[MonthlyResult, ...]:
    """Traditional track truncated to the projection window."""
    mortgage = loan.mortgage
    schedule = amortize(
        mortgage.principal,
        mortgage.annual_interest_rate,
        mortgage.term_in_months,
        loan.payment,
        pmi=loan.pmi,
        limits=limits,
    )
    return tuple(islice(schedule, months_to_project))


def _months_ahead(descending_balances: list[Decimal], debt: Decimal, month: int) -> int:
    """Months the baseline needs to reach debt, minus the current month.

    descending_balances holds negated baseline ending balances (ascending order).
    """
    still_above = bisect_left(descending_balances, -debt)
    if still_above == len(descending_balances):
        # Baseline never gets this low within the projection window
        return max(len(descending_balances) - month, 0)
    return max(still_above + 1 - month, 0)


def _baseline_interest(baseline: Sequence[MonthlyResult], month: int) -> Decimal:
    if not baseline:
        return ZERO
    if month <= len(baseline):
        return baseline[month - 1].cumulative_interest
    return baseline[-1].cumulative_interest


def simulate(
    mortgage: MortgageInput,
    heloc: HelocInput | None = None,
    income_scenarios: Sequence[IncomeScenario] = (),
    expense_scenarios: Sequence[ExpenseScenario] = (),
    months_to_project: int = MAX_PROJECTION_MONTHS,
    *,
    policy: HelocUtilizationPolicy = DEFAULT_POLICY,
    baseline: Sequence[MonthlyResult] | None = None,
    limits: SimulationLimits = DEFAULT_LIMITS,
) -> tuple[MonthlyResult, ...]:
    """Run the acceleration strategy and return its monthly track.

    The track ends at payoff (both balances within epsilon) or after
    months_to_project months, whichever comes first. Callers distinguish the
    two by inspecting the last row (see summarize).

    Args:
        mortgage: Mortgage terms
        heloc: Optional credit line; None simulates discretionary income only
        income_scenarios: Income scenarios (including base income)
        expense_scenarios: Expense scenarios (including base expenses)
        months_to_project: Hard iteration cap
        policy: HELOC utilization policy
        baseline: Traditional track for savings columns; computed when omitted
        limits: Epsilon and maximum projection
    """
    income = tuple(income_scenarios)
    expenses = tuple(expense_scenarios)
    loan = prepare_loan(mortgage, heloc, income, expenses, months_to_project, limits)

    if baseline is None:
        baseline = baseline_track(loan, months_to_project, limits)
    descending = [-m.total_debt for m in baseline]

    state = initial_state(loan)
    results: list[MonthlyResult] = []

    while state.month < months_to_project and not state.settled(limits.epsilon):
        flow = monthly_cash_flow(state.month + 1, income, expenses)
        result, state = advance_strategy(state, loan, flow, policy, limits.epsilon)
        results.append(replace(
            result,
            cumulative_interest_saved=_baseline_interest(baseline, result.month)
            - result.cumulative_interest,
            months_saved=_months_ahead(descending, result.total_debt, result.month),
        ))

    if state.settled(limits.epsilon):
        logger.debug("Strategy paid off in %d months", state.month)
    else:
        logger.warning(
            "Strategy reached the %d month cap with mortgage %s and HELOC %s outstanding",
            months_to_project,
            state.mortgage_balance,
            state.heloc_balance,
        )
    return tuple(results)
