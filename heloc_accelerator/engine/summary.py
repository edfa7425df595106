"""Reduce the traditional and strategy tracks to comparison metrics.

Pure functions. No I/O.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Sequence

from heloc_accelerator.engine.amortization import BALANCE_EPSILON
from heloc_accelerator.models.results import MonthlyResult, PayoffStatus, SimulationSummary

TWO_PLACES = Decimal("0.01")
ZERO = Decimal("0")


def is_paid_off(track: Sequence[MonthlyResult], epsilon: Decimal = BALANCE_EPSILON) -> bool:
    """True when the track ended because every balance reached zero."""
    if not track:
        return False
    last = track[-1]
    return last.ending_balance <= epsilon and last.ending_heloc_balance <= epsilon


def total_interest(track: Sequence[MonthlyResult]) -> Decimal:
    return track[-1].cumulative_interest if track else ZERO


def _mean(values: Sequence[Decimal]) -> Decimal:
    if not values:
        return ZERO
    return (sum(values, ZERO) / len(values)).quantize(TWO_PLACES, ROUND_HALF_UP)


def _pmi_elimination_month(track: Sequence[MonthlyResult]) -> int | None:
    return next((m.month for m in track if m.pmi_eliminated), None)


def summarize(
    traditional: Sequence[MonthlyResult],
    strategy: Sequence[MonthlyResult],
    epsilon: Decimal = BALANCE_EPSILON,
) -> SimulationSummary:
    """Compare the two tracks.

    A strategy that hit the projection cap is reported with
    status=ITERATION_CAP_REACHED and months_saved=None; interest figures then
    cover only the projected window.
    """
    strategy_paid = is_paid_off(strategy, epsilon)
    traditional_paid = is_paid_off(traditional, epsilon)

    trad_interest = total_interest(traditional)
    strat_interest = total_interest(strategy)
    interest_saved = trad_interest - strat_interest
    if trad_interest > 0:
        pct_saved = (interest_saved / trad_interest * 100).quantize(TWO_PLACES, ROUND_HALF_UP)
    else:
        pct_saved = ZERO

    months_saved = None
    if strategy_paid and traditional_paid:
        months_saved = len(traditional) - len(strategy)

    heloc_balances = [m.ending_heloc_balance for m in strategy]
    discretionary = [m.discretionary_income for m in strategy]

    trad_pmi = sum((m.pmi_payment for m in traditional), ZERO)
    strat_pmi = sum((m.pmi_payment for m in strategy), ZERO)

    return SimulationSummary(
        status=PayoffStatus.PAID_OFF if strategy_paid else PayoffStatus.ITERATION_CAP_REACHED,
        traditional_paid_off=traditional_paid,
        traditional_months=len(traditional),
        strategy_months=len(strategy),
        traditional_payoff_months=len(traditional) if traditional_paid else None,
        strategy_payoff_months=len(strategy) if strategy_paid else None,
        months_saved=months_saved,
        traditional_total_interest=trad_interest,
        strategy_total_interest=strat_interest,
        strategy_mortgage_interest=sum((m.interest for m in strategy), ZERO),
        strategy_heloc_interest=sum((m.heloc_interest for m in strategy), ZERO),
        interest_saved=interest_saved,
        percentage_interest_saved=pct_saved,
        max_heloc_balance=max(heloc_balances, default=ZERO),
        average_heloc_balance=_mean(heloc_balances),
        traditional_pmi_elimination_month=_pmi_elimination_month(traditional),
        strategy_pmi_elimination_month=_pmi_elimination_month(strategy),
        traditional_total_pmi=trad_pmi,
        strategy_total_pmi=strat_pmi,
        pmi_saved=trad_pmi - strat_pmi,
        min_discretionary_income=min(discretionary, default=ZERO),
        max_discretionary_income=max(discretionary, default=ZERO),
        average_discretionary_income=_mean(discretionary),
        average_outflow_difference=(
            _mean([m.total_outflow for m in strategy])
            - _mean([m.total_outflow for m in traditional])
        ),
    )
