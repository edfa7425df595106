"""Comparison orchestrator: baseline amortization, strategy simulation, summary.

Pure computation. No I/O. Dataclasses in, ComparisonResult out.
"""

from typing import Sequence

from heloc_accelerator.engine.amortization import (
    DEFAULT_LIMITS,
    MAX_PROJECTION_MONTHS,
    SimulationLimits,
)
from heloc_accelerator.engine.policy import DEFAULT_POLICY, HelocUtilizationPolicy
from heloc_accelerator.engine.simulator import baseline_track, prepare_loan, simulate
from heloc_accelerator.engine.summary import summarize
from heloc_accelerator.models.results import ComparisonResult
from heloc_accelerator.models.scenario import (
    ExpenseScenario,
    HelocInput,
    IncomeScenario,
    MortgageInput,
)


def compare_strategies(
    mortgage: MortgageInput,
    heloc: HelocInput | None = None,
    income_scenarios: Sequence[IncomeScenario] = (),
    expense_scenarios: Sequence[ExpenseScenario] = (),
    months_to_project: int = MAX_PROJECTION_MONTHS,
    policy: HelocUtilizationPolicy | None = None,
    limits: SimulationLimits | None = None,
) -> ComparisonResult:
    """Run the traditional and accelerated tracks and compare them.

    Both tracks are truncated to months_to_project.
    """
    limits = limits or DEFAULT_LIMITS
    income = tuple(income_scenarios)
    expenses = tuple(expense_scenarios)

    loan = prepare_loan(mortgage, heloc, income, expenses, months_to_project, limits)
    traditional = baseline_track(loan, months_to_project, limits)
    strategy = simulate(
        mortgage,
        heloc,
        income,
        expenses,
        months_to_project,
        policy=policy or DEFAULT_POLICY,
        baseline=traditional,
        limits=limits,
    )

    return ComparisonResult(
        traditional=traditional,
        strategy=strategy,
        summary=summarize(traditional, strategy, limits.epsilon),
    )
