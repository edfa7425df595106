"""Monthly cash flow: income and expense scenarios reduced to discretionary income.

Pure functions: Decimal in, Decimal out. No I/O.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Sequence

from heloc_accelerator.models.scenario import (
    ExpenseScenario,
    Frequency,
    IncomeScenario,
    IncomeType,
    ExpenseCategory,
)

TWO_PLACES = Decimal("0.01")
ZERO = Decimal("0")

# Monthly-equivalent multipliers
FREQUENCY_FACTORS: dict[Frequency, Decimal] = {
    Frequency.WEEKLY: Decimal("4.33"),
    Frequency.BIWEEKLY: Decimal("2.17"),
    Frequency.MONTHLY: Decimal("1"),
    Frequency.QUARTERLY: Decimal("1") / Decimal("3"),
    Frequency.ANNUAL: Decimal("1") / Decimal("12"),
}


@dataclass(frozen=True)
class MonthlyCashFlow:
    month: int
    gross_income: Decimal
    net_income: Decimal
    expenses: Decimal
    applied: tuple[str, ...] = ()

    @property
    def discretionary_income(self) -> Decimal:
        """Net income minus expenses. May be negative."""
        return self.net_income - self.expenses


def monthly_equivalent(amount: Decimal, frequency: Frequency) -> Decimal:
    return (amount * FREQUENCY_FACTORS[frequency]).quantize(TWO_PLACES, ROUND_HALF_UP)


def _label(name: str, fallback: str) -> str:
    return name or fallback


def monthly_cash_flow(
    month: int,
    income_scenarios: Sequence[IncomeScenario],
    expense_scenarios: Sequence[ExpenseScenario],
) -> MonthlyCashFlow:
    """Sum every active scenario whose window covers month (1-indexed)."""
    gross = ZERO
    net = ZERO
    expenses = ZERO
    applied: list[str] = []

    for scenario in income_scenarios:
        if not scenario.applies_to(month):
            continue
        amount = monthly_equivalent(scenario.amount, scenario.frequency)
        after_tax = (amount * (1 - scenario.tax_rate)).quantize(TWO_PLACES, ROUND_HALF_UP)
        gross += amount
        net += after_tax
        applied.append(f"+{_label(scenario.name, scenario.scenario_type.value)}: {after_tax}")

    for scenario in expense_scenarios:
        if not scenario.applies_to(month):
            continue
        amount = monthly_equivalent(scenario.amount, scenario.frequency)
        expenses += amount
        applied.append(f"-{_label(scenario.name, scenario.category.value)}: {amount}")

    return MonthlyCashFlow(
        month=month,
        gross_income=gross,
        net_income=net,
        expenses=expenses,
        applied=tuple(applied),
    )


def baseline_scenarios(
    net_income: Decimal,
    expenses: Decimal,
) -> tuple[list[IncomeScenario], list[ExpenseScenario]]:
    """Express flat monthly base figures as open-ended scenarios from month 1."""
    income = [
        IncomeScenario(amount=net_income, name="Base net income", scenario_type=IncomeType.OTHER)
    ] if net_income else []
    spending = [
        ExpenseScenario(amount=expenses, name="Base expenses", category=ExpenseCategory.OTHER)
    ] if expenses else []
    return income, spending
