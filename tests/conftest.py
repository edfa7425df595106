"""Shared test fixtures.

Fixture: $250K mortgage at 6.5% with 20 years remaining, payment derived from
the term ($1,863.93). HELOC: $100K limit at 4.5%, fully available.
Household: $1,500/month discretionary income.
"""

import pytest
from decimal import Decimal

from heloc_accelerator.models.scenario import (
    ExpenseCategory,
    ExpenseScenario,
    HelocInput,
    IncomeScenario,
    IncomeType,
    MortgageInput,
)


@pytest.fixture
def mortgage() -> MortgageInput:
    return MortgageInput(
        principal=Decimal("250000"),
        annual_interest_rate=Decimal("0.065"),
        term_in_months=240,
    )


@pytest.fixture
def thirty_year_mortgage() -> MortgageInput:
    """$400K at 7% over 360 months on a $500K home (80% LTV) with $150 PMI."""
    return MortgageInput(
        principal=Decimal("400000"),
        annual_interest_rate=Decimal("0.07"),
        term_in_months=360,
        property_value=Decimal("500000"),
        pmi_monthly=Decimal("150"),
    )


@pytest.fixture
def heloc() -> HelocInput:
    return HelocInput(heloc_limit=Decimal("100000"), heloc_rate=Decimal("0.045"))


@pytest.fixture
def discretionary_income() -> list[IncomeScenario]:
    """$1,500/month left after expenses, expressed as a single income scenario."""
    return [IncomeScenario(amount=Decimal("1500"), name="Discretionary")]


@pytest.fixture
def household_budget() -> tuple[list[IncomeScenario], list[ExpenseScenario]]:
    """$6,000 net salary against $4,500 of monthly expenses."""
    income = [
        IncomeScenario(amount=Decimal("6000"), name="Salary", scenario_type=IncomeType.OTHER),
    ]
    expenses = [
        ExpenseScenario(amount=Decimal("2500"), name="Living", category=ExpenseCategory.FOOD),
        ExpenseScenario(amount=Decimal("2000"), name="Other bills", category=ExpenseCategory.UTILITIES),
    ]
    return income, expenses
