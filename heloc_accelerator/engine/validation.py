"""Eager input validation. Every check runs before the first simulated month."""

from decimal import Decimal
from typing import Iterable

from heloc_accelerator.engine.errors import InvalidInputError
from heloc_accelerator.models.scenario import (
    ExpenseScenario,
    HelocInput,
    IncomeScenario,
    MortgageInput,
)

ZERO = Decimal("0")
ONE = Decimal("1")


def _require_rate(field: str, rate: Decimal) -> None:
    if rate < ZERO:
        raise InvalidInputError(field, "rate cannot be negative")
    if rate >= ONE:
        # 6.5 instead of 0.065: a percent passed where a fraction is expected
        raise InvalidInputError(field, f"rate {rate} must be a decimal fraction below 1")


def validate_loan_terms(
    principal: Decimal,
    annual_rate: Decimal,
    term_months: int,
    payment: Decimal | None = None,
) -> None:
    if principal <= ZERO:
        raise InvalidInputError("principal", "must be positive")
    _require_rate("annual_interest_rate", annual_rate)
    if term_months <= 0:
        raise InvalidInputError("term_in_months", "must be a positive number of months")
    if payment is not None and payment <= ZERO:
        raise InvalidInputError("monthly_payment", "must be positive")


def validate_mortgage(mortgage: MortgageInput) -> None:
    validate_loan_terms(
        mortgage.principal,
        mortgage.annual_interest_rate,
        mortgage.term_in_months,
        mortgage.monthly_payment,
    )
    if mortgage.property_value is not None and mortgage.property_value <= ZERO:
        raise InvalidInputError("property_value", "must be positive when provided")
    if mortgage.pmi_monthly < ZERO:
        raise InvalidInputError("pmi_monthly", "cannot be negative")
    if not ZERO < mortgage.pmi_ltv_threshold < ONE:
        raise InvalidInputError("pmi_ltv_threshold", "must be between 0 and 1")


def validate_heloc(heloc: HelocInput | None) -> None:
    if heloc is None:
        return
    if heloc.heloc_limit < ZERO:
        raise InvalidInputError("heloc_limit", "cannot be negative")
    _require_rate("heloc_rate", heloc.heloc_rate)
    available = heloc.heloc_available_credit
    if available is not None:
        if available < ZERO:
            raise InvalidInputError("heloc_available_credit", "cannot be negative")
        if available > heloc.heloc_limit:
            raise InvalidInputError(
                "heloc_available_credit",
                f"{available} exceeds the credit limit {heloc.heloc_limit}",
            )


def _validate_window(field: str, start_month: int, end_month: int | None) -> None:
    if start_month < 1:
        raise InvalidInputError(f"{field}.start_month", "months are 1-based")
    if end_month is not None and end_month < start_month:
        raise InvalidInputError(f"{field}.end_month", "ends before it starts")


def validate_scenarios(
    income_scenarios: Iterable[IncomeScenario],
    expense_scenarios: Iterable[ExpenseScenario],
) -> None:
    for i, scenario in enumerate(income_scenarios):
        field = f"income_scenarios[{i}]"
        _validate_window(field, scenario.start_month, scenario.end_month)
        if not ZERO <= scenario.tax_rate < ONE:
            raise InvalidInputError(f"{field}.tax_rate", "must be between 0 and 1")

    for i, scenario in enumerate(expense_scenarios):
        field = f"expense_scenarios[{i}]"
        _validate_window(field, scenario.start_month, scenario.end_month)
        if scenario.amount < ZERO:
            raise InvalidInputError(f"{field}.amount", "expenses cannot be negative")


def validate_projection(months_to_project: int, max_months: int) -> None:
    if months_to_project < 1:
        raise InvalidInputError("months_to_project", "must project at least one month")
    if months_to_project > max_months:
        raise InvalidInputError(
            "months_to_project", f"cannot exceed {max_months} months"
        )
