"""Pydantic schemas for API request/response models."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field

from heloc_accelerator.models.results import PayoffStatus
from heloc_accelerator.models.scenario import (
    DEFAULT_PMI_LTV_THRESHOLD,
    ExpenseCategory,
    Frequency,
    IncomeType,
)


# ---- Request schemas ----

class MortgageRequest(BaseModel):
    principal: Decimal = Field(..., description="Current mortgage balance")
    annual_interest_rate: Decimal = Field(..., description="Decimal fraction, e.g. 0.065")
    term_in_months: int
    monthly_payment: Decimal | None = Field(None, description="Derived from the term when omitted")
    property_value: Decimal | None = None
    pmi_monthly: Decimal = Decimal("0")
    pmi_ltv_threshold: Decimal = DEFAULT_PMI_LTV_THRESHOLD


class HelocRequest(BaseModel):
    heloc_limit: Decimal
    heloc_rate: Decimal
    heloc_available_credit: Decimal | None = None


class IncomeScenarioRequest(BaseModel):
    name: str = ""
    amount: Decimal
    start_month: int = 1
    end_month: int | None = None
    frequency: Frequency = Frequency.MONTHLY
    is_active: bool = True
    scenario_type: IncomeType = IncomeType.OTHER
    tax_rate: Decimal = Decimal("0")


class ExpenseScenarioRequest(BaseModel):
    name: str = ""
    amount: Decimal
    start_month: int = 1
    end_month: int | None = None
    frequency: Frequency = Frequency.MONTHLY
    is_active: bool = True
    category: ExpenseCategory = ExpenseCategory.OTHER
    is_essential: bool = True


class ScenarioInputs(BaseModel):
    """Cash-flow scenarios and projection controls shared by every simulation request."""
    income_scenarios: list[IncomeScenarioRequest] = Field(default_factory=list)
    expense_scenarios: list[ExpenseScenarioRequest] = Field(default_factory=list)
    months_to_project: int | None = Field(None, description="Defaults to the configured maximum")
    allow_heloc_draws: bool = True


class CompareRequest(ScenarioInputs):
    mortgage: MortgageRequest
    heloc: HelocRequest | None = None


class LiveRequest(CompareRequest):
    """Base monthly budget plus ad-hoc what-if scenarios."""
    base_net_income: Decimal = Decimal("0")
    base_expenses: Decimal = Decimal("0")


class CalculateRequest(ScenarioInputs):
    """Recalculate a saved scenario; mortgage and HELOC terms come from the record."""
    base_net_income: Decimal = Decimal("0")
    base_expenses: Decimal = Decimal("0")


# ---- Response schemas ----

class MonthlyResultResponse(BaseModel):
    model_config = {"from_attributes": True}

    month: int
    beginning_balance: Decimal
    ending_balance: Decimal
    payment: Decimal
    interest: Decimal
    principal: Decimal
    extra_principal: Decimal
    beginning_heloc_balance: Decimal
    ending_heloc_balance: Decimal
    heloc_draw: Decimal
    heloc_interest: Decimal
    heloc_principal: Decimal
    pmi_payment: Decimal
    ltv: Decimal | None
    pmi_eliminated: bool
    gross_income: Decimal
    net_income: Decimal
    expenses: Decimal
    discretionary_income: Decimal
    total_outflow: Decimal
    cumulative_interest: Decimal
    cumulative_principal: Decimal
    cumulative_interest_saved: Decimal
    months_saved: int
    total_debt: Decimal


class SummaryResponse(BaseModel):
    model_config = {"from_attributes": True}

    status: PayoffStatus
    traditional_paid_off: bool
    traditional_months: int
    strategy_months: int
    traditional_payoff_months: int | None
    strategy_payoff_months: int | None
    months_saved: int | None
    traditional_total_interest: Decimal
    strategy_total_interest: Decimal
    strategy_mortgage_interest: Decimal
    strategy_heloc_interest: Decimal
    interest_saved: Decimal
    percentage_interest_saved: Decimal
    max_heloc_balance: Decimal
    average_heloc_balance: Decimal
    traditional_pmi_elimination_month: int | None
    strategy_pmi_elimination_month: int | None
    traditional_total_pmi: Decimal
    strategy_total_pmi: Decimal
    pmi_saved: Decimal
    min_discretionary_income: Decimal
    max_discretionary_income: Decimal
    average_discretionary_income: Decimal
    average_outflow_difference: Decimal


class CompareResponse(BaseModel):
    calculated_at: datetime
    summary: SummaryResponse
    traditional: list[MonthlyResultResponse]
    strategy: list[MonthlyResultResponse]


class LiveResponse(BaseModel):
    calculated_at: datetime
    status: PayoffStatus
    discretionary_income: Decimal  # Month 1
    projected_payoff_months: int | None
    traditional_payoff_months: int | None
    months_saved: int | None
    interest_saved: Decimal
    percentage_interest_saved: Decimal
    pmi_elimination_month: int | None
    applied_scenarios: list[str]  # Month 1 contributions
    breakdown: list[MonthlyResultResponse]


class CapabilitiesResponse(BaseModel):
    max_months: int
    balance_epsilon: Decimal
    simulation_timeout_seconds: float
    near_payoff_ratio: Decimal
    default_pmi_ltv_threshold: Decimal
    frequencies: list[str]
    income_types: list[str]
    expense_categories: list[str]


class CalculateResponse(BaseModel):
    scenario_id: UUID
    calculated_at: datetime
    rows_saved: int
    summary: SummaryResponse
