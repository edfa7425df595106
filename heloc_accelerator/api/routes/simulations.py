"""Simulation routes: stateless comparisons and live what-if projections."""

from datetime import datetime
from decimal import Decimal
from typing import Callable

from fastapi import APIRouter, Depends

from heloc_accelerator.api.deps import get_clock, get_limits, get_timeout
from heloc_accelerator.api.runner import run_engine
from heloc_accelerator.api.schemas import (
    CapabilitiesResponse,
    CompareRequest,
    CompareResponse,
    ExpenseScenarioRequest,
    HelocRequest,
    IncomeScenarioRequest,
    LiveRequest,
    LiveResponse,
    MonthlyResultResponse,
    MortgageRequest,
    ScenarioInputs,
    SummaryResponse,
)
from heloc_accelerator.config import settings
from heloc_accelerator.engine.amortization import SimulationLimits
from heloc_accelerator.engine.cashflow import baseline_scenarios, monthly_cash_flow
from heloc_accelerator.engine.comparison import compare_strategies
from heloc_accelerator.engine.policy import (
    DEFAULT_POLICY,
    NEAR_PAYOFF_RATIO,
    HelocUtilizationPolicy,
    NeverDrawPolicy,
)
from heloc_accelerator.models.scenario import (
    DEFAULT_PMI_LTV_THRESHOLD,
    ExpenseCategory,
    ExpenseScenario,
    Frequency,
    HelocInput,
    IncomeScenario,
    IncomeType,
    MortgageInput,
)

router = APIRouter(prefix="/api/v1/simulations", tags=["simulations"])


def build_mortgage(req: MortgageRequest) -> MortgageInput:
    return MortgageInput(
        principal=req.principal,
        annual_interest_rate=req.annual_interest_rate,
        term_in_months=req.term_in_months,
        monthly_payment=req.monthly_payment,
        property_value=req.property_value,
        pmi_monthly=req.pmi_monthly,
        pmi_ltv_threshold=req.pmi_ltv_threshold,
    )


def build_heloc(req: HelocRequest | None) -> HelocInput | None:
    if req is None:
        return None
    return HelocInput(
        heloc_limit=req.heloc_limit,
        heloc_rate=req.heloc_rate,
        heloc_available_credit=req.heloc_available_credit,
    )


def _income(req: IncomeScenarioRequest) -> IncomeScenario:
    return IncomeScenario(
        amount=req.amount,
        start_month=req.start_month,
        end_month=req.end_month,
        frequency=req.frequency,
        is_active=req.is_active,
        name=req.name,
        scenario_type=req.scenario_type,
        tax_rate=req.tax_rate,
    )


def _expense(req: ExpenseScenarioRequest) -> ExpenseScenario:
    return ExpenseScenario(
        amount=req.amount,
        start_month=req.start_month,
        end_month=req.end_month,
        frequency=req.frequency,
        is_active=req.is_active,
        name=req.name,
        category=req.category,
        is_essential=req.is_essential,
    )


def build_scenarios(
    req: ScenarioInputs,
    base_net_income: Decimal = Decimal("0"),
    base_expenses: Decimal = Decimal("0"),
) -> tuple[list[IncomeScenario], list[ExpenseScenario]]:
    """Request scenarios, preceded by the flat base budget when given."""
    income, expenses = baseline_scenarios(base_net_income, base_expenses)
    income += [_income(s) for s in req.income_scenarios]
    expenses += [_expense(s) for s in req.expense_scenarios]
    return income, expenses


def build_policy(req: ScenarioInputs) -> HelocUtilizationPolicy:
    return DEFAULT_POLICY if req.allow_heloc_draws else NeverDrawPolicy()


def projection_months(req: ScenarioInputs, limits: SimulationLimits) -> int:
    if req.months_to_project is None:
        return limits.max_months
    return req.months_to_project


@router.post("/compare", response_model=CompareResponse)
async def compare(
    req: CompareRequest,
    clock: Callable[[], datetime] = Depends(get_clock),
    limits: SimulationLimits = Depends(get_limits),
    timeout: float = Depends(get_timeout),
):
    """Full traditional and accelerated tracks with the comparison summary."""
    income, expenses = build_scenarios(req)
    result = await run_engine(
        compare_strategies,
        build_mortgage(req.mortgage),
        build_heloc(req.heloc),
        income,
        expenses,
        projection_months(req, limits),
        policy=build_policy(req),
        limits=limits,
        timeout=timeout,
    )
    return CompareResponse(
        calculated_at=clock(),
        summary=SummaryResponse.model_validate(result.summary),
        traditional=[MonthlyResultResponse.model_validate(m) for m in result.traditional],
        strategy=[MonthlyResultResponse.model_validate(m) for m in result.strategy],
    )


@router.post("/live", response_model=LiveResponse)
async def live(
    req: LiveRequest,
    clock: Callable[[], datetime] = Depends(get_clock),
    limits: SimulationLimits = Depends(get_limits),
    timeout: float = Depends(get_timeout),
):
    """Quick what-if: base budget plus ad-hoc scenarios, first years broken down."""
    income, expenses = build_scenarios(req, req.base_net_income, req.base_expenses)
    result = await run_engine(
        compare_strategies,
        build_mortgage(req.mortgage),
        build_heloc(req.heloc),
        income,
        expenses,
        projection_months(req, limits),
        policy=build_policy(req),
        limits=limits,
        timeout=timeout,
    )
    summary = result.summary
    first_month = monthly_cash_flow(1, income, expenses)
    breakdown = result.strategy[:settings.live_breakdown_months]

    return LiveResponse(
        calculated_at=clock(),
        status=summary.status,
        discretionary_income=first_month.discretionary_income,
        projected_payoff_months=summary.strategy_payoff_months,
        traditional_payoff_months=summary.traditional_payoff_months,
        months_saved=summary.months_saved,
        interest_saved=summary.interest_saved,
        percentage_interest_saved=summary.percentage_interest_saved,
        pmi_elimination_month=summary.strategy_pmi_elimination_month,
        applied_scenarios=list(first_month.applied),
        breakdown=[MonthlyResultResponse.model_validate(m) for m in breakdown],
    )


@router.get("/capabilities", response_model=CapabilitiesResponse)
async def capabilities(
    limits: SimulationLimits = Depends(get_limits),
    timeout: float = Depends(get_timeout),
):
    return CapabilitiesResponse(
        max_months=limits.max_months,
        balance_epsilon=limits.epsilon,
        simulation_timeout_seconds=timeout,
        near_payoff_ratio=NEAR_PAYOFF_RATIO,
        default_pmi_ltv_threshold=DEFAULT_PMI_LTV_THRESHOLD,
        frequencies=[f.value for f in Frequency],
        income_types=[t.value for t in IncomeType],
        expense_categories=[c.value for c in ExpenseCategory],
    )
