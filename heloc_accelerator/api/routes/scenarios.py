"""Saved scenario routes: recalculate and persist the monthly schedule."""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Callable
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from heloc_accelerator.api.deps import get_clock, get_db, get_limits, get_timeout
from heloc_accelerator.api.routes.simulations import (
    build_policy,
    build_scenarios,
    projection_months,
)
from heloc_accelerator.api.runner import run_engine
from heloc_accelerator.api.schemas import CalculateRequest, CalculateResponse, SummaryResponse
from heloc_accelerator.config import settings
from heloc_accelerator.data.schedule_store import save_schedule
from heloc_accelerator.engine.amortization import SimulationLimits
from heloc_accelerator.engine.comparison import compare_strategies
from heloc_accelerator.models.db import ScenarioRecord
from heloc_accelerator.models.scenario import (
    DEFAULT_PMI_LTV_THRESHOLD,
    HelocInput,
    MortgageInput,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/scenarios", tags=["scenarios"])


def _mortgage_from_record(record: ScenarioRecord) -> MortgageInput:
    return MortgageInput(
        principal=record.principal,
        annual_interest_rate=record.annual_interest_rate,
        term_in_months=record.term_in_months,
        monthly_payment=record.monthly_payment,
        property_value=record.property_value,
        pmi_monthly=record.pmi_monthly or Decimal("0"),
        pmi_ltv_threshold=DEFAULT_PMI_LTV_THRESHOLD,
    )


def _heloc_from_record(record: ScenarioRecord) -> HelocInput | None:
    if record.heloc_limit is None or record.heloc_rate is None:
        return None
    return HelocInput(
        heloc_limit=record.heloc_limit,
        heloc_rate=record.heloc_rate,
        heloc_available_credit=record.heloc_available_credit,
    )


@router.post("/{scenario_id}/calculate", response_model=CalculateResponse)
async def calculate(
    scenario_id: UUID,
    req: CalculateRequest,
    db: AsyncSession = Depends(get_db),
    clock: Callable[[], datetime] = Depends(get_clock),
    limits: SimulationLimits = Depends(get_limits),
    timeout: float = Depends(get_timeout),
):
    record = await db.get(ScenarioRecord, scenario_id)
    if not record:
        raise HTTPException(status_code=404, detail="Scenario not found")

    income, expenses = build_scenarios(req, req.base_net_income, req.base_expenses)
    result = await run_engine(
        compare_strategies,
        _mortgage_from_record(record),
        _heloc_from_record(record),
        income,
        expenses,
        projection_months(req, limits),
        policy=build_policy(req),
        limits=limits,
        timeout=timeout,
    )

    summary = result.summary
    record.status = summary.status.value
    record.months_saved = summary.months_saved
    record.interest_saved = summary.interest_saved
    rows = await save_schedule(db, scenario_id, result, settings.schedule_batch_size)
    logger.info("Recalculated scenario %s (%s)", scenario_id, summary.status.value)

    return CalculateResponse(
        scenario_id=scenario_id,
        calculated_at=clock(),
        rows_saved=rows,
        summary=SummaryResponse.model_validate(summary),
    )
