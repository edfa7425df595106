"""Persist simulated monthly schedules to PostgreSQL."""

import logging
import uuid
from typing import Iterable, Sequence

from sqlalchemy import delete, insert
from sqlalchemy.ext.asyncio import AsyncSession

from heloc_accelerator.models.db import CalculationResultRecord
from heloc_accelerator.models.results import ComparisonResult, MonthlyResult, Track

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 500


def schedule_rows(
    scenario_id: uuid.UUID,
    track: Track,
    results: Iterable[MonthlyResult],
) -> list[dict]:
    """Map one track to calculation_results column dicts."""
    return [
        {
            "scenario_id": scenario_id,
            "track": track.value,
            "month_number": m.month,
            "beginning_balance": m.beginning_balance,
            "ending_balance": m.ending_balance,
            "interest": m.interest,
            "principal": m.principal,
            "beginning_heloc_balance": m.beginning_heloc_balance,
            "ending_heloc_balance": m.ending_heloc_balance,
            "heloc_draw": m.heloc_draw,
            "heloc_interest": m.heloc_interest,
            "heloc_principal": m.heloc_principal,
            "pmi_payment": m.pmi_payment,
            "current_ltv": m.ltv,
            "pmi_eliminated": m.pmi_eliminated,
            "discretionary_income": m.discretionary_income,
            "cumulative_interest_paid": m.cumulative_interest,
            "cumulative_principal_paid": m.cumulative_principal,
            "cumulative_interest_saved": m.cumulative_interest_saved,
            "months_saved": m.months_saved,
        }
        for m in results
    ]


def _batches(rows: Sequence[dict], size: int) -> Iterable[Sequence[dict]]:
    for start in range(0, len(rows), size):
        yield rows[start:start + size]


async def save_schedule(
    session: AsyncSession,
    scenario_id: uuid.UUID,
    comparison: ComparisonResult,
    batch_size: int = DEFAULT_BATCH_SIZE,
) -> int:
    """Replace the stored schedule for a scenario with both tracks.

    Returns the number of rows written.
    """
    if batch_size < 1:
        raise ValueError("batch_size must be at least 1")

    rows = schedule_rows(scenario_id, Track.TRADITIONAL, comparison.traditional)
    rows += schedule_rows(scenario_id, Track.STRATEGY, comparison.strategy)

    await session.execute(
        delete(CalculationResultRecord).where(CalculationResultRecord.scenario_id == scenario_id)
    )
    for batch in _batches(rows, batch_size):
        await session.execute(insert(CalculationResultRecord), list(batch))
    await session.commit()

    logger.info("Saved %d schedule rows for scenario %s", len(rows), scenario_id)
    return len(rows)
