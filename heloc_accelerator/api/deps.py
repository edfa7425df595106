"""FastAPI dependency injection."""

from datetime import datetime, timezone
from typing import Callable

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker

from heloc_accelerator.config import settings
from heloc_accelerator.engine.amortization import SimulationLimits

engine = create_async_engine(settings.database_url, echo=settings.debug)
async_session = async_sessionmaker(engine, expire_on_commit=False)


async def get_db() -> AsyncSession:
    async with async_session() as session:
        yield session


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def get_clock() -> Callable[[], datetime]:
    return _utcnow


def get_limits() -> SimulationLimits:
    return SimulationLimits(
        epsilon=settings.balance_epsilon,
        max_months=settings.simulation_max_months,
    )


def get_timeout() -> float:
    return settings.simulation_timeout_seconds
