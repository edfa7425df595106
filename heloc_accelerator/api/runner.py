"""Run engine calls off the event loop and map engine errors to HTTP errors."""

import asyncio
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException

from heloc_accelerator.engine.errors import InvalidInputError, NonAmortizingError

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def run_engine(fn: Callable[..., T], *args: Any, timeout: float, **kwargs: Any) -> T:
    try:
        return await asyncio.wait_for(asyncio.to_thread(fn, *args, **kwargs), timeout=timeout)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail={"field": e.field, "message": e.message})
    except NonAmortizingError as e:
        raise HTTPException(
            status_code=422,
            detail={
                "message": str(e),
                "monthly_payment": str(e.monthly_payment),
                "required_payment": str(e.required_payment),
            },
        )
    except asyncio.TimeoutError:
        logger.warning("Simulation exceeded %.1fs", timeout)
        raise HTTPException(status_code=504, detail="Simulation timed out")
