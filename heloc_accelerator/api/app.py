"""FastAPI application entry point."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from heloc_accelerator.api.routes import scenarios, simulations
from heloc_accelerator.config import settings

logging.basicConfig(level=settings.log_level)

app = FastAPI(
    title="HELOC Accelerator",
    description="Mortgage payoff acceleration simulator",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(simulations.router)
app.include_router(scenarios.router)


@app.get("/health")
async def health():
    return {"status": "ok"}
