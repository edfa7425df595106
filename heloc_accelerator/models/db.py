"""SQLAlchemy ORM models for PostgreSQL persistence."""

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    String,
    Integer,
    Numeric,
    DateTime,
    Boolean,
    ForeignKey,
    func,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import DeclarativeBase, relationship, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class ScenarioRecord(Base):
    __tablename__ = "scenarios"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), onupdate=func.now())

    name: Mapped[str] = mapped_column(String(255))

    # Mortgage
    principal: Mapped[Decimal] = mapped_column(Numeric(12, 2))
    annual_interest_rate: Mapped[Decimal] = mapped_column(Numeric(6, 5))
    term_in_months: Mapped[int] = mapped_column(Integer)
    monthly_payment: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=True)
    property_value: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=True)
    pmi_monthly: Mapped[Decimal] = mapped_column(Numeric(8, 2), default=0)

    # HELOC
    heloc_limit: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=True)
    heloc_rate: Mapped[Decimal] = mapped_column(Numeric(6, 5), nullable=True)
    heloc_available_credit: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=True)

    # Last calculation
    status: Mapped[str] = mapped_column(String(30), nullable=True)
    months_saved: Mapped[int] = mapped_column(Integer, nullable=True)
    interest_saved: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=True)

    results: Mapped[list["CalculationResultRecord"]] = relationship(back_populates="scenario")


class CalculationResultRecord(Base):
    """One simulated month of one track."""

    __tablename__ = "calculation_results"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    scenario_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("scenarios.id"), index=True)
    track: Mapped[str] = mapped_column(String(20))  # "traditional" or "strategy"
    month_number: Mapped[int] = mapped_column(Integer)

    beginning_balance: Mapped[Decimal] = mapped_column(Numeric(12, 2))
    ending_balance: Mapped[Decimal] = mapped_column(Numeric(12, 2))
    interest: Mapped[Decimal] = mapped_column(Numeric(10, 2))
    principal: Mapped[Decimal] = mapped_column(Numeric(12, 2))

    beginning_heloc_balance: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=0)
    ending_heloc_balance: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=0)
    heloc_draw: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=0)
    heloc_interest: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=0)
    heloc_principal: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=0)

    pmi_payment: Mapped[Decimal] = mapped_column(Numeric(8, 2), default=0)
    current_ltv: Mapped[Decimal] = mapped_column(Numeric(6, 4), nullable=True)
    pmi_eliminated: Mapped[bool] = mapped_column(Boolean, default=False)

    discretionary_income: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=0)
    cumulative_interest_paid: Mapped[Decimal] = mapped_column(Numeric(12, 2))
    cumulative_principal_paid: Mapped[Decimal] = mapped_column(Numeric(12, 2))
    cumulative_interest_saved: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=0)
    months_saved: Mapped[int] = mapped_column(Integer, default=0)

    scenario: Mapped["ScenarioRecord"] = relationship(back_populates="results")
