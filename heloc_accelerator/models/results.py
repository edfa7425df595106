from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

ZERO = Decimal("0")


class Track(Enum):
    TRADITIONAL = "traditional"
    STRATEGY = "strategy"


class PayoffStatus(Enum):
    PAID_OFF = "paid_off"
    ITERATION_CAP_REACHED = "iteration_cap_reached"


@dataclass(frozen=True)
class MonthlyResult:
    month: int

    # Mortgage
    beginning_balance: Decimal
    ending_balance: Decimal
    payment: Decimal  # Interest + scheduled principal actually paid
    interest: Decimal
    principal: Decimal  # Scheduled + extra + HELOC-funded principal
    extra_principal: Decimal = ZERO  # From discretionary income

    # HELOC (strategy track only)
    beginning_heloc_balance: Decimal = ZERO
    ending_heloc_balance: Decimal = ZERO
    heloc_draw: Decimal = ZERO
    heloc_interest: Decimal = ZERO
    heloc_principal: Decimal = ZERO  # Paydown of drawn balance

    # PMI
    pmi_payment: Decimal = ZERO
    ltv: Decimal | None = None
    pmi_eliminated: bool = False

    # Cash flow (strategy track only)
    gross_income: Decimal = ZERO
    net_income: Decimal = ZERO
    expenses: Decimal = ZERO
    discretionary_income: Decimal = ZERO
    total_outflow: Decimal = ZERO

    # Running totals
    cumulative_interest: Decimal = ZERO  # Mortgage + HELOC
    cumulative_principal: Decimal = ZERO  # Mortgage principal retired
    cumulative_interest_saved: Decimal = ZERO
    months_saved: int = 0

    @property
    def total_debt(self) -> Decimal:
        return self.ending_balance + self.ending_heloc_balance


@dataclass(frozen=True)
class SimulationSummary:
    status: PayoffStatus
    traditional_paid_off: bool

    traditional_months: int  # Months projected (== payoff months when paid off)
    strategy_months: int
    traditional_payoff_months: int | None = None
    strategy_payoff_months: int | None = None
    months_saved: int | None = None  # Only when both tracks paid off

    traditional_total_interest: Decimal = ZERO
    strategy_total_interest: Decimal = ZERO
    strategy_mortgage_interest: Decimal = ZERO
    strategy_heloc_interest: Decimal = ZERO
    interest_saved: Decimal = ZERO
    percentage_interest_saved: Decimal = ZERO

    max_heloc_balance: Decimal = ZERO
    average_heloc_balance: Decimal = ZERO

    traditional_pmi_elimination_month: int | None = None
    strategy_pmi_elimination_month: int | None = None
    traditional_total_pmi: Decimal = ZERO
    strategy_total_pmi: Decimal = ZERO
    pmi_saved: Decimal = ZERO

    min_discretionary_income: Decimal = ZERO
    max_discretionary_income: Decimal = ZERO
    average_discretionary_income: Decimal = ZERO
    average_outflow_difference: Decimal = ZERO  # Avg strategy outflow - avg traditional outflow

    @property
    def iteration_cap_reached(self) -> bool:
        return self.status is PayoffStatus.ITERATION_CAP_REACHED


@dataclass(frozen=True)
class ComparisonResult:
    traditional: tuple[MonthlyResult, ...]
    strategy: tuple[MonthlyResult, ...]
    summary: SimulationSummary
