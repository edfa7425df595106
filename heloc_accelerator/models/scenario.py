"""Simulation inputs: mortgage, HELOC, and time-bounded cash-flow scenarios."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

DEFAULT_PMI_LTV_THRESHOLD = Decimal("0.78")


class Frequency(Enum):
    WEEKLY = "weekly"
    BIWEEKLY = "bi-weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    ANNUAL = "annual"


class IncomeType(Enum):
    RAISE = "raise"
    BONUS = "bonus"
    JOB_LOSS = "job_loss"
    SIDE_INCOME = "side_income"
    INVESTMENT_INCOME = "investment_income"
    OVERTIME = "overtime"
    COMMISSION = "commission"
    RENTAL_INCOME = "rental_income"
    OTHER = "other"


class ExpenseCategory(Enum):
    HOUSING = "housing"
    UTILITIES = "utilities"
    FOOD = "food"
    TRANSPORTATION = "transportation"
    INSURANCE = "insurance"
    DEBT = "debt"
    DISCRETIONARY = "discretionary"
    EMERGENCY = "emergency"
    HEALTHCARE = "healthcare"
    EDUCATION = "education"
    CHILDCARE = "childcare"
    ENTERTAINMENT = "entertainment"
    OTHER = "other"


@dataclass(frozen=True)
class PmiTerms:
    """Mortgage insurance charged until LTV drops to the threshold."""
    monthly: Decimal
    property_value: Decimal | None = None
    ltv_threshold: Decimal = DEFAULT_PMI_LTV_THRESHOLD


@dataclass(frozen=True)
class MortgageInput:
    principal: Decimal
    annual_interest_rate: Decimal  # e.g. Decimal("0.065")
    term_in_months: int
    monthly_payment: Decimal | None = None  # Derived from the annuity formula when omitted
    property_value: Decimal | None = None
    pmi_monthly: Decimal = Decimal("0")
    pmi_ltv_threshold: Decimal = DEFAULT_PMI_LTV_THRESHOLD

    @property
    def monthly_rate(self) -> Decimal:
        return self.annual_interest_rate / 12

    @property
    def pmi_terms(self) -> PmiTerms | None:
        """PMI/LTV tracking terms; None when neither PMI nor a property value is known."""
        if self.pmi_monthly <= 0 and not self.property_value:
            return None
        return PmiTerms(
            monthly=self.pmi_monthly,
            property_value=self.property_value,
            ltv_threshold=self.pmi_ltv_threshold,
        )

    @property
    def initial_ltv(self) -> Decimal | None:
        if not self.property_value:
            return None
        return self.principal / self.property_value


@dataclass(frozen=True)
class HelocInput:
    heloc_limit: Decimal
    heloc_rate: Decimal
    heloc_available_credit: Decimal | None = None  # Defaults to the full limit

    @property
    def credit_line(self) -> Decimal:
        """Amount the strategy may draw against over the whole simulation."""
        if self.heloc_available_credit is None:
            return self.heloc_limit
        return self.heloc_available_credit


@dataclass(frozen=True)
class IncomeScenario:
    amount: Decimal  # Negative for reductions (job loss)
    start_month: int = 1
    end_month: int | None = None  # None = open-ended
    frequency: Frequency = Frequency.MONTHLY
    is_active: bool = True
    name: str = ""
    scenario_type: IncomeType = IncomeType.OTHER
    tax_rate: Decimal = Decimal("0")

    def applies_to(self, month: int) -> bool:
        if not self.is_active or month < self.start_month:
            return False
        return self.end_month is None or month <= self.end_month


@dataclass(frozen=True)
class ExpenseScenario:
    amount: Decimal
    start_month: int = 1
    end_month: int | None = None
    frequency: Frequency = Frequency.MONTHLY
    is_active: bool = True
    name: str = ""
    category: ExpenseCategory = ExpenseCategory.OTHER
    is_essential: bool = True

    def applies_to(self, month: int) -> bool:
        if not self.is_active or month < self.start_month:
            return False
        return self.end_month is None or month <= self.end_month
