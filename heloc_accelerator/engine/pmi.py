"""Private mortgage insurance tracking via loan-to-value.

Pure functions. No I/O.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

from heloc_accelerator.models.scenario import PmiTerms

FOUR_PLACES = Decimal("0.0001")
ZERO = Decimal("0")


@dataclass(frozen=True)
class PmiMonth:
    payment: Decimal
    ltv: Decimal | None
    eliminated: bool  # True only in the month PMI stops
    active: bool  # Still charged next month


def current_ltv(balance: Decimal, property_value: Decimal | None) -> Decimal | None:
    if not property_value:
        return None
    return (balance / property_value).quantize(FOUR_PLACES, ROUND_HALF_UP)


def pmi_active_at_start(terms: PmiTerms | None, principal: Decimal) -> bool:
    """PMI is charged from month 1 unless the loan already starts at or below the threshold."""
    if terms is None or terms.monthly <= 0:
        return False
    if not terms.property_value:
        return True
    return principal / terms.property_value > terms.ltv_threshold


def apply_pmi(
    terms: PmiTerms | None,
    active: bool,
    ending_balance: Decimal,
    epsilon: Decimal,
) -> PmiMonth:
    """PMI for one month, judged on the month's ending balance."""
    if terms is None:
        return PmiMonth(payment=ZERO, ltv=None, eliminated=False, active=False)

    ltv = current_ltv(ending_balance, terms.property_value)
    if not active:
        return PmiMonth(payment=ZERO, ltv=ltv, eliminated=False, active=False)

    crossed = (
        terms.property_value is not None
        and terms.property_value > 0
        and ending_balance / terms.property_value <= terms.ltv_threshold
    )
    if crossed or ending_balance <= epsilon:
        return PmiMonth(payment=ZERO, ltv=ltv, eliminated=True, active=False)

    return PmiMonth(payment=terms.monthly, ltv=ltv, eliminated=False, active=True)
