"""HELOC utilization policies.

A policy decides, once per month, whether the strategy may draw on the HELOC
to retire mortgage principal. It never decides how much.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Protocol, runtime_checkable

NEAR_PAYOFF_RATIO = Decimal("0.10")  # Mortgage under 10% of the HELOC limit


@dataclass(frozen=True)
class UtilizationContext:
    month: int
    mortgage_rate: Decimal
    heloc_rate: Decimal
    mortgage_balance: Decimal  # Beginning of month
    heloc_balance: Decimal
    heloc_limit: Decimal


@runtime_checkable
class HelocUtilizationPolicy(Protocol):
    def should_draw(self, context: UtilizationContext) -> bool:
        """Return True to allow a HELOC draw against mortgage principal this month."""
        ...


@dataclass(frozen=True)
class RateOrNearPayoffPolicy:
    """Draw when the HELOC is no more expensive than the mortgage, or when the
    mortgage is small enough relative to the line that a final draw is safe."""

    near_payoff_ratio: Decimal = NEAR_PAYOFF_RATIO

    def should_draw(self, context: UtilizationContext) -> bool:
        if context.mortgage_rate >= context.heloc_rate:
            return True
        return context.mortgage_balance < context.heloc_limit * self.near_payoff_ratio


@dataclass(frozen=True)
class NeverDrawPolicy:
    """Discretionary-income-only acceleration."""

    def should_draw(self, context: UtilizationContext) -> bool:
        return False


DEFAULT_POLICY = RateOrNearPayoffPolicy()
