"""Engine error taxonomy.

Reaching the projection cap is not an error: it is reported through
SimulationSummary.status.
"""

from decimal import Decimal


class SimulationError(Exception):
    """Base class for all engine failures."""


class InvalidInputError(SimulationError, ValueError):
    """Malformed or out-of-range input, detected before the first month."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class NonAmortizingError(SimulationError):
    """The payment can never retire the principal within the term."""

    def __init__(self, monthly_payment: Decimal, required_payment: Decimal, reason: str):
        self.monthly_payment = monthly_payment
        self.required_payment = required_payment
        super().__init__(
            f"{reason}: payment ${monthly_payment:,.2f}, "
            f"at least ${required_payment:,.2f} required"
        )
