from decimal import Decimal

from heloc_accelerator.engine.policy import (
    HelocUtilizationPolicy,
    NeverDrawPolicy,
    RateOrNearPayoffPolicy,
    UtilizationContext,
)


def _context(mortgage_rate="0.065", heloc_rate="0.045", mortgage_balance="200000"):
    return UtilizationContext(
        month=1,
        mortgage_rate=Decimal(mortgage_rate),
        heloc_rate=Decimal(heloc_rate),
        mortgage_balance=Decimal(mortgage_balance),
        heloc_balance=Decimal("0"),
        heloc_limit=Decimal("100000"),
    )


class TestRateOrNearPayoffPolicy:
    def test_draws_when_heloc_cheaper(self):
        assert RateOrNearPayoffPolicy().should_draw(_context())

    def test_draws_when_rates_equal(self):
        assert RateOrNearPayoffPolicy().should_draw(_context(heloc_rate="0.065"))

    def test_holds_when_heloc_more_expensive(self):
        assert not RateOrNearPayoffPolicy().should_draw(_context(heloc_rate="0.09"))

    def test_near_payoff_overrides_rate(self):
        """Mortgage under 10% of the $100K limit."""
        ctx = _context(heloc_rate="0.09", mortgage_balance="9999.99")
        assert RateOrNearPayoffPolicy().should_draw(ctx)

    def test_near_payoff_boundary_is_strict(self):
        ctx = _context(heloc_rate="0.09", mortgage_balance="10000")
        assert not RateOrNearPayoffPolicy().should_draw(ctx)

    def test_custom_ratio(self):
        ctx = _context(heloc_rate="0.09", mortgage_balance="20000")
        assert RateOrNearPayoffPolicy(near_payoff_ratio=Decimal("0.25")).should_draw(ctx)


class TestNeverDrawPolicy:
    def test_never_draws(self):
        assert not NeverDrawPolicy().should_draw(_context())


class TestProtocol:
    def test_policies_satisfy_protocol(self):
        assert isinstance(RateOrNearPayoffPolicy(), HelocUtilizationPolicy)
        assert isinstance(NeverDrawPolicy(), HelocUtilizationPolicy)
