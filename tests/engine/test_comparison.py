"""End-to-end comparisons on the shared $250K / 6.5% / 20-year fixture."""

import pytest
from decimal import Decimal

from heloc_accelerator.engine.amortization import SimulationLimits
from heloc_accelerator.engine.comparison import compare_strategies
from heloc_accelerator.engine.errors import InvalidInputError, NonAmortizingError
from heloc_accelerator.engine.policy import NeverDrawPolicy
from heloc_accelerator.models.results import PayoffStatus
from heloc_accelerator.models.scenario import HelocInput, MortgageInput


class TestAcceleratedPayoff:
    def test_traditional_track(self, mortgage, heloc, discretionary_income):
        result = compare_strategies(mortgage, heloc, discretionary_income)
        summary = result.summary
        assert summary.traditional_payoff_months == 240
        # 240 * 1863.93 - 250000 = 197,343.20, within rounding drift
        assert abs(summary.traditional_total_interest - Decimal("197343.20")) < Decimal("10")

    def test_strategy_pays_off_much_earlier(self, mortgage, heloc, discretionary_income):
        summary = compare_strategies(mortgage, heloc, discretionary_income).summary
        assert summary.status is PayoffStatus.PAID_OFF
        assert summary.strategy_payoff_months < 160
        assert summary.months_saved == 240 - summary.strategy_payoff_months
        assert summary.percentage_interest_saved > 30
        assert summary.strategy_heloc_interest > 0
        assert summary.max_heloc_balance <= Decimal("100000")

    def test_interest_split(self, mortgage, heloc, discretionary_income):
        summary = compare_strategies(mortgage, heloc, discretionary_income).summary
        assert summary.strategy_total_interest == (
            summary.strategy_mortgage_interest + summary.strategy_heloc_interest
        )

    def test_heloc_beats_discretionary_only(self, mortgage, heloc, discretionary_income):
        with_draws = compare_strategies(mortgage, heloc, discretionary_income).summary
        held = compare_strategies(
            mortgage, heloc, discretionary_income, policy=NeverDrawPolicy()
        ).summary
        assert with_draws.strategy_payoff_months <= held.strategy_payoff_months
        assert held.strategy_payoff_months < 240

    def test_strategy_never_slower(self, mortgage, household_budget):
        income, expenses = household_budget
        summary = compare_strategies(mortgage, None, income, expenses).summary
        assert summary.strategy_payoff_months <= summary.traditional_payoff_months

    def test_idempotent(self, mortgage, heloc, discretionary_income):
        first = compare_strategies(mortgage, heloc, discretionary_income)
        second = compare_strategies(mortgage, heloc, discretionary_income)
        assert first == second

    def test_pmi_saved(self, thirty_year_mortgage, discretionary_income):
        summary = compare_strategies(thirty_year_mortgage, None, discretionary_income).summary
        assert summary.strategy_pmi_elimination_month < summary.traditional_pmi_elimination_month
        assert summary.pmi_saved > 0


class TestProjectionCap:
    def test_one_month_projection(self, thirty_year_mortgage):
        result = compare_strategies(thirty_year_mortgage, months_to_project=1)
        assert len(result.traditional) == 1
        assert len(result.strategy) == 1
        assert result.summary.status is PayoffStatus.ITERATION_CAP_REACHED
        assert result.summary.months_saved is None
        assert not result.summary.traditional_paid_off

    def test_both_tracks_truncated(self, mortgage, heloc, discretionary_income):
        result = compare_strategies(mortgage, heloc, discretionary_income, months_to_project=36)
        assert len(result.traditional) == 36
        assert len(result.strategy) == 36
        assert result.summary.iteration_cap_reached

    def test_custom_limits(self, mortgage):
        limits = SimulationLimits(max_months=120)
        with pytest.raises(InvalidInputError):
            compare_strategies(mortgage, months_to_project=240, limits=limits)


class TestComparisonErrors:
    def test_payment_below_interest(self, heloc, discretionary_income):
        mortgage = MortgageInput(
            Decimal("250000"), Decimal("0.065"), 240, monthly_payment=Decimal("1300")
        )
        with pytest.raises(NonAmortizingError):
            compare_strategies(mortgage, heloc, discretionary_income)

    def test_payment_short_of_term(self, heloc, discretionary_income):
        """$1,800 covers interest but cannot retire $250K at 6.5% in 240 months."""
        mortgage = MortgageInput(
            Decimal("250000"), Decimal("0.065"), 240, monthly_payment=Decimal("1800")
        )
        with pytest.raises(NonAmortizingError):
            compare_strategies(mortgage, heloc, discretionary_income)

    def test_invalid_heloc(self, mortgage):
        with pytest.raises(InvalidInputError):
            compare_strategies(mortgage, HelocInput(Decimal("100000"), Decimal("-0.01")))
