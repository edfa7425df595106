"""Strategy track behavior: draws, paydown, credit clamping, PMI, caps."""

import pytest
from decimal import Decimal

from heloc_accelerator.engine.amortization import amortize
from heloc_accelerator.engine.errors import InvalidInputError, NonAmortizingError
from heloc_accelerator.engine.policy import NeverDrawPolicy
from heloc_accelerator.engine.simulator import prepare_loan, simulate
from heloc_accelerator.models.scenario import (
    ExpenseScenario,
    HelocInput,
    IncomeScenario,
    IncomeType,
    MortgageInput,
)

EPSILON = Decimal("0.01")


class TestSimulateBasics:
    def test_pays_off_within_term(self, mortgage, heloc, discretionary_income):
        track = simulate(mortgage, heloc, discretionary_income)
        assert len(track) < mortgage.term_in_months
        assert track[-1].ending_balance <= EPSILON
        assert track[-1].ending_heloc_balance <= EPSILON

    def test_months_are_sequential(self, mortgage, heloc, discretionary_income):
        track = simulate(mortgage, heloc, discretionary_income)
        assert [m.month for m in track] == list(range(1, len(track) + 1))

    def test_deterministic(self, mortgage, heloc, discretionary_income):
        assert simulate(mortgage, heloc, discretionary_income) == simulate(
            mortgage, heloc, discretionary_income
        )

    def test_cumulative_totals_never_decrease(self, mortgage, heloc, discretionary_income):
        track = simulate(mortgage, heloc, discretionary_income)
        for prev, cur in zip(track, track[1:]):
            assert cur.cumulative_interest >= prev.cumulative_interest
            assert cur.cumulative_principal >= prev.cumulative_principal

    def test_balances_carry_forward(self, mortgage, heloc, discretionary_income):
        track = simulate(mortgage, heloc, discretionary_income)
        for prev, cur in zip(track, track[1:]):
            assert cur.beginning_balance == prev.ending_balance
            assert cur.beginning_heloc_balance == prev.ending_heloc_balance

    def test_no_negative_balances(self, mortgage, heloc, discretionary_income):
        track = simulate(mortgage, heloc, discretionary_income)
        assert all(m.ending_balance >= 0 and m.ending_heloc_balance >= 0 for m in track)


class TestNoAcceleration:
    def test_matches_traditional_without_income(self, mortgage):
        track = simulate(mortgage)
        baseline = list(amortize(mortgage.principal, mortgage.annual_interest_rate, 240))
        assert [m.ending_balance for m in track] == [m.ending_balance for m in baseline]
        assert all(m.months_saved == 0 for m in track)
        assert all(m.cumulative_interest_saved == 0 for m in track)

    def test_negative_discretionary_is_not_a_credit(self, mortgage, heloc):
        expenses = [ExpenseScenario(amount=Decimal("500"))]
        track = simulate(mortgage, heloc, [], expenses)
        baseline = list(amortize(mortgage.principal, mortgage.annual_interest_rate, 240))
        assert [m.ending_balance for m in track] == [m.ending_balance for m in baseline]
        assert all(m.heloc_draw == 0 for m in track)
        assert track[0].discretionary_income == Decimal("-500.00")

    def test_zero_available_credit_matches_no_heloc(self, mortgage, discretionary_income):
        closed = HelocInput(Decimal("100000"), Decimal("0.045"), heloc_available_credit=Decimal("0"))
        with_closed_line = simulate(mortgage, closed, discretionary_income)
        without_heloc = simulate(mortgage, None, discretionary_income)
        assert with_closed_line == without_heloc
        assert all(m.heloc_draw == 0 for m in with_closed_line)

    def test_never_draw_policy_matches_no_heloc(self, mortgage, heloc, discretionary_income):
        held = simulate(mortgage, heloc, discretionary_income, policy=NeverDrawPolicy())
        assert held == simulate(mortgage, None, discretionary_income)


class TestHelocDraws:
    def test_first_month(self, mortgage, heloc, discretionary_income):
        """HELOC at 4.5% is cheaper than 6.5%: discretionary income plus an equal draw."""
        first = simulate(mortgage, heloc, discretionary_income)[0]
        assert first.interest == Decimal("1354.17")
        assert first.extra_principal == Decimal("1500.00")
        assert first.heloc_draw == Decimal("1500.00")
        assert first.ending_heloc_balance == Decimal("1500.00")
        assert first.principal == Decimal("1863.93") - Decimal("1354.17") + Decimal("3000.00")

    def test_draws_clamped_to_available_credit(self, mortgage, discretionary_income):
        small_line = HelocInput(Decimal("100000"), Decimal("0.045"), heloc_available_credit=Decimal("5000"))
        track = simulate(mortgage, small_line, discretionary_income)
        assert max(m.ending_heloc_balance for m in track) == Decimal("5000.00")
        assert sum(m.heloc_draw for m in track) == Decimal("5000.00")

    def test_expensive_heloc_only_used_near_payoff(self, mortgage, discretionary_income):
        pricey = HelocInput(Decimal("100000"), Decimal("0.09"))
        track = simulate(mortgage, pricey, discretionary_income)
        drawn = [m for m in track if m.heloc_draw > 0]
        assert drawn
        assert all(m.beginning_balance < Decimal("10000") for m in drawn)

    def test_heloc_repaid_after_mortgage(self, mortgage, heloc, discretionary_income):
        track = simulate(mortgage, heloc, discretionary_income)
        mortgage_done = next(m.month for m in track if m.ending_balance <= EPSILON)
        assert mortgage_done < track[-1].month
        after = track[mortgage_done:]
        assert all(m.heloc_draw == 0 for m in after)
        assert all(m.heloc_principal > 0 for m in after)

    def test_unpaid_heloc_interest_capitalizes(self, mortgage, heloc):
        """Income stops after a year while the HELOC carries a balance."""
        income = [IncomeScenario(amount=Decimal("1500"), end_month=12)]
        track = simulate(mortgage, heloc, income)
        month_13 = track[12]
        assert month_13.discretionary_income == Decimal("0")
        assert month_13.heloc_interest > 0
        assert month_13.ending_heloc_balance == (
            month_13.beginning_heloc_balance + month_13.heloc_interest
        )


class TestScenarios:
    def test_job_loss_slows_payoff(self, mortgage, heloc, household_budget):
        income, expenses = household_budget
        steady = simulate(mortgage, heloc, income, expenses)
        job_loss = IncomeScenario(
            amount=Decimal("-6000"), start_month=6, end_month=11, scenario_type=IncomeType.JOB_LOSS
        )
        disrupted = simulate(mortgage, heloc, income + [job_loss], expenses)
        assert len(disrupted) >= len(steady)
        assert disrupted[-1].cumulative_interest > steady[-1].cumulative_interest

    def test_months_saved_grows(self, mortgage, heloc, discretionary_income):
        track = simulate(mortgage, heloc, discretionary_income)
        assert track[0].months_saved >= 0
        assert track[-1].months_saved > track[0].months_saved


class TestStrategyPmi:
    def test_acceleration_removes_pmi_sooner(self, thirty_year_mortgage):
        income = [IncomeScenario(amount=Decimal("1000"))]
        track = simulate(thirty_year_mortgage, None, income)
        baseline = list(amortize(
            thirty_year_mortgage.principal,
            thirty_year_mortgage.annual_interest_rate,
            360,
            pmi=thirty_year_mortgage.pmi_terms,
        ))
        strategy_month = next(m.month for m in track if m.pmi_eliminated)
        baseline_month = next(m.month for m in baseline if m.pmi_eliminated)
        assert strategy_month < baseline_month
        assert track[0].pmi_payment == Decimal("150")


class TestTermination:
    def test_projection_cap(self, thirty_year_mortgage):
        track = simulate(thirty_year_mortgage, months_to_project=1)
        assert len(track) == 1
        assert track[0].ending_balance > EPSILON

    def test_payment_below_interest_raises_before_simulating(self):
        underwater = MortgageInput(
            Decimal("250000"), Decimal("0.065"), 240, monthly_payment=Decimal("1000")
        )
        with pytest.raises(NonAmortizingError):
            simulate(underwater, months_to_project=600)

    def test_invalid_heloc_raises(self, mortgage):
        with pytest.raises(InvalidInputError):
            simulate(mortgage, HelocInput(Decimal("1000"), Decimal("0.05"), Decimal("2000")))

    def test_projection_over_cap_raises(self, mortgage):
        with pytest.raises(InvalidInputError, match="months_to_project"):
            simulate(mortgage, months_to_project=601)


class TestPrepareLoan:
    def test_derives_payment(self, mortgage):
        loan = prepare_loan(mortgage, None, [], [], 600)
        assert loan.payment == Decimal("1863.93")
        assert loan.pmi is None

    def test_keeps_explicit_payment(self, mortgage):
        explicit = MortgageInput(
            mortgage.principal, mortgage.annual_interest_rate, 240, monthly_payment=Decimal("2200")
        )
        assert prepare_loan(explicit, None, [], [], 600).payment == Decimal("2200")
