from decimal import Decimal

from heloc_accelerator.engine.pmi import apply_pmi, current_ltv, pmi_active_at_start
from heloc_accelerator.models.scenario import MortgageInput, PmiTerms

EPSILON = Decimal("0.01")


class TestCurrentLtv:
    def test_ratio(self):
        assert current_ltv(Decimal("390000"), Decimal("500000")) == Decimal("0.7800")

    def test_unknown_property_value(self):
        assert current_ltv(Decimal("390000"), None) is None


class TestPmiActiveAtStart:
    def test_no_terms(self):
        assert not pmi_active_at_start(None, Decimal("400000"))

    def test_no_premium(self):
        terms = PmiTerms(monthly=Decimal("0"), property_value=Decimal("500000"))
        assert not pmi_active_at_start(terms, Decimal("450000"))

    def test_above_threshold(self):
        terms = PmiTerms(monthly=Decimal("150"), property_value=Decimal("500000"))
        assert pmi_active_at_start(terms, Decimal("400000"))

    def test_below_threshold(self):
        terms = PmiTerms(monthly=Decimal("150"), property_value=Decimal("500000"))
        assert not pmi_active_at_start(terms, Decimal("350000"))

    def test_unknown_property_value_charges_pmi(self):
        assert pmi_active_at_start(PmiTerms(monthly=Decimal("150")), Decimal("400000"))


class TestApplyPmi:
    terms = PmiTerms(monthly=Decimal("150"), property_value=Decimal("500000"))

    def test_charged_above_threshold(self):
        month = apply_pmi(self.terms, True, Decimal("395000"), EPSILON)
        assert month.payment == Decimal("150")
        assert month.active and not month.eliminated

    def test_eliminated_on_crossing(self):
        month = apply_pmi(self.terms, True, Decimal("389000"), EPSILON)
        assert month.payment == Decimal("0")
        assert month.eliminated and not month.active

    def test_already_eliminated(self):
        month = apply_pmi(self.terms, False, Decimal("300000"), EPSILON)
        assert month.payment == Decimal("0")
        assert not month.eliminated
        assert month.ltv == Decimal("0.6000")

    def test_payoff_ends_pmi_without_property_value(self):
        terms = PmiTerms(monthly=Decimal("150"))
        month = apply_pmi(terms, True, Decimal("0"), EPSILON)
        assert month.eliminated
        assert month.ltv is None


class TestMortgagePmiTerms:
    def test_none_without_pmi_or_value(self):
        mortgage = MortgageInput(Decimal("250000"), Decimal("0.065"), 240)
        assert mortgage.pmi_terms is None
        assert mortgage.initial_ltv is None

    def test_ltv_tracked_without_premium(self):
        mortgage = MortgageInput(
            Decimal("250000"), Decimal("0.065"), 240, property_value=Decimal("500000")
        )
        assert mortgage.pmi_terms.monthly == Decimal("0")
        assert mortgage.initial_ltv == Decimal("0.5")
