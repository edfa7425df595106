"""Terminal report comparing traditional payoff with HELOC acceleration.

Usage:
    python -m heloc_accelerator.cli --principal 250000 --rate 0.065 --term 240 \
        --heloc-limit 100000 --heloc-rate 0.045 --discretionary 1500
    python -m heloc_accelerator.cli --principal 300000 --rate 0.07 --term 360 \
        --discretionary 800 --property-value 350000 --pmi 150 --no-draws
"""

import argparse
import sys
from decimal import Decimal

from heloc_accelerator.engine.amortization import MAX_PROJECTION_MONTHS, yearly_summary
from heloc_accelerator.engine.cashflow import baseline_scenarios
from heloc_accelerator.engine.comparison import compare_strategies
from heloc_accelerator.engine.errors import SimulationError
from heloc_accelerator.engine.policy import DEFAULT_POLICY, NeverDrawPolicy
from heloc_accelerator.models.results import ComparisonResult
from heloc_accelerator.models.scenario import HelocInput, MortgageInput


def _months(n: int | None) -> str:
    if n is None:
        return "not paid off"
    years, months = divmod(n, 12)
    return f"{n} mo ({years}y {months}m)"


def print_summary(result: ComparisonResult) -> None:
    s = result.summary
    print(f"\n{'=' * 60}")
    print(f"  HELOC Acceleration Report")
    print(f"{'=' * 60}")
    print(f"  Status:               {s.status.value}")
    print(f"  Traditional payoff:   {_months(s.traditional_payoff_months)}")
    print(f"  Strategy payoff:      {_months(s.strategy_payoff_months)}")
    if s.months_saved is not None:
        print(f"  Months saved:         {s.months_saved}")
    print(f"  Traditional interest: ${s.traditional_total_interest:,.2f}")
    print(f"  Strategy interest:    ${s.strategy_total_interest:,.2f}"
          f"  (HELOC ${s.strategy_heloc_interest:,.2f})")
    print(f"  Interest saved:       ${s.interest_saved:,.2f} ({s.percentage_interest_saved}%)")
    print(f"  Peak HELOC balance:   ${s.max_heloc_balance:,.2f}")
    if s.traditional_total_pmi or s.strategy_total_pmi:
        print(f"  PMI removed:          month {s.traditional_pmi_elimination_month} -> "
              f"month {s.strategy_pmi_elimination_month} (saves ${s.pmi_saved:,.2f})")
    print()


def print_yearly(result: ComparisonResult) -> None:
    traditional = {row["year"]: row for row in yearly_summary(result.traditional)}
    strategy = {row["year"]: row for row in yearly_summary(result.strategy)}
    years = sorted(set(traditional) | set(strategy))

    print(f"  {'Year':>4}  {'Traditional':>14}  {'Mortgage':>14}  {'HELOC':>12}  {'Interest':>11}")
    for year in years:
        trad = traditional.get(year)
        strat = strategy.get(year)
        trad_bal = f"${trad['ending_balance']:,.0f}" if trad else "-"
        if strat:
            mortgage = f"${strat['ending_balance']:,.0f}"
            heloc = f"${strat['ending_heloc_balance']:,.0f}"
            interest = f"${strat['interest'] + strat['heloc_interest']:,.0f}"
        else:
            mortgage = heloc = interest = "-"
        print(f"  {year:>4}  {trad_bal:>14}  {mortgage:>14}  {heloc:>12}  {interest:>11}")
    print()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="HELOC mortgage acceleration simulator")
    parser.add_argument("--principal", type=Decimal, required=True, help="Mortgage balance")
    parser.add_argument("--rate", type=Decimal, required=True, help="Annual rate as a fraction (0.065)")
    parser.add_argument("--term", type=int, required=True, help="Remaining term in months")
    parser.add_argument("--payment", type=Decimal, default=None, help="Monthly payment (default: derived)")
    parser.add_argument("--heloc-limit", type=Decimal, default=None, help="HELOC credit limit")
    parser.add_argument("--heloc-rate", type=Decimal, default=None, help="HELOC annual rate as a fraction")
    parser.add_argument("--heloc-available", type=Decimal, default=None, help="Credit available to draw")
    parser.add_argument("--discretionary", type=Decimal, default=Decimal("0"),
                        help="Monthly net income left after expenses")
    parser.add_argument("--property-value", type=Decimal, default=None, help="Property value for LTV")
    parser.add_argument("--pmi", type=Decimal, default=Decimal("0"), help="Monthly PMI premium")
    parser.add_argument("--months", type=int, default=MAX_PROJECTION_MONTHS, help="Projection cap")
    parser.add_argument("--no-draws", action="store_true", help="Never draw on the HELOC")
    parser.add_argument("--yearly", action="store_true", help="Show the year-by-year table")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    mortgage = MortgageInput(
        principal=args.principal,
        annual_interest_rate=args.rate,
        term_in_months=args.term,
        monthly_payment=args.payment,
        property_value=args.property_value,
        pmi_monthly=args.pmi,
    )
    heloc = None
    if args.heloc_limit is not None:
        heloc = HelocInput(
            heloc_limit=args.heloc_limit,
            heloc_rate=args.heloc_rate if args.heloc_rate is not None else args.rate,
            heloc_available_credit=args.heloc_available,
        )
    income, expenses = baseline_scenarios(args.discretionary, Decimal("0"))

    try:
        result = compare_strategies(
            mortgage,
            heloc,
            income,
            expenses,
            args.months,
            policy=NeverDrawPolicy() if args.no_draws else DEFAULT_POLICY,
        )
    except SimulationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print_summary(result)
    if args.yearly:
        print_yearly(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
