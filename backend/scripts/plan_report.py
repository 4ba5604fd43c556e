#!/usr/bin/env python3
"""Compare payoff strategies for a debt sheet and print a summary.

Usage:
    python scripts/plan_report.py debts.xlsx
    python scripts/plan_report.py debts.csv --extra 200 --lump 1500
    python scripts/plan_report.py debts.xlsx --schedule schedule.csv

The optional schedule CSV holds one row per debt per month for the
recommended strategy.
"""
from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from pathlib import Path

BACKEND_DIR = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(BACKEND_DIR))

from debtplan.models.plan import PlanResult  # noqa: E402
from debtplan.models.settings import PlanSettings  # noqa: E402
from debtplan.services.debt_sheet_parser import parse_debt_sheet  # noqa: E402
from debtplan.services.plan_service import run_strategy_comparison  # noqa: E402
from debtplan.services.plan_views import schedule_frame  # noqa: E402

logging.basicConfig(level=logging.INFO, format="%(message)s")
logger = logging.getLogger(__name__)


def _describe(label: str, plan: PlanResult) -> str:
    when = plan.debt_free_date.strftime("%b %Y") if plan.debt_free_date else "not within cap"
    return (
        f"  {label:<13} {plan.totals.months_to_debt_free:>4} months  "
        f"interest ${plan.totals.interest:>12,.2f}  debt-free {when}"
    )


def main():
    parser = argparse.ArgumentParser(description="Compare debt payoff strategies for a debt sheet")
    parser.add_argument("sheet", help="Path to a .xlsx, .xls or .csv debt sheet")
    parser.add_argument("--extra", type=float, default=0.0, help="Extra monthly payment (default: 0)")
    parser.add_argument("--lump", type=float, default=0.0, help="One-time payment at plan start (default: 0)")
    parser.add_argument("--start", type=date.fromisoformat, default=None, help="Plan start date, YYYY-MM-DD")
    parser.add_argument("--schedule", help="Write the recommended plan's schedule to this CSV file")
    args = parser.parse_args()

    path = Path(args.sheet)
    with open(path, "rb") as f:
        sheet = parse_debt_sheet(f, path.name)
    logger.info("Loaded %d debts (%s) totalling $%.2f", sheet.debt_count, sheet.name, sheet.total_balance)

    settings = PlanSettings(extra_monthly=args.extra, one_time_extra=args.lump, start_date=args.start)
    comparison = run_strategy_comparison(sheet.debts, settings)

    print()
    print(_describe("Snowball", comparison.snowball))
    print(_describe("Avalanche", comparison.avalanche))
    print(_describe("Minimum only", comparison.minimum_only))
    print()
    for kind, months in comparison.months_saved.items():
        saved = comparison.interest_saved[kind]
        print(f"  {kind}: {months} months and ${saved:,.2f} interest saved vs minimum only")
    print(f"\n  Recommended: {comparison.recommended.value}")

    recommended = getattr(comparison, comparison.recommended.value)
    print("\n  Payoff order:")
    for d in recommended.debts:
        if d.included and d.payoff_month is not None:
            print(f"    month {d.payoff_month:>3}  {d.name}")

    if args.schedule:
        schedule_frame(recommended).to_csv(args.schedule, index=False)
        logger.info("Schedule written to %s", args.schedule)


if __name__ == "__main__":
    main()
