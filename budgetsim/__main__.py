"""CLI entry point: print projected account values day by day."""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from budgetsim.core.loader import SpecificationError, load_sample_simulation, load_simulation
from budgetsim.core.money import format_money
from budgetsim.core.simulation import Simulation
from budgetsim.logging_config import setup_logger


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="budgetsim", description="Project account values forward in time")
    parser.add_argument("spec", nargs="?", help="Path to simulation JSON file (built-in sample when omitted)")
    parser.add_argument("--days", type=int, default=5, help="Number of days to simulate (default: 5)")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    return parser


def _print_days(simulation: Simulation, days: int) -> None:
    ordered_ids = sorted(simulation.accounts, key=lambda account_id: account_id.id_val)
    for values, day in simulation.run(days):
        print(f"{day.isoformat()}:")
        for account_id in ordered_ids:
            name = simulation.accounts[account_id].name
            print(f"Account {account_id.id_val} ({name}), current value {format_money(values[account_id])}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    setup_logger(level=args.log_level)

    if args.days < 0:
        print("--days must be >= 0", file=sys.stderr)
        return 2

    try:
        simulation = load_simulation(args.spec) if args.spec else load_sample_simulation()
    except SpecificationError as exc:
        for error in exc.errors:
            print(f"ERROR: {error}", file=sys.stderr)
        return 2

    _print_days(simulation, args.days)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
