"""
Command line entry point.

Usage:
    group-trip-settlement trip.json
    group-trip-settlement trip.json --json
    python -m group_trip_settlement trip.json --title "Ski Week"
"""

import argparse
import json
import logging
import sys

from group_trip_settlement.config import get_settings
from group_trip_settlement.money import format_currency
from group_trip_settlement.report import load_trip, summarize_trip, summary_to_dict

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="group-trip-settlement",
        description="Show member balances and who pays whom for a group trip."
    )
    parser.add_argument("trip_file", help="JSON file with 'members' and 'expenses'")
    parser.add_argument("--json", action="store_true", help="print the summary as JSON")
    parser.add_argument("--title", default=None, help="trip title shown in the report")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return parser


def _print_report(summary: dict, title: str) -> None:
    print(title)
    print("=" * len(title))
    print(f"Total spent: {format_currency(summary['total_spent'])}")
    print()

    print("Balances")
    for balance in summary["balances"]:
        print(
            f"  {balance.user_name}: paid {format_currency(balance.total_paid)}, "
            f"owes {format_currency(balance.total_owed)}, "
            f"net {format_currency(balance.net_balance)}"
        )
    print()

    print("Who pays whom")
    if summary["settled"]:
        print("  Everyone is settled up!")
    for settlement in summary["settlements"]:
        print(
            f"  {settlement.from_name} pays {settlement.to_name} "
            f"{format_currency(settlement.amount)}"
        )


def main(argv=None) -> int:
    args = _build_parser().parse_args(argv)
    settings = get_settings()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level_number,
        format="%(levelname)s %(name)s: %(message)s"
    )

    try:
        expenses, members, file_title = load_trip(args.trip_file)
    except (OSError, ValueError) as e:
        logger.error("Could not load trip: %s", e)
        print(f"error: {e}", file=sys.stderr)
        return 1

    summary = summarize_trip(expenses, members)

    if args.json:
        print(json.dumps(summary_to_dict(summary), indent=2))
    else:
        _print_report(summary, args.title or file_title or "Trip settlement")
    return 0


if __name__ == "__main__":
    sys.exit(main())
