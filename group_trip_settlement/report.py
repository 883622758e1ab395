"""
Report Module

Loads a trip from JSON and summarizes who owes what.

Trip file format:
    {
        "title": "Lake Tahoe 2026",          (optional)
        "members": [{"id": "A", "name": "Ann"}, ...],
        "expenses": [
            {"id": "E1", "amount": 90, "paid_by": "A",
             "splits": [{"user_id": "A", "amount": 30}, ...]},
            ...
        ]
    }

Functions:
    load_trip: Read members and expenses from a JSON file.
    summarize_trip: Balances, settlements and breakdowns in one dict.
"""

import json
import logging
from decimal import Decimal
from typing import Iterable

from pydantic import ValidationError

from group_trip_settlement.balances import calculate_balances, explain_all_balances
from group_trip_settlement.models import Expense, Member
from group_trip_settlement.money import round_money
from group_trip_settlement.settlement import calculate_settlements

logger = logging.getLogger(__name__)


def load_trip(path) -> tuple[list[Expense], list[Member], str]:
    """
    Read a trip file.

    Args:
        path: Path to a JSON trip file.

    Returns:
        tuple: (expenses, members, title). title is "" if the file has none.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the file is not valid JSON or has malformed entries.
    """
    with open(path, encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"{path} is not valid JSON: {e}")

    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a JSON object with 'members' and 'expenses'")

    raw_members = data.get("members", [])
    raw_expenses = data.get("expenses", [])
    if not isinstance(raw_members, list) or not isinstance(raw_expenses, list):
        raise ValueError("'members' and 'expenses' must be lists")

    try:
        members = [Member.model_validate(m) for m in raw_members]
        expenses = [Expense.model_validate(e) for e in raw_expenses]
    except ValidationError as e:
        raise ValueError(f"invalid trip data in {path}: {e}")

    logger.info("Loaded %d member(s) and %d expense(s) from %s", len(members), len(expenses), path)
    return expenses, members, str(data.get("title") or "")


def summarize_trip(expenses: Iterable[Expense], members: Iterable[Member]) -> dict:
    """
    Compute everything needed to show a trip's settle-up view.

    Args:
        expenses: Expenses for the trip.
        members: Full trip roster.

    Returns:
        dict: Contains:
            - balances: list of Balance
            - settlements: list of Settlement
            - explanations: list of per-member breakdowns
            - total_spent: Decimal sum of all expense amounts
            - settled: True when no payments are needed
    """
    expenses = list(expenses)
    members = list(members)

    balances = calculate_balances(expenses, members)
    settlements = calculate_settlements(balances)
    total_spent = round_money(sum((e.amount for e in expenses), Decimal("0")))

    return {
        "balances": balances,
        "settlements": settlements,
        "explanations": explain_all_balances(expenses, members),
        "total_spent": total_spent,
        "settled": not settlements
    }


def summary_to_dict(summary: dict) -> dict:
    """Convert summarize_trip() output into JSON-serializable data."""
    return {
        "balances": [b.to_dict() for b in summary["balances"]],
        "settlements": [s.to_dict() for s in summary["settlements"]],
        "explanations": [
            {
                **explanation,
                "expense_contributions": [
                    {
                        **item,
                        "amount": float(item["amount"]),
                        "paid": float(item["paid"]),
                        "owed": float(item["owed"])
                    }
                    for item in explanation["expense_contributions"]
                ],
                "total_paid": float(explanation["total_paid"]),
                "total_owed": float(explanation["total_owed"]),
                "net_balance": float(explanation["net_balance"])
            }
            for explanation in summary["explanations"]
        ],
        "total_spent": float(summary["total_spent"]),
        "settled": summary["settled"]
    }
