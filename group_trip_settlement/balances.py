"""
Balances Module

This module computes each member's net position across a trip's shared
expenses, plus a per-expense breakdown for transparency.

Features:
    - Per-member paid/owed/net totals
    - Unknown payer or split IDs are ignored, never an error
    - Decimal accumulation, rounded to cents only on output
    - Per-member expense breakdown

Data Model:
    Input - expenses (list of Expense):
        - id: string
        - amount: Decimal
        - paid_by: member ID
        - splits: list of ExpenseSplit (user_id, amount)

    Input - members (list of Member):
        - id: string
        - name: string

    Output - list of Balance, one per member in roster order:
        - total_paid: sum of expense amounts paid by this member
        - total_owed: sum of split amounts assigned to this member
        - net_balance: total_paid - total_owed
            - Positive = member is owed money
            - Negative = member owes money

Functions:
    calculate_balances: Calculate net balances for all members.
    explain_balance: Expense-by-expense breakdown for one member.
    explain_all_balances: Breakdowns for every member.
"""

import logging
from decimal import Decimal
from typing import Iterable, Optional

from group_trip_settlement.models import Balance, Expense, Member
from group_trip_settlement.money import round_money

logger = logging.getLogger(__name__)


def _roster(members: Optional[Iterable[Member]]) -> dict[str, Member]:
    """
    Map member ID to member.

    A duplicate ID keeps the position of its first entry and the data of
    its last one.
    """
    roster = {}
    for member in members or []:
        roster[member.id] = member
    return roster


def calculate_balances(
    expenses: Optional[Iterable[Expense]],
    members: Optional[Iterable[Member]]
) -> list[Balance]:
    """
    Calculate net balances for all members.

    For each expense:
        1. The payer's paid total increases by the expense amount
        2. Each split's member has their owed total increased by the split amount

    Args:
        expenses: Expenses for the trip (may be empty or None).
        members: Full trip roster, including members with no activity.

    Returns:
        list[Balance]: One balance per member, in the order supplied.

    Notes:
        - Payer and split IDs not in the roster are skipped
        - Inputs are not modified
    """
    roster = _roster(members)

    # Accumulate in full precision; round only when building the output
    totals = {
        member_id: {"paid": Decimal("0"), "owed": Decimal("0")}
        for member_id in roster
    }

    for expense in expenses or []:
        payer_totals = totals.get(expense.paid_by)
        if payer_totals is not None:
            payer_totals["paid"] += expense.amount
        else:
            logger.debug(
                "Expense %s paid by unknown member %r; payment not attributed",
                expense.id, expense.paid_by
            )

        for split in expense.splits:
            split_totals = totals.get(split.user_id)
            if split_totals is not None:
                split_totals["owed"] += split.amount
            else:
                logger.debug(
                    "Expense %s has a split for unknown member %r; share not attributed",
                    expense.id, split.user_id
                )

    return [
        Balance(
            user_id=member_id,
            user_name=roster[member_id].name,
            total_paid=round_money(data["paid"]),
            total_owed=round_money(data["owed"]),
            net_balance=round_money(data["paid"] - data["owed"])
        )
        for member_id, data in totals.items()
    ]


def explain_balance(
    user_id: str,
    expenses: Optional[Iterable[Expense]],
    members: Optional[Iterable[Member]]
) -> dict:
    """
    Explain how a member's balance was reached.

    Lists every expense the member paid for or holds a split in, with the
    amount they paid and the amount they owe on that expense.

    Args:
        user_id: Member to explain.
        expenses: Expenses for the trip.
        members: Full trip roster.

    Returns:
        dict: Explanation containing:
            - user_id, user_name
            - expense_contributions: list of dicts with expense_id,
              description, amount, paid and owed
            - total_paid, total_owed, net_balance (Decimal, rounded)

    Raises:
        ValueError: If user_id is not in the roster.
    """
    roster = _roster(members)
    if user_id not in roster:
        raise ValueError(f"member '{user_id}' does not exist in this trip")

    contributions = []
    total_paid = Decimal("0")
    total_owed = Decimal("0")

    for expense in expenses or []:
        is_payer = expense.paid_by == user_id
        own_splits = [split for split in expense.splits if split.user_id == user_id]

        # Skip expenses this member had nothing to do with
        if not is_payer and not own_splits:
            continue

        paid = expense.amount if is_payer else Decimal("0")
        owed = sum((split.amount for split in own_splits), Decimal("0"))

        contributions.append({
            "expense_id": expense.id,
            "description": expense.description,
            "amount": round_money(expense.amount),
            "paid": round_money(paid),
            "owed": round_money(owed)
        })
        total_paid += paid
        total_owed += owed

    return {
        "user_id": user_id,
        "user_name": roster[user_id].name,
        "expense_contributions": contributions,
        "total_paid": round_money(total_paid),
        "total_owed": round_money(total_owed),
        "net_balance": round_money(total_paid - total_owed)
    }


def explain_all_balances(
    expenses: Optional[Iterable[Expense]],
    members: Optional[Iterable[Member]]
) -> list[dict]:
    """Return explain_balance() output for every member, in roster order."""
    expenses = list(expenses or [])
    members = list(members or [])
    return [
        explain_balance(member_id, expenses, members)
        for member_id in _roster(members)
    ]
