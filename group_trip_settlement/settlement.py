"""
Settlement Module

This module turns member balances into a short list of payments that
settles the trip.

Features:
    - Convert net balances into settlement transactions
    - Greedy largest-creditor / largest-debtor matching
    - One-cent tolerance for rounding leftovers
    - Check what is still outstanding after a set of payments

Data Model:
    Input - balances (list of Balance):
        - user_id, user_name
        - net_balance: Decimal (positive = owed money, negative = owes money)

    Output - list of Settlement:
        - from_user / from_name: debtor who pays
        - to_user / to_name: creditor who receives
        - amount: Decimal rounded to 2 decimal places

Functions:
    calculate_settlements: Convert balances into settlement transactions.
    apply_settlements: Balances remaining after settlements are paid.
"""

import logging
from decimal import Decimal
from typing import Iterable

from group_trip_settlement.models import Balance, Settlement
from group_trip_settlement.money import MONEY_EPSILON, round_money

logger = logging.getLogger(__name__)


def calculate_settlements(balances: Iterable[Balance]) -> list[Settlement]:
    """
    Calculate the payments needed to bring every balance to zero.

    Uses a greedy algorithm:
        1. Split members into creditors (net_balance > 0.01) and debtors
           (net_balance < -0.01); anyone within a cent of zero is settled
        2. Sort both lists by amount, largest first (stable, so ties keep
           input order)
        3. Match the current largest debtor with the current largest creditor
           for the smaller of the two amounts
        4. Move past whichever side drops below one cent and repeat until
           either list runs out

    Args:
        balances: Member balances, typically from calculate_balances().

    Returns:
        list[Settlement]: Suggested payments, at most
            creditors + debtors - 1 of them.

    Notes:
        - Not guaranteed to be the true minimum number of payments
        - Does NOT validate that balances sum to zero
        - Does NOT modify input balances
    """
    # Working copies: [user_id, user_name, remaining amount as positive Decimal]
    creditors = []
    debtors = []

    for balance in balances:
        net = balance.net_balance
        if net > MONEY_EPSILON:
            creditors.append([balance.user_id, balance.user_name, net])
        elif net < -MONEY_EPSILON:
            debtors.append([balance.user_id, balance.user_name, abs(net)])

    creditors.sort(key=lambda entry: entry[2], reverse=True)
    debtors.sort(key=lambda entry: entry[2], reverse=True)

    settlements = []
    i = 0
    j = 0

    while i < len(creditors) and j < len(debtors):
        creditor = creditors[i]
        debtor = debtors[j]

        amount = min(creditor[2], debtor[2])

        if amount > MONEY_EPSILON:
            settlements.append(Settlement(
                from_user=debtor[0],
                from_name=debtor[1],
                to_user=creditor[0],
                to_name=creditor[1],
                amount=round_money(amount)
            ))

        creditor[2] -= amount
        debtor[2] -= amount

        if creditor[2] < MONEY_EPSILON:
            i += 1
        if debtor[2] < MONEY_EPSILON:
            j += 1

    if i < len(creditors) or j < len(debtors):
        # Balances did not net to zero; leftovers stay unsettled
        logger.debug(
            "Settlement ended with %d creditor(s) and %d debtor(s) unmatched",
            len(creditors) - i, len(debtors) - j
        )

    return settlements


def apply_settlements(
    balances: Iterable[Balance],
    settlements: Iterable[Settlement]
) -> dict[str, Decimal]:
    """
    Return each member's balance after the given settlements are paid.

    Paying raises the payer's balance toward zero; receiving lowers the
    payee's balance toward zero.

    Args:
        balances: Member balances before any payment.
        settlements: Payments to apply.

    Returns:
        dict[str, Decimal]: Remaining net balance keyed by user_id, in input order.
    """
    remaining = {balance.user_id: balance.net_balance for balance in balances}

    for settlement in settlements:
        if settlement.from_user in remaining:
            remaining[settlement.from_user] += settlement.amount
        if settlement.to_user in remaining:
            remaining[settlement.to_user] -= settlement.amount

    return remaining
