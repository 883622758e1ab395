from decimal import Decimal

import pytest

from group_trip_settlement.balances import (
    calculate_balances,
    explain_all_balances,
    explain_balance,
)
from group_trip_settlement.models import Expense, Member


def _net(balances):
    return {b.user_id: b.net_balance for b in balances}


def test_worked_example(expenses, members):
    balances = calculate_balances(expenses, members)

    assert _net(balances) == {
        "A": Decimal("50.00"),
        "B": Decimal("-10.00"),
        "C": Decimal("-40.00"),
    }
    alice = balances[0]
    assert alice.user_name == "Alice"
    assert alice.total_paid == Decimal("90.00")
    assert alice.total_owed == Decimal("40.00")


def test_roster_order_is_kept(expenses, members):
    reordered = [members[2], members[0], members[1]]
    balances = calculate_balances(expenses, reordered)
    assert [b.user_id for b in balances] == ["C", "A", "B"]


def test_money_is_conserved(expenses, members):
    balances = calculate_balances(expenses, members)
    assert abs(sum(b.net_balance for b in balances)) <= Decimal("0.01")


def test_no_expenses_gives_zero_balances(members):
    balances = calculate_balances([], members)

    assert len(balances) == 3
    assert all(b.net_balance == 0 for b in balances)
    assert calculate_balances(None, members) == balances


def test_no_members_gives_empty_list(expenses):
    assert calculate_balances(expenses, []) == []
    assert calculate_balances(expenses, None) == []


def test_unknown_ids_are_ignored(members):
    expenses = [
        Expense(
            id="E1",
            amount=60,
            paid_by="ZZZ",
            splits=[{"user_id": "A", "amount": 30}, {"user_id": "ghost", "amount": 30}],
        ),
        Expense(
            id="E2",
            amount=20,
            paid_by="B",
            splits=[{"user_id": "nobody", "amount": 20}],
        ),
    ]

    balances = calculate_balances(expenses, members)

    assert _net(balances) == {
        "A": Decimal("-30.00"),
        "B": Decimal("20.00"),
        "C": Decimal("0.00"),
    }


def test_mismatched_splits_leave_residual(members):
    # Splits only cover 80 of the 100 paid
    expenses = [
        Expense(
            id="E1",
            amount=100,
            paid_by="A",
            splits=[{"user_id": "B", "amount": 40}, {"user_id": "C", "amount": 40}],
        )
    ]

    balances = calculate_balances(expenses, members)

    assert _net(balances)["A"] == Decimal("100.00")
    assert sum(b.net_balance for b in balances) == Decimal("20.00")


def test_float_drift_is_absorbed(members):
    expenses = [
        Expense(
            id=f"E{i}",
            amount=0.1,
            paid_by="A",
            splits=[{"user_id": "B", "amount": 0.1}],
        )
        for i in range(10)
    ]

    balances = calculate_balances(expenses, members)

    assert _net(balances)["A"] == Decimal("1.00")
    assert _net(balances)["B"] == Decimal("-1.00")


def test_equal_split_rounding_drift(members):
    expenses = [
        Expense(
            id="E1",
            amount=100,
            paid_by="A",
            splits=[{"user_id": m.id, "amount": "33.33"} for m in members],
        )
    ]

    balances = calculate_balances(expenses, members)

    assert _net(balances) == {
        "A": Decimal("66.67"),
        "B": Decimal("-33.33"),
        "C": Decimal("-33.33"),
    }


def test_duplicate_member_ids_keep_first_position_and_last_name():
    members = [
        Member(id="A", name="Alice"),
        Member(id="B", name="Bob"),
        Member(id="A", name="Ally"),
    ]
    balances = calculate_balances([], members)

    assert [b.user_id for b in balances] == ["A", "B"]
    assert balances[0].user_name == "Ally"


def test_inputs_are_not_modified(expenses, members):
    before_expenses = [e.model_dump() for e in expenses]
    before_members = [m.model_dump() for m in members]

    first = calculate_balances(expenses, members)
    second = calculate_balances(expenses, members)

    assert first == second
    assert [e.model_dump() for e in expenses] == before_expenses
    assert [m.model_dump() for m in members] == before_members


def test_explain_balance(expenses, members):
    explanation = explain_balance("C", expenses, members)

    assert explanation["user_name"] == "Carol"
    assert [c["expense_id"] for c in explanation["expense_contributions"]] == ["E1", "E2"]
    assert explanation["expense_contributions"][0]["owed"] == Decimal("30.00")
    assert explanation["expense_contributions"][0]["paid"] == Decimal("0.00")
    assert explanation["total_paid"] == Decimal("0.00")
    assert explanation["total_owed"] == Decimal("40.00")
    assert explanation["net_balance"] == Decimal("-40.00")


def test_explain_balance_skips_unrelated_expenses(members):
    expenses = [
        Expense(id="E1", amount=20, paid_by="A", splits=[{"user_id": "B", "amount": 20}]),
    ]

    explanation = explain_balance("C", expenses, members)

    assert explanation["expense_contributions"] == []
    assert explanation["net_balance"] == Decimal("0.00")


def test_explain_balance_unknown_member(expenses, members):
    with pytest.raises(ValueError, match="does not exist"):
        explain_balance("ZZZ", expenses, members)


def test_explanations_agree_with_balances(expenses, members):
    balances = calculate_balances(expenses, members)
    explanations = explain_all_balances(expenses, members)

    assert [e["user_id"] for e in explanations] == ["A", "B", "C"]
    for balance, explanation in zip(balances, explanations):
        assert explanation["net_balance"] == balance.net_balance
