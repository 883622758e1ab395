from decimal import Decimal

import pytest

from group_trip_settlement.models import BudgetCategory, ExpenseSplit, SplitType
from group_trip_settlement.splits import (
    build_equal_splits,
    build_splits,
    calculate_per_person_budget,
    calculate_total_budget,
    validate_custom_splits,
)


def test_build_equal_splits():
    splits = build_equal_splits(100, ["A", "B", "C"])

    assert [s.user_id for s in splits] == ["A", "B", "C"]
    assert all(s.amount == Decimal("33.33") for s in splits)


def test_validate_custom_splits():
    splits = [ExpenseSplit(user_id="A", amount="60"), ExpenseSplit(user_id="B", amount="40")]

    assert validate_custom_splits(splits, 100)
    assert validate_custom_splits(splits, "100.004")
    assert not validate_custom_splits(splits, "100.01")
    assert not validate_custom_splits([], 100)


def test_build_splits_equal():
    splits = build_splits("equal", 90, ["A", "B", "C"])
    assert [s.amount for s in splits] == [Decimal("30.00")] * 3


def test_build_splits_none():
    assert build_splits(SplitType.NONE, 90, ["A", "B"]) == []


def test_build_splits_custom_accepts_dicts():
    splits = build_splits(
        "custom",
        50,
        ["A", "B"],
        [{"user_id": "A", "amount": 20}, {"userId": "B", "amount": "30"}],
    )

    assert [(s.user_id, s.amount) for s in splits] == [("A", Decimal("20")), ("B", Decimal("30"))]


def test_build_splits_custom_must_match_total():
    with pytest.raises(ValueError, match="does not match"):
        build_splits("custom", 50, ["A", "B"], [{"user_id": "A", "amount": 20}])


def test_build_splits_custom_requires_splits():
    with pytest.raises(ValueError, match="custom_splits"):
        build_splits("custom", 50, ["A"], None)


def test_build_splits_custom_rejects_negative_amounts():
    with pytest.raises(ValueError, match="negative"):
        build_splits(
            "custom",
            50,
            ["A", "B"],
            [{"user_id": "A", "amount": 70}, {"user_id": "B", "amount": -20}],
        )


def test_build_splits_unknown_type():
    with pytest.raises(ValueError, match="split_type"):
        build_splits("weighted", 50, ["A"])


def test_build_splits_equal_needs_members():
    with pytest.raises(ValueError):
        build_splits("equal", 50, [])


@pytest.fixture
def categories():
    return [
        BudgetCategory(id="1", name="Lodging", estimated_cost=900, split_type="equal"),
        BudgetCategory(
            id="2",
            name="Green fees",
            estimatedCost=300,
            splitType="custom",
            customSplits=[{"user_id": "A", "amount": 200}, {"user_id": "B", "amount": 100}],
        ),
        BudgetCategory(id="3", name="Souvenirs", estimated_cost=50, split_type="none"),
    ]


def test_per_person_budget(categories):
    assert calculate_per_person_budget(categories, 3, "A") == Decimal("500.00")
    assert calculate_per_person_budget(categories, 3, "C") == Decimal("300.00")
    assert calculate_per_person_budget(categories, 3) == Decimal("300.00")
    assert calculate_per_person_budget(categories, 0, "A") == Decimal("0")


def test_total_budget(categories):
    assert calculate_total_budget(categories) == Decimal("1250.00")
    assert calculate_total_budget([]) == Decimal("0.00")
