"""
Splits Module

This module builds the per-member splits for an expense and the
per-person figures for planned budget categories.

Features:
    - Equal splitting among members
    - Custom splits, checked against the expense total (one-cent tolerance)
    - Budget per-person and total estimates

Split types:
    - equal: total divided evenly, each share rounded to cents
    - custom: caller supplies each member's amount
    - none: nobody is charged

Functions:
    build_equal_splits: One equal split per member.
    validate_custom_splits: Check custom splits sum to the total.
    build_splits: Build splits for any split type.
    calculate_per_person_budget: A member's share of planned categories.
    calculate_total_budget: Sum of planned category costs.
"""

from decimal import Decimal
from typing import Iterable, Optional, Sequence

from group_trip_settlement.models import BudgetCategory, ExpenseSplit, SplitType
from group_trip_settlement.money import (
    Number,
    amounts_match,
    calculate_equal_split,
    round_money,
)


def build_equal_splits(amount: Number, user_ids: Sequence[str]) -> list[ExpenseSplit]:
    """
    Split an amount evenly across members.

    Each share is rounded to cents independently, so the shares can differ
    from the total by a few cents (e.g. 100 / 3 gives 3 x 33.33). The
    balance calculator absorbs this.

    Args:
        amount: Total amount to split.
        user_ids: Members sharing the cost.

    Returns:
        list[ExpenseSplit]: One split per member, in the order given.
    """
    share = calculate_equal_split(amount, len(user_ids))
    return [ExpenseSplit(user_id=user_id, amount=share) for user_id in user_ids]


def validate_custom_splits(splits: Iterable[ExpenseSplit], total: Number) -> bool:
    """Return True if the split amounts add up to total (to within one cent)."""
    split_sum = sum((split.amount for split in splits), Decimal("0"))
    return amounts_match(split_sum, total)


def build_splits(
    split_type,
    amount: Number,
    user_ids: Sequence[str],
    custom_splits: Optional[Iterable] = None
) -> list[ExpenseSplit]:
    """
    Build the splits for an expense.

    Args:
        split_type: SplitType or its string value ("equal", "custom", "none").
        amount: Total amount of the expense.
        user_ids: Members an equal split is divided among.
        custom_splits: ExpenseSplit objects or dicts with user_id and amount
            (required for custom splits).

    Returns:
        list[ExpenseSplit]: The splits to attach to the expense.

    Raises:
        ValueError: If the split type is unknown, custom splits are missing,
            or custom splits do not add up to the amount.
    """
    try:
        split_type = SplitType(split_type)
    except ValueError:
        valid = ", ".join(t.value for t in SplitType)
        raise ValueError(f"split_type must be one of: {valid}, got: {split_type}")

    if split_type is SplitType.NONE:
        return []

    if split_type is SplitType.EQUAL:
        if not user_ids:
            raise ValueError("an equal split needs at least one member")
        return build_equal_splits(amount, user_ids)

    # Custom split
    if not custom_splits:
        raise ValueError("custom_splits must be a non-empty list for a custom split")

    splits = [
        split if isinstance(split, ExpenseSplit) else ExpenseSplit.model_validate(split)
        for split in custom_splits
    ]
    for split in splits:
        if split.amount < 0:
            raise ValueError(f"split amount for '{split.user_id}' cannot be negative")

    if not validate_custom_splits(splits, amount):
        split_sum = round_money(sum((s.amount for s in splits), Decimal("0")))
        raise ValueError(
            f"custom splits total {split_sum} does not match expense amount "
            f"{round_money(amount)}"
        )

    return splits


def calculate_per_person_budget(
    categories: Iterable[BudgetCategory],
    member_count: int,
    user_id: Optional[str] = None
) -> Decimal:
    """
    Calculate one member's planned share across budget categories.

    Args:
        categories: Planned budget categories.
        member_count: Number of trip members.
        user_id: Member whose custom shares should be counted. Custom
            categories contribute nothing when this is None.

    Returns:
        Decimal: The member's total planned share (0 when there are no members).
    """
    if member_count <= 0:
        return Decimal("0.00")

    total = Decimal("0")
    for category in categories:
        if category.split_type is SplitType.EQUAL:
            total += calculate_equal_split(category.estimated_cost, member_count)
        elif category.split_type is SplitType.CUSTOM and user_id:
            for split in category.custom_splits:
                if split.user_id == user_id:
                    total += split.amount
                    break

    return round_money(total)


def calculate_total_budget(categories: Iterable[BudgetCategory]) -> Decimal:
    """Sum the estimated cost of every category, rounded to cents."""
    return round_money(
        sum((c.estimated_cost for c in categories), Decimal("0"))
    )
