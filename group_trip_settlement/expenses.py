"""
Expenses Module

This module validates raw expense input and builds the Expense objects
the balance calculator consumes.

Features:
    - Validate payer, amount, description, category and date
    - Build equal, custom or empty splits
    - Reject custom splits that do not add up to the amount
    - Reject splits for people who are not trip members

Functions:
    create_expense: Validate input and build an Expense.
"""

import logging
import uuid
from datetime import datetime
from typing import Iterable, Optional

from group_trip_settlement.models import Expense, Member, SplitType
from group_trip_settlement.money import MONEY_EPSILON, Number, to_decimal
from group_trip_settlement.splits import build_splits

logger = logging.getLogger(__name__)

DESCRIPTION_MIN_LENGTH = 3
DESCRIPTION_MAX_LENGTH = 200
CATEGORY_MAX_LENGTH = 50


def _validate_date(date_str: str, field_name: str) -> bool:
    """
    Validate date string format (YYYY-MM-DD).

    Args:
        date_str: Date string to validate.
        field_name: Name of the field for error messages.

    Returns:
        bool: True if valid.

    Raises:
        ValueError: If date format is invalid.
    """
    try:
        datetime.strptime(date_str, "%Y-%m-%d")
        return True
    except (TypeError, ValueError):
        raise ValueError(f"{field_name} must be in YYYY-MM-DD format, got: {date_str}")


def _validate_non_empty_string(value: str, field_name: str) -> bool:
    """
    Validate that a string is non-empty.

    Raises:
        ValueError: If string is empty or not a string.
    """
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{field_name} must be a non-empty string")
    return True


def _validate_length(value: str, field_name: str, min_length: int, max_length: int) -> bool:
    length = len(value)
    if length < min_length or length > max_length:
        raise ValueError(
            f"{field_name} must be between {min_length} and {max_length} characters"
        )
    return True


def create_expense(
    paid_by: str,
    amount: Number,
    members: Iterable[Member],
    split_type=SplitType.EQUAL,
    custom_splits: Optional[Iterable] = None,
    expense_id: Optional[str] = None,
    description: Optional[str] = None,
    category: Optional[str] = None,
    date: Optional[str] = None
) -> Expense:
    """
    Validate expense input and build an Expense.

    Args:
        paid_by: Member ID of who paid.
        amount: Amount of the expense (must be at least 0.01).
        members: Trip roster; equal splits cover every member.
        split_type: "equal", "custom" or "none".
        custom_splits: Per-member amounts for a custom split.
        expense_id: ID to use; a new UUID is generated if omitted.
        description: Optional description (3-200 characters).
        category: Optional category (up to 50 characters).
        date: Optional date (YYYY-MM-DD).

    Returns:
        Expense: The validated expense with its splits.

    Raises:
        ValueError: If any input validation fails.

    Notes:
        - Payer does NOT have to hold a split
        - Custom splits must add up to the amount (one-cent tolerance)
    """
    _validate_non_empty_string(paid_by, "paid_by")

    # Amount must be at least one cent
    amount = to_decimal(amount)
    if amount < MONEY_EPSILON:
        raise ValueError(f"amount must be greater than 0, got: {amount}")

    if description is not None:
        _validate_length(description, "description", DESCRIPTION_MIN_LENGTH, DESCRIPTION_MAX_LENGTH)
        description = description.strip()

    if category is not None and len(category) > CATEGORY_MAX_LENGTH:
        raise ValueError(f"category must be at most {CATEGORY_MAX_LENGTH} characters")

    if date is not None:
        _validate_date(date, "date")

    # Duplicate roster IDs count once, in first-seen order
    member_ids = list(dict.fromkeys(member.id for member in members))
    known_ids = set(member_ids)

    if paid_by not in known_ids:
        raise ValueError(f"paid_by '{paid_by}' is not a member of this trip")

    splits = build_splits(split_type, amount, member_ids, custom_splits)

    for split in splits:
        if split.user_id not in known_ids:
            raise ValueError(f"split member '{split.user_id}' is not a member of this trip")

    expense = Expense(
        id=expense_id or str(uuid.uuid4()),
        amount=amount,
        paid_by=paid_by,
        splits=splits,
        description=description,
        category=category,
        date=date
    )
    logger.debug(
        "Created expense %s: %s paid %s split %d way(s)",
        expense.id, paid_by, amount, len(splits)
    )
    return expense
