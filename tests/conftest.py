import pytest

from group_trip_settlement.config import get_settings
from group_trip_settlement.models import Expense, Member


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Each test starts from default settings."""
    for name in ("TRIP_CURRENCY_SYMBOL", "TRIP_SETTLEMENT_NOTE", "TRIP_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def members():
    """Three trip members."""
    return [
        Member(id="A", name="Alice"),
        Member(id="B", name="Bob"),
        Member(id="C", name="Carol"),
    ]


@pytest.fixture
def expenses():
    """Alice pays 90 and Bob pays 30, each split three ways."""
    return [
        Expense(
            id="E1",
            amount=90,
            paid_by="A",
            splits=[
                {"user_id": "A", "amount": 30},
                {"user_id": "B", "amount": 30},
                {"user_id": "C", "amount": 30},
            ],
            description="Cabin deposit",
        ),
        Expense(
            id="E2",
            amount=30,
            paid_by="B",
            splits=[
                {"user_id": "A", "amount": 10},
                {"user_id": "B", "amount": 10},
                {"user_id": "C", "amount": 10},
            ],
            description="Groceries",
        ),
    ]


@pytest.fixture
def trip_data():
    """The same trip in the JSON file format."""
    return {
        "title": "Lake Weekend",
        "members": [
            {"id": "A", "name": "Alice"},
            {"id": "B", "name": "Bob"},
            {"id": "C", "name": "Carol"},
        ],
        "expenses": [
            {
                "id": "E1",
                "amount": 90,
                "paid_by": "A",
                "splits": [
                    {"user_id": "A", "amount": 30},
                    {"user_id": "B", "amount": 30},
                    {"user_id": "C", "amount": 30},
                ],
            },
            {
                "id": "E2",
                "amount": 30,
                "paidBy": "B",
                "expense_splits": [
                    {"userId": "A", "amount": 10},
                    {"userId": "B", "amount": 10},
                    {"userId": "C", "amount": 10},
                ],
            },
        ],
    }
