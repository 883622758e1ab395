"""
Models Module

Pydantic models for the data that flows through the settlement engine.

Data Model:
    Member - a trip participant (id, name, optional payment profile)
    ExpenseSplit - one member's share of one expense
    Expense - a shared cost with its payer and splits
    Balance - derived per-member totals (output only)
    Settlement - one suggested payment between two members (output only)
    PaymentProfile - a member's payment app handles
    BudgetCategory - a planned cost and how it is split

Money fields are Decimal. Incoming floats are converted through str() so
values like 0.1 do not carry binary float noise.
"""

from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from group_trip_settlement.money import to_decimal


class SplitType(str, Enum):
    """How an expense or budget category is divided among members."""
    EQUAL = "equal"
    CUSTOM = "custom"
    NONE = "none"


class PaymentProfile(BaseModel):
    """Payment app handles for a member. Any of them may be missing."""
    venmo_handle: Optional[str] = None
    zelle_email: Optional[str] = None
    cashapp_handle: Optional[str] = None


class Member(BaseModel):
    """
    A trip participant.

    Attributes:
        id (str): Unique member identifier.
        name (str): Display name.
        payment_profile (PaymentProfile | None): Optional payment handles.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., min_length=1, description="Member ID")
    name: str = Field(..., description="Display name")
    payment_profile: Optional[PaymentProfile] = Field(
        None,
        validation_alias=AliasChoices("payment_profile", "paymentProfile")
    )


class ExpenseSplit(BaseModel):
    """One member's assigned share of an expense."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    user_id: str = Field(..., validation_alias=AliasChoices("user_id", "userId"))
    amount: Decimal

    @field_validator("amount", mode="before")
    @classmethod
    def coerce_amount(cls, value):
        return to_decimal(value)


class Expense(BaseModel):
    """
    A single shared cost.

    Attributes:
        id (str): Unique expense identifier.
        amount (Decimal): Total amount of the expense.
        paid_by (str): Member ID of the payer.
        splits (tuple[ExpenseSplit, ...]): Per-member shares.
        description (str | None): Optional description.
        category (str | None): Optional category label.
        date (str | None): Optional date (YYYY-MM-DD).

    Notes:
        - Frozen: the calculator never changes an expense
        - Splits are expected to sum to amount but this is not enforced here
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    amount: Decimal
    paid_by: str = Field(..., validation_alias=AliasChoices("paid_by", "paidBy"))
    splits: tuple[ExpenseSplit, ...] = Field(
        default=(),
        validation_alias=AliasChoices("splits", "expense_splits")
    )
    description: Optional[str] = None
    category: Optional[str] = None
    date: Optional[str] = None

    @field_validator("amount", mode="before")
    @classmethod
    def coerce_amount(cls, value):
        return to_decimal(value)


class Balance(BaseModel):
    """
    A member's net position for a trip.

    net_balance = total_paid - total_owed
        - Positive = member is owed money
        - Negative = member owes money
    """
    user_id: str
    user_name: str
    total_paid: Decimal = Decimal("0.00")
    total_owed: Decimal = Decimal("0.00")
    net_balance: Decimal = Decimal("0.00")

    @field_validator("total_paid", "total_owed", "net_balance", mode="before")
    @classmethod
    def coerce_amounts(cls, value):
        return to_decimal(value)

    def to_dict(self) -> dict:
        """Convert balance to a JSON-friendly dictionary."""
        return {
            "user_id": self.user_id,
            "user_name": self.user_name,
            "total_paid": float(self.total_paid),
            "total_owed": float(self.total_owed),
            "net_balance": float(self.net_balance)
        }


class Settlement(BaseModel):
    """One suggested payment from a debtor to a creditor."""
    model_config = ConfigDict(populate_by_name=True)

    from_user: str = Field(..., alias="from")
    from_name: str
    to_user: str = Field(..., alias="to")
    to_name: str
    amount: Decimal

    @field_validator("amount", mode="before")
    @classmethod
    def coerce_amount(cls, value):
        return to_decimal(value)

    def to_dict(self) -> dict:
        """Convert settlement to a JSON-friendly dictionary."""
        return {
            "from": self.from_user,
            "from_name": self.from_name,
            "to": self.to_user,
            "to_name": self.to_name,
            "amount": float(self.amount)
        }

    def __str__(self) -> str:
        return f"{self.from_name} pays {self.to_name} {self.amount}"


class BudgetCategory(BaseModel):
    """A planned trip cost and how it is split among members."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    estimated_cost: Decimal = Field(
        ...,
        validation_alias=AliasChoices("estimated_cost", "estimatedCost")
    )
    split_type: SplitType = Field(
        SplitType.EQUAL,
        validation_alias=AliasChoices("split_type", "splitType")
    )
    custom_splits: list[ExpenseSplit] = Field(
        default_factory=list,
        validation_alias=AliasChoices("custom_splits", "customSplits")
    )

    @field_validator("estimated_cost", mode="before")
    @classmethod
    def coerce_cost(cls, value):
        return to_decimal(value)
