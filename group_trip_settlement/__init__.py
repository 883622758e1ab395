"""
Group Trip Settlement

Net balances and settle-up payments for shared group-trip expenses.

    from group_trip_settlement import calculate_balances, calculate_settlements

    balances = calculate_balances(expenses, members)
    settlements = calculate_settlements(balances)
"""

from group_trip_settlement.balances import (
    calculate_balances,
    explain_all_balances,
    explain_balance,
)
from group_trip_settlement.expenses import create_expense
from group_trip_settlement.models import (
    Balance,
    BudgetCategory,
    Expense,
    ExpenseSplit,
    Member,
    PaymentProfile,
    Settlement,
    SplitType,
)
from group_trip_settlement.money import (
    MONEY_EPSILON,
    amounts_match,
    calculate_equal_split,
    format_currency,
    parse_currency,
    round_money,
)
from group_trip_settlement.settlement import apply_settlements, calculate_settlements

__version__ = "1.0.0"
