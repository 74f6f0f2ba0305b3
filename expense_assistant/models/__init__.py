"""Pydantic domain models for the Expense Assistant API."""

from .constants import (
    BUDGET_PERIODS,
    SESSION_COOKIE_NAMES,
)  # re-export
from .budget import Budget
from .expense import Expense
from .session import Session, SessionUser
from .simulation import (
    AnalyzeExpenseIn,
    AnalyzeRequest,
    BudgetStatus,
    SimulatedExpense,
)

__all__ = [
    "BUDGET_PERIODS",
    "SESSION_COOKIE_NAMES",
    "Budget",
    "Expense",
    "Session",
    "SessionUser",
    "AnalyzeExpenseIn",
    "AnalyzeRequest",
    "BudgetStatus",
    "SimulatedExpense",
]
