from __future__ import annotations
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from expense_assistant.services.dates import parse_timestamp

from .base import CamelModel
from .budget import Budget
from .expense import Expense


class AnalyzeExpenseIn(BaseModel):
    """One candidate expense in an analysis request.

    ``amount`` accepts a JSON number or a numeric string; both are coerced to
    float. ``date`` stays a string here and is parsed when the transient
    SimulatedExpense is built.
    """

    amount: float = Field(..., allow_inf_nan=False)
    description: Optional[str] = None
    category: str = Field(..., min_length=1)
    date: str = Field(..., min_length=1)

    @field_validator("amount", mode="before")
    @classmethod
    def string_or_number(cls, v):
        # bool is an int subclass; JSON true/false is not an amount
        if isinstance(v, bool):
            raise ValueError("amount must be a number or a numeric string")
        return v

    @field_validator("description", mode="before")
    @classmethod
    def omitted_not_null(cls, v):
        if v is None:
            raise ValueError("description must be a string when provided")
        return v

    @field_validator("date")
    @classmethod
    def parseable_date(cls, v: str) -> str:
        try:
            parse_timestamp(v)
        except (ValueError, OverflowError):
            raise ValueError("date must be an ISO-8601 date or datetime") from None
        return v


class AnalyzeRequest(BaseModel):
    expenses: List[AnalyzeExpenseIn] = Field(..., min_length=1)


class SimulatedExpense(BaseModel):
    """Hypothetical, non-persisted expense used to preview budget impact."""

    id: str
    simulation_id: str
    amount: float
    description: str
    category: str
    date: datetime


class BudgetStatus(CamelModel):
    spent: float
    limit: float
    remaining: float
    percentage: float
    is_over_budget: bool
    is_active: bool
    period_start: datetime
    period_end: datetime
    expenses: List[Expense]
    budget: Budget
