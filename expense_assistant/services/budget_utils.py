"""Budget period and usage calculations.

Framework-agnostic helpers shared by the budget-impact analyzer and any
future budget endpoints. Every function takes an explicit ``now`` (naive
UTC) so results are reproducible in tests; callers default it to
``utcnow()``.

Periods are half-open ``[start, end)`` intervals.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Sequence

from dateutil.relativedelta import relativedelta

from expense_assistant.models.budget import Budget
from expense_assistant.models.expense import Expense
from expense_assistant.services.dates import parse_timestamp, utcnow


@dataclass(frozen=True)
class BudgetPeriod:
    start: datetime
    end: datetime

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment < self.end


@dataclass(frozen=True)
class BudgetUsage:
    spent: float
    limit: float
    remaining: float
    percentage: float
    is_over_budget: bool
    is_active: bool
    period_start: datetime
    period_end: datetime
    expenses: List[Expense]


def budget_from_row(row: Dict[str, Any]) -> Budget:
    return Budget(
        id=row["id"],
        user_id=row["user_id"],
        category=row["category"],
        limit=float(row["limit_amount"]),
        period=row["period"],
        start_date=parse_timestamp(row["start_date"]),
        end_date=parse_timestamp(row["end_date"]) if row.get("end_date") else None,
        created_at=parse_timestamp(row["created_at"]),
        updated_at=parse_timestamp(row["updated_at"]),
    )


def expense_from_row(row: Dict[str, Any]) -> Expense:
    return Expense(
        id=row["id"],
        user_id=row["user_id"],
        amount=float(row["amount"]),
        description=row.get("description") or "",
        category=row["category"],
        date=parse_timestamp(row["date"]),
        created_at=parse_timestamp(row["created_at"]),
        updated_at=parse_timestamp(row["updated_at"]),
    )


def is_budget_active(budget: Budget, now: Optional[datetime] = None) -> bool:
    now = now or utcnow()
    if budget.end_date is not None:
        return budget.start_date <= now <= budget.end_date
    return now >= budget.start_date


def _step(period: str) -> relativedelta:
    if period == "daily":
        return relativedelta(days=1)
    if period == "weekly":
        return relativedelta(weeks=1)
    return relativedelta(months=1)


def get_current_budget_period(
    budget: Budget, now: Optional[datetime] = None
) -> BudgetPeriod:
    """Return the period of ``budget`` that contains ``now``.

    Budgets that have not started yet report their first period. Monthly
    arithmetic clamps the day of month (Jan 31 + 1 month = Feb 28/29). The
    period end never runs past the budget's end date.
    """
    now = now or utcnow()
    budget_start = budget.start_date
    period = budget.period.lower()

    if now < budget_start:
        return BudgetPeriod(budget_start, budget_start + _step(period))

    if period == "daily":
        start = datetime(now.year, now.month, now.day)
        end = start + timedelta(days=1)
    elif period == "weekly":
        weeks_since_start = (now - budget_start).days // 7
        start = budget_start + timedelta(weeks=weeks_since_start)
        end = start + timedelta(weeks=1)
    elif period == "monthly":
        months_since_start = (now.year - budget_start.year) * 12 + (
            now.month - budget_start.month
        )
        start = budget_start + relativedelta(months=months_since_start)
        # Day-of-month clamping can push the start past now; step back one month.
        if start > now:
            start = budget_start + relativedelta(months=months_since_start - 1)
        end = start + relativedelta(months=1)
    else:
        start = datetime(now.year, now.month, 1)
        end = start + relativedelta(months=1)

    if budget.end_date is not None and end > budget.end_date:
        end = budget.end_date

    return BudgetPeriod(start, end)


def calculate_budget_usage(
    budget: Budget, expenses: Sequence[Expense], now: Optional[datetime] = None
) -> BudgetUsage:
    now = now or utcnow()
    current = get_current_budget_period(budget, now)

    period_expenses = [
        e
        for e in expenses
        if e.category == budget.category and current.contains(e.date)
    ]
    spent = sum(e.amount for e in period_expenses)
    limit = float(budget.limit)
    percentage = (spent / limit) * 100 if limit > 0 else 0.0

    return BudgetUsage(
        spent=spent,
        limit=limit,
        remaining=limit - spent,
        percentage=min(percentage, 100.0),
        is_over_budget=spent > limit,
        is_active=is_budget_active(budget, now),
        period_start=current.start,
        period_end=current.end,
        expenses=period_expenses,
    )
