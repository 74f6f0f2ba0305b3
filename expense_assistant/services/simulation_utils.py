"""Simulation helpers: turn candidate expenses into a budget-impact preview.

The analyzer loads the user's budgets for the categories touched by the
simulated expenses, pulls the recorded expenses of each budget's current
period, and reports usage as if the simulated expenses had been recorded
too. Nothing is persisted.
"""

from __future__ import annotations
import logging
from datetime import datetime
from typing import List, Optional, Sequence

from expense_assistant.db.dal import Database
from expense_assistant.models.constants import (
    SIMULATED_EXPENSE_DESCRIPTION,
    TEMP_SIMULATION_ID,
)
from expense_assistant.models.expense import Expense
from expense_assistant.models.simulation import (
    AnalyzeExpenseIn,
    BudgetStatus,
    SimulatedExpense,
)
from expense_assistant.services.budget_utils import (
    budget_from_row,
    calculate_budget_usage,
    expense_from_row,
    get_current_budget_period,
)
from expense_assistant.services.dates import parse_timestamp, utcnow

logger = logging.getLogger("app.simulation")


def build_simulated_expenses(
    expenses: Sequence[AnalyzeExpenseIn],
) -> List[SimulatedExpense]:
    """Map validated request items to transient SimulatedExpense records."""
    return [
        SimulatedExpense(
            id=f"temp-{index}",
            simulation_id=TEMP_SIMULATION_ID,
            amount=expense.amount,
            description=expense.description or SIMULATED_EXPENSE_DESCRIPTION,
            category=expense.category,
            date=parse_timestamp(expense.date),
        )
        for index, expense in enumerate(expenses)
    ]


def _as_expense_records(
    simulated: Sequence[SimulatedExpense], user_id: str, now: datetime
) -> List[Expense]:
    return [
        Expense(
            id=f"sim-{index}",
            user_id=user_id,
            amount=float(e.amount),
            description="Simulated: " + (e.description or "Expense"),
            category=e.category,
            date=e.date,
            created_at=now,
            updated_at=now,
        )
        for index, e in enumerate(simulated)
    ]


def analyze_budget_impact(
    db: Database,
    simulated_expenses: Sequence[SimulatedExpense],
    user_id: str,
    now: Optional[datetime] = None,
) -> List[BudgetStatus]:
    """Return one BudgetStatus per budget matching a simulated category.

    An empty list means the user has no budget for any of the categories.
    """
    now = now or utcnow()
    categories = list(dict.fromkeys(e.category for e in simulated_expenses))

    rows = db.list_budgets_for_categories(user_id, categories)
    if not rows:
        logger.debug("no budgets for categories %s", categories)
        return []

    statuses: List[BudgetStatus] = []
    for row in rows:
        budget = budget_from_row(row)
        current = get_current_budget_period(budget, now)

        actual = [
            expense_from_row(r)
            for r in db.list_expenses_in_period(
                user_id, budget.category, current.start, current.end
            )
        ]
        simulated = _as_expense_records(
            [e for e in simulated_expenses if e.category == budget.category],
            user_id,
            now,
        )

        usage = calculate_budget_usage(budget, actual + simulated, now)
        statuses.append(
            BudgetStatus(
                spent=usage.spent,
                limit=usage.limit,
                remaining=usage.remaining,
                percentage=usage.percentage,
                is_over_budget=usage.is_over_budget,
                is_active=usage.is_active,
                period_start=usage.period_start,
                period_end=usage.period_end,
                expenses=usage.expenses,
                budget=budget,
            )
        )

    logger.info(
        "analyzed %d simulated expense(s) against %d budget(s)",
        len(simulated_expenses),
        len(statuses),
    )
    return statuses


class BudgetImpactAnalyzer:
    """Injectable wrapper around `analyze_budget_impact` bound to a Database."""

    def __init__(self, db: Database):
        self.db = db

    def analyze(
        self, simulated_expenses: Sequence[SimulatedExpense], user_id: str
    ) -> List[BudgetStatus]:
        return analyze_budget_impact(self.db, simulated_expenses, user_id)
